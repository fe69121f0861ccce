from typing import Annotated
from datetime import datetime
from pydantic import Field, StringConstraints

from liftlog.models import BodyPart, Difficulty
from liftlog.schemas.common import CamelModel

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
PosInt = Annotated[int, Field(ge=1)]

class ExerciseCreate(CamelModel):
    name: NameStr
    body_part: BodyPart
    difficulty: Difficulty
    description: str = ""
    recommended_sets: PosInt = 3
    recommended_reps: PosInt = 12
    is_default: bool = False

class ExerciseUpdate(CamelModel):
    name: NameStr | None = None
    body_part: BodyPart | None = None
    difficulty: Difficulty | None = None
    description: str | None = None
    recommended_sets: PosInt | None = None
    recommended_reps: PosInt | None = None

class ExerciseBrief(CamelModel):
    id: int
    name: str
    body_part: BodyPart
    difficulty: Difficulty

class ExerciseRead(ExerciseBrief):
    description: str = ""
    recommended_sets: int
    recommended_reps: int
    is_default: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

class BodyPartStat(CamelModel):
    body_part: BodyPart
    count: int
    difficulties: list[Difficulty]

class ExerciseStats(CamelModel):
    total_count: int
    by_body_part: list[BodyPartStat]
