import datetime as dt
from typing import Annotated
from pydantic import Field

from liftlog.models import WorkoutStatus
from liftlog.schemas.common import CamelModel, NotesStr
from liftlog.schemas.exercise import ExerciseBrief

Weight = Annotated[float, Field(ge=0)]
Reps = Annotated[int, Field(ge=1)]

# Requests

class WorkoutCreate(CamelModel):
    date: dt.datetime | dt.date | None = None
    notes: NotesStr = ""

class WorkoutUpdate(CamelModel):
    date: dt.datetime | dt.date | None = None
    start_time: dt.datetime | None = None
    end_time: dt.datetime | None = None
    duration: Annotated[int, Field(ge=0)] | None = None
    intensity: Annotated[float, Field(ge=0, le=10)] | None = None
    notes: NotesStr | None = None
    status: WorkoutStatus | None = None

class AddExerciseRequest(CamelModel):
    exercise_id: int

class AddSetRequest(CamelModel):
    # range is checked against the loaded workout, not here
    exercise_index: int
    weight: Weight
    reps: Reps

class SetPosition(CamelModel):
    exercise_index: int
    set_index: int

# Responses

class WorkoutSetRead(CamelModel):
    set_number: int
    weight: float
    reps: int
    completed: bool = False
    completed_at: dt.datetime | None = None

class ExerciseLogRead(CamelModel):
    exercise_id: int | None = None
    exercise: ExerciseBrief | None = None
    sets: list[WorkoutSetRead] = []
    notes: str = ""

class WorkoutRead(CamelModel):
    id: int
    username: str
    date: dt.datetime
    start_time: dt.datetime
    end_time: dt.datetime | None = None
    duration: int | None = None
    intensity: float | None = None
    notes: str = ""
    status: WorkoutStatus
    exercises: list[ExerciseLogRead] = []
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
