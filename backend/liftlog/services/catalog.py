from __future__ import annotations
import logging
from typing import Any

from sqlalchemy.orm import Session

from liftlog.errors import NotFoundError, ValidationError
from liftlog.models import BodyPart, Difficulty, Exercise
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.schemas.exercise import BodyPartStat, ExerciseStats

log = logging.getLogger(__name__)

B, D = BodyPart, Difficulty

DEFAULT_EXERCISES: list[dict[str, Any]] = [
    # chest
    {"name": "Bench Press", "body_part": B.chest, "difficulty": D.intermediate, "description": "Classic compound chest press"},
    {"name": "Incline Bench Press", "body_part": B.chest, "difficulty": D.intermediate, "description": "Upper chest emphasis"},
    {"name": "Dumbbell Fly", "body_part": B.chest, "difficulty": D.intermediate, "description": "Chest stretch under load"},
    {"name": "Push-up", "body_part": B.chest, "difficulty": D.beginner, "description": "Bodyweight chest training"},
    # back
    {"name": "Pull-up", "body_part": B.back, "difficulty": D.advanced, "description": "Bodyweight back training"},
    {"name": "Barbell Row", "body_part": B.back, "difficulty": D.intermediate, "description": "Back thickness"},
    {"name": "Lat Pulldown", "body_part": B.back, "difficulty": D.beginner, "description": "Back width"},
    {"name": "Deadlift", "body_part": B.back, "difficulty": D.advanced, "description": "Full-body compound lift"},
    # shoulders
    {"name": "Overhead Press", "body_part": B.shoulders, "difficulty": D.intermediate, "description": "Overall shoulder strength"},
    {"name": "Lateral Raise", "body_part": B.shoulders, "difficulty": D.beginner, "description": "Side delts"},
    {"name": "Front Raise", "body_part": B.shoulders, "difficulty": D.beginner, "description": "Front delts"},
    {"name": "Reverse Fly", "body_part": B.shoulders, "difficulty": D.intermediate, "description": "Rear delts"},
    # legs
    {"name": "Squat", "body_part": B.legs, "difficulty": D.intermediate, "description": "The king of leg exercises"},
    {"name": "Leg Press", "body_part": B.legs, "difficulty": D.beginner, "description": "Machine-guided leg training"},
    {"name": "Leg Curl", "body_part": B.legs, "difficulty": D.beginner, "description": "Hamstrings"},
    {"name": "Calf Raise", "body_part": B.legs, "difficulty": D.beginner, "description": "Calves"},
    # arms
    {"name": "Biceps Curl", "body_part": B.arms, "difficulty": D.beginner, "description": "Biceps"},
    {"name": "Dips", "body_part": B.arms, "difficulty": D.intermediate, "description": "Triceps"},
    {"name": "Hammer Curl", "body_part": B.arms, "difficulty": D.beginner, "description": "Brachialis"},
    {"name": "Cable Pushdown", "body_part": B.arms, "difficulty": D.intermediate, "description": "Triceps shaping"},
    # core
    {"name": "Crunch", "body_part": B.core, "difficulty": D.beginner, "description": "Basic abdominal work"},
    {"name": "Plank", "body_part": B.core, "difficulty": D.beginner, "description": "Core stability"},
    {"name": "Russian Twist", "body_part": B.core, "difficulty": D.intermediate, "description": "Obliques"},
    {"name": "Hanging Leg Raise", "body_part": B.core, "difficulty": D.advanced, "description": "Lower abs"},
]

class ExerciseCatalog:
    def __init__(self, db: Session):
        self.repo = ExerciseRepository(db)

    def get(self, exercise_id: int) -> Exercise:
        exercise = self.repo.get(exercise_id)
        if exercise is None:
            raise NotFoundError("exercise not found")
        return exercise

    def create(self, fields: dict[str, Any]) -> Exercise:
        exercise = self.repo.create(**fields)
        log.info("exercise created id=%s name=%s", exercise.id, exercise.name)
        return exercise

    def update(self, exercise_id: int, fields: dict[str, Any]) -> Exercise:
        exercise = self.get(exercise_id)
        for key in ("name", "body_part", "difficulty", "recommended_sets", "recommended_reps"):
            if key in fields and fields[key] is None:
                raise ValidationError(f"{key} cannot be null")
        if fields.get("description", "") is None:
            fields["description"] = ""
        return self.repo.update(exercise, **fields)

    def delete(self, exercise_id: int) -> None:
        exercise = self.get(exercise_id)
        self.repo.delete(exercise)
        log.info("exercise deleted id=%s", exercise_id)

    def search(self, keyword: str) -> list[Exercise]:
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValidationError("keyword is required")
        return self.repo.search(keyword)

    def stats(self) -> ExerciseStats:
        grouped: dict[BodyPart, BodyPartStat] = {}
        for body_part, difficulty, count in self.repo.count_by_body_part():
            stat = grouped.setdefault(body_part, BodyPartStat(body_part=body_part, count=0, difficulties=[]))
            stat.count += count
            stat.difficulties.append(difficulty)
        return ExerciseStats(total_count=self.repo.count(), by_body_part=list(grouped.values()))

    def seed_defaults(self) -> list[Exercise]:
        """Insert the default exercises that are not in the catalog yet."""
        created = []
        for data in DEFAULT_EXERCISES:
            if self.repo.get_by_name(data["name"]) is not None:
                continue
            created.append(self.repo.create(**data, is_default=True))
        log.info("seeded %s default exercises", len(created))
        return created
