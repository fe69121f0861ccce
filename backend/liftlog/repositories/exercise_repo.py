# liftlog/repositories/exercise_repo.py
from __future__ import annotations
from typing import Any, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from liftlog.errors import ValidationError
from liftlog.models import BodyPart, Difficulty, Exercise
from liftlog.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    # READS
    def get_by_name(self, name: str) -> Optional[Exercise]:
        stmt = select(Exercise).where(Exercise.name == name)
        return self.db.execute(stmt).scalar_one_or_none()

    def list(
        self,
        *,
        body_part: BodyPart | None = None,
        difficulty: Difficulty | None = None,
        limit: int = 100,
    ) -> list[Exercise]:
        stmt = select(Exercise)
        if body_part is not None:
            stmt = stmt.where(Exercise.body_part == body_part)
        if difficulty is not None:
            stmt = stmt.where(Exercise.difficulty == difficulty)
        stmt = stmt.order_by(Exercise.name.asc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def search(self, keyword: str) -> list[Exercise]:
        # % and _ in the keyword match literally
        escaped = keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        stmt = select(Exercise).where(Exercise.name.ilike(f"%{escaped}%", escape="\\"))\
                              .order_by(Exercise.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(Exercise)).scalar_one()

    def count_by_body_part(self) -> list[tuple[BodyPart, Difficulty, int]]:
        stmt = select(Exercise.body_part, Exercise.difficulty, func.count())\
            .group_by(Exercise.body_part, Exercise.difficulty)\
            .order_by(Exercise.body_part, Exercise.difficulty)
        return [tuple(row) for row in self.db.execute(stmt).all()]

    # WRITES
    def create(self, **fields: Any) -> Exercise:
        exercise = Exercise(**fields)
        try:
            return self.add_and_refresh(exercise)
        except IntegrityError:
            self.db.rollback()
            # Re-raise a clean marker the boundary can map to 400
            raise ValidationError(f"exercise '{fields.get('name')}' already exists")

    def update(self, exercise: Exercise, **fields: Any) -> Exercise:
        for key, value in fields.items():
            setattr(exercise, key, value)
        try:
            return self.save(exercise)
        except IntegrityError:
            self.db.rollback()
            raise ValidationError(f"exercise '{fields.get('name')}' already exists")
