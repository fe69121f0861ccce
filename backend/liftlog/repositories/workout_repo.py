from __future__ import annotations
from datetime import date, datetime, time
from typing import Optional
from sqlalchemy import select
from liftlog.models import ExerciseLog, Workout
from liftlog.repositories.base import BaseRepository, Page

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    # READS
    def list_by_user(self, username: str, *, limit: int = 50, offset: int = 0) -> Page[Workout]:
        stmt = select(Workout).where(Workout.username == username)\
                              .order_by(Workout.date.desc(), Workout.id.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def list_since(self, username: str, since: datetime) -> list[Workout]:
        """Workouts dated on/after ``since``, most recent first."""
        stmt = select(Workout).where(Workout.username == username, Workout.date >= since)\
                              .order_by(Workout.date.desc(), Workout.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def list_since_with_exercise(self, username: str, exercise_id: int, since: datetime) -> list[Workout]:
        has_exercise = select(ExerciseLog.id).where(
            ExerciseLog.workout_id == Workout.id,
            ExerciseLog.exercise_id == exercise_id,
        ).exists()
        stmt = select(Workout).where(
            Workout.username == username,
            Workout.date >= since,
            has_exercise,
        ).order_by(Workout.date.desc(), Workout.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_by_date(self, username: str, day: date) -> Optional[Workout]:
        """First workout whose date falls inside the calendar day."""
        start = datetime.combine(day, time.min)
        end = datetime.combine(day, time.max)
        stmt = select(Workout).where(
            Workout.username == username,
            Workout.date >= start,
            Workout.date <= end,
        ).order_by(Workout.date.asc(), Workout.id.asc()).limit(1)
        return self.db.execute(stmt).scalars().first()
