# liftlog/services/workout_mutator.py
"""
State transitions on a single workout.

Each operation loads the workout with its logs and sets, changes it in memory
and commits the whole aggregate. There is no version check: two concurrent
mutations of the same workout race and the last commit wins.

Exercises and sets are addressed by list position (exerciseIndex/setIndex),
which is what the client shows. Ownership is checked by the HTTP layer before
any of these run.
"""
from __future__ import annotations
import logging
from datetime import date, datetime, time
from typing import Any, Callable

from sqlalchemy.orm import Session

from liftlog.errors import IndexOutOfRangeError, NotFoundError, ValidationError
from liftlog.models import ExerciseLog, Workout, WorkoutSet, WorkoutStatus
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.services.intensity import compute_intensity, round_half_up

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]

UPDATABLE_FIELDS = frozenset(
    {"notes", "date", "start_time", "end_time", "duration", "intensity", "status"}
)

def to_local_naive(value: datetime | date) -> datetime:
    """Store everything as naive server-local time."""
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value

def duration_minutes(start: datetime, end: datetime) -> int:
    return int(round_half_up((end - start).total_seconds() / 60))

class WorkoutMutator:
    def __init__(self, db: Session, *, clock: Clock = datetime.now):
        self.db = db
        self.clock = clock
        self.workouts = WorkoutRepository(db)
        self.exercises = ExerciseRepository(db)

    # helpers
    def load(self, workout_id: int) -> Workout:
        workout = self.workouts.get(workout_id)
        if workout is None:
            raise NotFoundError("workout not found")
        return workout

    @staticmethod
    def _exercise_log(workout: Workout, exercise_index: int) -> ExerciseLog:
        if exercise_index < 0 or exercise_index >= len(workout.exercises):
            raise IndexOutOfRangeError("exercise index out of range")
        return workout.exercises[exercise_index]

    @classmethod
    def _set(cls, workout: Workout, exercise_index: int, set_index: int) -> tuple[ExerciseLog, WorkoutSet]:
        exercise_log = cls._exercise_log(workout, exercise_index)
        if set_index < 0 or set_index >= len(exercise_log.sets):
            raise IndexOutOfRangeError("set index out of range")
        return exercise_log, exercise_log.sets[set_index]

    # transitions
    def create(self, username: str, date: datetime | date | None = None, notes: str = "") -> Workout:
        now = self.clock()
        workout = Workout(
            username=username,
            date=to_local_naive(date) if date is not None else now,
            start_time=now,
            notes=notes or "",
            status=WorkoutStatus.in_progress,
        )
        workout = self.workouts.add_and_refresh(workout)
        log.info("workout created id=%s username=%s", workout.id, username)
        return workout

    def add_exercise(self, workout_id: int, exercise_id: int) -> Workout:
        workout = self.load(workout_id)
        if self.exercises.get(exercise_id) is None:
            raise NotFoundError("exercise not found")
        workout.exercises.append(ExerciseLog(exercise_id=exercise_id))
        log.info("exercise added workout=%s exercise=%s", workout_id, exercise_id)
        return self.workouts.save(workout)

    def add_set(self, workout_id: int, exercise_index: int, weight: float, reps: int) -> Workout:
        workout = self.load(workout_id)
        exercise_log = self._exercise_log(workout, exercise_index)
        if weight < 0:
            raise ValidationError("weight must be >= 0")
        if reps < 1:
            raise ValidationError("reps must be >= 1")

        exercise_log.sets.append(
            WorkoutSet(
                set_number=len(exercise_log.sets) + 1,
                weight=weight,
                reps=reps,
                completed=False,
            )
        )
        log.info("set added workout=%s exercise_index=%s", workout_id, exercise_index)
        return self.workouts.save(workout)

    def complete_set(self, workout_id: int, exercise_index: int, set_index: int) -> Workout:
        workout = self.load(workout_id)
        _, workout_set = self._set(workout, exercise_index, set_index)
        # re-completing only refreshes the timestamp
        workout_set.completed = True
        workout_set.completed_at = self.clock()
        return self.workouts.save(workout)

    def remove_set(self, workout_id: int, exercise_index: int, set_index: int) -> Workout:
        workout = self.load(workout_id)
        exercise_log, _ = self._set(workout, exercise_index, set_index)
        exercise_log.sets.pop(set_index)
        for number, workout_set in enumerate(exercise_log.sets, start=1):
            workout_set.set_number = number
        log.info("set removed workout=%s exercise_index=%s set_index=%s", workout_id, exercise_index, set_index)
        return self.workouts.save(workout)

    def complete_workout(self, workout_id: int) -> Workout:
        workout = self.load(workout_id)
        if workout.status == WorkoutStatus.completed:
            # allowed; completion data is recomputed from the first start_time
            log.warning("workout %s completed again", workout_id)
        workout.end_time = self.clock()
        workout.duration = duration_minutes(workout.start_time, workout.end_time)
        workout.intensity = compute_intensity(workout)
        workout.status = WorkoutStatus.completed
        log.info(
            "workout completed id=%s duration=%s intensity=%s",
            workout_id, workout.duration, workout.intensity,
        )
        return self.workouts.save(workout)

    def update(self, workout_id: int, fields: dict[str, Any]) -> Workout:
        """Raw field update; values are expected to be schema-checked already."""
        workout = self.load(workout_id)
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"fields cannot be updated: {', '.join(sorted(unknown))}")

        for key, value in fields.items():
            if key in ("date", "start_time") and value is None:
                raise ValidationError(f"{key} cannot be null")
            if key in ("date", "start_time", "end_time") and value is not None:
                value = to_local_naive(value)
            if key == "notes" and value is None:
                value = ""
            if key == "status" and value is None:
                raise ValidationError("status cannot be null")
            setattr(workout, key, value)
        return self.workouts.save(workout)

    def delete(self, workout_id: int) -> None:
        workout = self.load(workout_id)
        self.workouts.delete(workout)
        log.info("workout deleted id=%s", workout_id)
