from liftlog.models.exercise import BodyPart, Difficulty, Exercise
from liftlog.models.workout import Workout, WorkoutStatus
from liftlog.models.exercise_log import ExerciseLog
from liftlog.models.workout_set import WorkoutSet

__all__ = [
    "BodyPart",
    "Difficulty",
    "Exercise",
    "ExerciseLog",
    "Workout",
    "WorkoutSet",
    "WorkoutStatus",
]
