import datetime as dt

from liftlog.models import BodyPart, WorkoutStatus
from liftlog.schemas.common import CamelModel
from liftlog.schemas.exercise import ExerciseBrief
from liftlog.schemas.workout import WorkoutSetRead

# /workouts/overview

class OverviewSummary(CamelModel):
    total_workouts: int = 0
    training_days: int = 0
    frequency_per_week: float = 0.0
    avg_intensity: float = 0.0
    total_duration: int = 0
    avg_duration: float = 0.0

class DailyPoint(CamelModel):
    date: dt.date
    workouts: int = 0
    avg_intensity: float = 0.0

class IntensityBuckets(CamelModel):
    low: int = 0
    medium: int = 0
    high: int = 0

class Overview(CamelModel):
    days: int
    summary: OverviewSummary
    daily_series: list[DailyPoint]
    body_part_counts: dict[str, int]
    intensity_buckets: IntensityBuckets

# /workouts/exercise-history/{exercise_id}

class SessionTotals(CamelModel):
    sets: int = 0
    reps: int = 0
    volume: float = 0.0

class SessionBests(CamelModel):
    weight: float = 0.0
    set_volume: float = 0.0

class HistoryEntry(CamelModel):
    workout_id: int
    date: dt.datetime
    status: WorkoutStatus
    sets: list[WorkoutSetRead]
    totals: SessionTotals
    bests: SessionBests

class TrendPoint(CamelModel):
    workout_id: int
    date: dt.datetime
    volume: float
    best_weight: float

class HistorySummary(CamelModel):
    total_workouts: int = 0
    total_sets: int = 0
    total_reps: int = 0
    total_volume: float = 0.0
    best_weight: float = 0.0
    best_set_volume: float = 0.0
    avg_volume_per_workout: float = 0.0
    avg_reps_per_set: float = 0.0
    volume_change_rate: float = 0.0

class ExerciseHistory(CamelModel):
    exercise: ExerciseBrief
    days: int
    history: list[HistoryEntry]
    trend: list[TrendPoint]
    summary: HistorySummary

# /workouts/stats and /workouts/recent-7-days-brief

class DayStat(CamelModel):
    intensity: float | None = None
    exercises: int = 0

class WorkoutStats(CamelModel):
    total_workouts: int = 0
    total_sets: int = 0
    total_exercises: int = 0
    average_intensity: float = 0.0
    body_parts: dict[str, int] = {}
    by_date: dict[str, DayStat] = {}

class WorkoutBrief(CamelModel):
    date: dt.datetime
    body_parts: list[BodyPart]
    intensity: float | None = None
    status: WorkoutStatus
