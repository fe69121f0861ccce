# liftlog/services/analytics.py
"""
Read-only aggregations over one user's workouts.

overview() and exercise_history() look at the last ``days`` calendar days,
today included. stats(), recent() and recent_brief() keep the rolling
``now - days`` window the listing endpoints have always used.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterable, Sequence

from sqlalchemy.orm import Session

from liftlog.errors import NotFoundError
from liftlog.models import Workout, WorkoutSet
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.schemas.analytics import (
    DailyPoint,
    DayStat,
    ExerciseHistory,
    HistoryEntry,
    HistorySummary,
    IntensityBuckets,
    Overview,
    OverviewSummary,
    SessionBests,
    SessionTotals,
    TrendPoint,
    WorkoutBrief,
    WorkoutStats,
)
from liftlog.schemas.exercise import ExerciseBrief
from liftlog.schemas.workout import WorkoutSetRead
from liftlog.services.intensity import bucket, round_half_up

log = logging.getLogger(__name__)

# sessions per side of the volume trend comparison
TREND_WINDOW = 3
BRIEF_DAYS = 7

def mean(values: Sequence[float], ndigits: int = 1) -> float:
    """Rounded arithmetic mean; 0.0 for no values."""
    if not values:
        return 0.0
    return round_half_up(sum(values) / len(values), ndigits)

def calendar_window(today: date, days: int) -> list[date]:
    """The ``days`` calendar days ending with ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

def volume_change_rate(volumes: Sequence[float], window: int = TREND_WINDOW) -> float:
    """
    Percent change of the mean volume of the latest ``window`` sessions versus
    the ``window`` sessions before them. ``volumes`` is most recent first.

    Returns 0.0 when there are fewer than 2 * window sessions or the earlier
    mean is zero.
    """
    if len(volumes) < 2 * window:
        return 0.0
    recent = sum(volumes[:window]) / window
    previous = sum(volumes[window:2 * window]) / window
    if previous == 0:
        return 0.0
    return round_half_up((recent - previous) / previous * 100, 1)

def _set_volumes(sets: Iterable[WorkoutSet]) -> list[float]:
    return [s.weight * s.reps for s in sets]

class AnalyticsAggregator:
    def __init__(
        self,
        db: Session,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.clock = clock
        self.workouts = WorkoutRepository(db)
        self.exercises = ExerciseRepository(db)

    def _calendar_since(self, days: int) -> tuple[list[date], datetime]:
        window = calendar_window(self.clock().date(), days)
        return window, datetime.combine(window[0], time.min)

    # rolling windows

    def recent(self, username: str, days: int) -> list[Workout]:
        return self.workouts.list_since(username, self.clock() - timedelta(days=days))

    def recent_brief(self, username: str) -> list[WorkoutBrief]:
        briefs = []
        for workout in self.recent(username, BRIEF_DAYS):
            body_parts = []
            for exercise_log in workout.exercises:
                exercise = exercise_log.exercise
                if exercise is not None and exercise.body_part not in body_parts:
                    body_parts.append(exercise.body_part)
            briefs.append(
                WorkoutBrief(
                    date=workout.date,
                    body_parts=body_parts,
                    intensity=workout.intensity,
                    status=workout.status,
                )
            )
        return briefs

    def stats(self, username: str, days: int) -> WorkoutStats:
        workouts = self.recent(username, days)
        stats = WorkoutStats(total_workouts=len(workouts))
        intensity_sum = 0.0

        for workout in workouts:
            for exercise_log in workout.exercises:
                stats.total_sets += len(exercise_log.sets)
                stats.total_exercises += 1
                if exercise_log.exercise is not None:
                    key = exercise_log.exercise.body_part.value
                    stats.body_parts[key] = stats.body_parts.get(key, 0) + len(exercise_log.sets)

            stats.by_date[workout.date.date().isoformat()] = DayStat(
                intensity=workout.intensity,
                exercises=len(workout.exercises),
            )
            if workout.intensity:
                intensity_sum += workout.intensity

        if workouts:
            stats.average_intensity = round_half_up(intensity_sum / len(workouts), 1)
        return stats

    # calendar windows

    def overview(self, username: str, days: int) -> Overview:
        window, since = self._calendar_since(days)
        workouts = self.workouts.list_since(username, since)

        total = len(workouts)
        intensities = [w.intensity for w in workouts if w.intensity is not None]
        total_duration = sum(w.duration or 0 for w in workouts)

        summary = OverviewSummary(
            total_workouts=total,
            training_days=len({w.date.date() for w in workouts}),
            frequency_per_week=round_half_up(total / days * 7, 1),
            avg_intensity=mean(intensities),
            total_duration=total_duration,
            avg_duration=round_half_up(total_duration / total, 1) if total else 0.0,
        )

        by_day: dict[date, list[Workout]] = defaultdict(list)
        for w in workouts:
            by_day[w.date.date()].append(w)
        daily_series = [
            DailyPoint(
                date=day,
                workouts=len(by_day.get(day, [])),
                avg_intensity=mean([w.intensity for w in by_day.get(day, []) if w.intensity is not None]),
            )
            for day in window
        ]

        body_part_counts: dict[str, int] = {}
        for w in workouts:
            for exercise_log in w.exercises:
                if exercise_log.exercise is None:
                    continue
                key = exercise_log.exercise.body_part.value
                body_part_counts[key] = body_part_counts.get(key, 0) + len(exercise_log.sets)

        buckets = IntensityBuckets()
        for value in intensities:
            name = bucket(value)
            setattr(buckets, name, getattr(buckets, name) + 1)

        return Overview(
            days=days,
            summary=summary,
            daily_series=daily_series,
            body_part_counts=body_part_counts,
            intensity_buckets=buckets,
        )

    def exercise_history(self, username: str, exercise_id: int, days: int) -> ExerciseHistory:
        exercise = self.exercises.get(exercise_id)
        if exercise is None:
            raise NotFoundError("exercise not found")

        _, since = self._calendar_since(days)
        workouts = self.workouts.list_since_with_exercise(username, exercise_id, since)

        history: list[HistoryEntry] = []
        for workout in workouts:
            # one workout may log the same exercise more than once
            sets = [
                s
                for exercise_log in workout.exercises
                if exercise_log.exercise_id == exercise_id
                for s in exercise_log.sets
            ]
            volumes = _set_volumes(sets)
            history.append(
                HistoryEntry(
                    workout_id=workout.id,
                    date=workout.date,
                    status=workout.status,
                    sets=[WorkoutSetRead.model_validate(s) for s in sets],
                    totals=SessionTotals(
                        sets=len(sets),
                        reps=sum(s.reps for s in sets),
                        volume=sum(volumes),
                    ),
                    bests=SessionBests(
                        weight=max((s.weight for s in sets), default=0.0),
                        set_volume=max(volumes, default=0.0),
                    ),
                )
            )

        total_sets = sum(e.totals.sets for e in history)
        total_reps = sum(e.totals.reps for e in history)
        total_volume = sum(e.totals.volume for e in history)
        summary = HistorySummary(
            total_workouts=len(history),
            total_sets=total_sets,
            total_reps=total_reps,
            total_volume=total_volume,
            best_weight=max((e.bests.weight for e in history), default=0.0),
            best_set_volume=max((e.bests.set_volume for e in history), default=0.0),
            avg_volume_per_workout=round_half_up(total_volume / len(history), 1) if history else 0.0,
            avg_reps_per_set=round_half_up(total_reps / total_sets, 1) if total_sets else 0.0,
            volume_change_rate=volume_change_rate([e.totals.volume for e in history]),
        )

        trend = [
            TrendPoint(
                workout_id=e.workout_id,
                date=e.date,
                volume=e.totals.volume,
                best_weight=e.bests.weight,
            )
            for e in reversed(history)
        ]

        log.debug("exercise history username=%s exercise=%s sessions=%s", username, exercise_id, len(history))
        return ExerciseHistory(
            exercise=ExerciseBrief.model_validate(exercise),
            days=days,
            history=history,
            trend=trend,
            summary=summary,
        )
