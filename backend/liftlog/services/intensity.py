"""
Workout intensity score.

intensity = (completion_rate * 0.6 + weight_factor * 0.4) * 10

where completion_rate is completed sets / all sets (0 without sets) and
weight_factor is total volume (sum of weight * reps) / 1000, capped at 1.
The score is rounded to one decimal, ties upward, and capped at 10.
"""
from __future__ import annotations
import math
from typing import Iterable

COMPLETION_WEIGHT = 0.6
VOLUME_WEIGHT = 0.4
VOLUME_SATURATION = 1000
MAX_INTENSITY = 10.0

HIGH_THRESHOLD = 7
MEDIUM_THRESHOLD = 4

def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round half up on the scaled float: floor(value * 10**ndigits + 0.5).

    Ties go toward +infinity (-2.5 -> -2), not to even as round() does.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor

def _iter_sets(workout) -> Iterable:
    for log in workout.exercises:
        yield from log.sets

def compute_intensity(workout) -> float:
    total_sets = 0
    completed_sets = 0
    total_volume = 0.0

    for s in _iter_sets(workout):
        total_sets += 1
        total_volume += s.weight * s.reps
        if s.completed:
            completed_sets += 1

    completion_rate = completed_sets / total_sets if total_sets else 0.0
    weight_factor = min(total_volume / VOLUME_SATURATION, 1)

    intensity = (completion_rate * COMPLETION_WEIGHT + weight_factor * VOLUME_WEIGHT) * 10
    return min(round_half_up(intensity, 1), MAX_INTENSITY)

def bucket(intensity: float) -> str:
    """Same thresholds the calendar view colours by."""
    if intensity >= HIGH_THRESHOLD:
        return "high"
    if intensity >= MEDIUM_THRESHOLD:
        return "medium"
    return "low"
