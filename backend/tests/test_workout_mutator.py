from datetime import date, datetime, timedelta, timezone

import pytest

from liftlog.errors import IndexOutOfRangeError, NotFoundError, ValidationError
from liftlog.models import BodyPart, Difficulty, WorkoutStatus
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.services.workout_mutator import WorkoutMutator, duration_minutes

@pytest.fixture
def mutator(db, clock):
    return WorkoutMutator(db, clock=clock)

@pytest.fixture
def squat(db):
    return ExerciseRepository(db).create(
        name="Squat", body_part=BodyPart.legs, difficulty=Difficulty.intermediate
    )

def workout_with_sets(mutator, exercise, weights):
    w = mutator.create("alice")
    mutator.add_exercise(w.id, exercise.id)
    for weight in weights:
        mutator.add_set(w.id, 0, weight, 5)
    return w

# --- create ---

def test_create_starts_in_progress(mutator, clock):
    w = mutator.create("alice")
    assert w.id
    assert w.username == "alice"
    assert w.status == WorkoutStatus.in_progress
    assert w.start_time == clock.current
    assert w.date == clock.current
    assert w.exercises == []
    assert w.end_time is None and w.duration is None and w.intensity is None

def test_create_with_date_only_uses_midnight(mutator):
    w = mutator.create("alice", date=date(2026, 10, 1))
    assert w.date == datetime(2026, 10, 1, 0, 0)

def test_create_with_aware_datetime_is_stored_naive(mutator):
    w = mutator.create("alice", date=datetime(2026, 10, 1, 12, tzinfo=timezone.utc))
    assert w.date.tzinfo is None

# --- add_exercise ---

def test_add_exercise_appends_in_order(mutator, db, squat):
    bench = ExerciseRepository(db).create(
        name="Bench Press", body_part=BodyPart.chest, difficulty=Difficulty.intermediate
    )
    w = mutator.create("alice")
    mutator.add_exercise(w.id, squat.id)
    w = mutator.add_exercise(w.id, bench.id)
    assert [log.exercise_id for log in w.exercises] == [squat.id, bench.id]
    assert [log.exercise.name for log in w.exercises] == ["Squat", "Bench Press"]
    assert all(log.sets == [] for log in w.exercises)

def test_add_exercise_unknown_workout(mutator, squat):
    with pytest.raises(NotFoundError):
        mutator.add_exercise(999999, squat.id)

def test_add_exercise_unknown_exercise(mutator):
    w = mutator.create("alice")
    with pytest.raises(NotFoundError):
        mutator.add_exercise(w.id, 999999)

# --- add_set ---

def test_add_set_numbers_sequentially(mutator, squat):
    w = workout_with_sets(mutator, squat, [60, 70, 80])
    sets = mutator.load(w.id).exercises[0].sets
    assert [s.set_number for s in sets] == [1, 2, 3]
    assert [s.weight for s in sets] == [60, 70, 80]
    assert not any(s.completed for s in sets)

@pytest.mark.parametrize("index", [-1, 1, 5])
def test_add_set_exercise_index_out_of_range(mutator, squat, index):
    w = mutator.create("alice")
    mutator.add_exercise(w.id, squat.id)
    with pytest.raises(IndexOutOfRangeError, match="exercise index"):
        mutator.add_set(w.id, index, 50, 10)

def test_add_set_rejects_negative_weight(mutator, squat):
    w = workout_with_sets(mutator, squat, [])
    with pytest.raises(ValidationError):
        mutator.add_set(w.id, 0, -1, 10)

def test_add_set_rejects_zero_reps(mutator, squat):
    w = workout_with_sets(mutator, squat, [])
    with pytest.raises(ValidationError):
        mutator.add_set(w.id, 0, 20, 0)

def test_add_set_allows_bodyweight(mutator, squat):
    w = workout_with_sets(mutator, squat, [0])
    assert mutator.load(w.id).exercises[0].sets[0].weight == 0

# --- complete_set ---

def test_complete_set_is_repeatable(mutator, squat, clock):
    w = workout_with_sets(mutator, squat, [60])
    first = mutator.complete_set(w.id, 0, 0).exercises[0].sets[0]
    assert first.completed is True
    assert first.completed_at == clock.current

    later = clock.advance(minutes=3)
    again = mutator.complete_set(w.id, 0, 0).exercises[0].sets[0]
    assert again.completed is True
    assert again.completed_at == later

def test_complete_set_index_out_of_range(mutator, squat):
    w = workout_with_sets(mutator, squat, [60])
    with pytest.raises(IndexOutOfRangeError, match="set index"):
        mutator.complete_set(w.id, 0, 1)
    with pytest.raises(IndexOutOfRangeError, match="exercise index"):
        mutator.complete_set(w.id, 3, 0)

# --- remove_set ---

def test_remove_set_renumbers_remaining(mutator, squat):
    w = workout_with_sets(mutator, squat, [10, 20, 30, 40])
    w = mutator.remove_set(w.id, 0, 1)  # the set numbered 2
    sets = w.exercises[0].sets
    assert [s.set_number for s in sets] == [1, 2, 3]
    assert [s.weight for s in sets] == [10, 30, 40]

def test_remove_last_set_leaves_empty_log(mutator, squat):
    w = workout_with_sets(mutator, squat, [10])
    w = mutator.remove_set(w.id, 0, 0)
    assert w.exercises[0].sets == []

def test_remove_set_out_of_range(mutator, squat):
    w = workout_with_sets(mutator, squat, [10])
    with pytest.raises(IndexOutOfRangeError):
        mutator.remove_set(w.id, 0, 4)

# --- complete_workout ---

def test_complete_workout_rounds_duration(mutator, squat, clock):
    w = workout_with_sets(mutator, squat, [50])
    clock.advance(milliseconds=125000)
    w = mutator.complete_workout(w.id)
    assert w.duration == 2
    assert w.end_time == clock.current
    assert w.status == WorkoutStatus.completed

def test_duration_ties_round_up():
    start = datetime(2026, 1, 1, 8, 0)
    assert duration_minutes(start, start + timedelta(seconds=90)) == 2
    assert duration_minutes(start, start + timedelta(seconds=89)) == 1
    assert duration_minutes(start, start) == 0

def test_complete_workout_without_sets(mutator):
    w = mutator.create("alice")
    w = mutator.complete_workout(w.id)
    assert w.intensity == 0
    assert w.duration == 0

def test_round_trip(mutator, squat, clock):
    w = mutator.create("alice")
    mutator.add_exercise(w.id, squat.id)
    mutator.add_set(w.id, 0, 50, 10)
    mutator.complete_set(w.id, 0, 0)
    clock.advance(minutes=45)
    w = mutator.complete_workout(w.id)

    s = w.exercises[0].sets[0]
    assert (s.set_number, s.weight, s.reps, s.completed) == (1, 50, 10, True)
    # completion 1.0, volume 500 -> (0.6 + 0.2) * 10
    assert w.intensity == 8.0
    assert w.duration == 45

def test_completing_twice_recomputes_from_first_start(mutator, squat, clock):
    w = workout_with_sets(mutator, squat, [50])
    clock.advance(minutes=10)
    assert mutator.complete_workout(w.id).duration == 10
    clock.advance(minutes=20)
    again = mutator.complete_workout(w.id)
    assert again.duration == 30
    assert again.status == WorkoutStatus.completed

def test_completed_workout_still_accepts_sets(mutator, squat):
    w = workout_with_sets(mutator, squat, [50])
    mutator.complete_workout(w.id)
    w = mutator.add_set(w.id, 0, 60, 5)
    assert len(w.exercises[0].sets) == 2

# --- update / delete ---

def test_update_fields(mutator):
    w = mutator.create("alice")
    w = mutator.update(w.id, {"notes": "legs day", "intensity": 6.5})
    assert w.notes == "legs day"
    assert w.intensity == 6.5

def test_update_rejects_unknown_fields(mutator):
    w = mutator.create("alice")
    with pytest.raises(ValidationError):
        mutator.update(w.id, {"username": "mallory"})

def test_delete_removes_workout(mutator, squat):
    w = workout_with_sets(mutator, squat, [50])
    mutator.delete(w.id)
    with pytest.raises(NotFoundError):
        mutator.load(w.id)
