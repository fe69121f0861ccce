from datetime import datetime, timedelta

import pytest

from liftlog.errors import NotFoundError
from liftlog.models import BodyPart, Difficulty, ExerciseLog, Workout, WorkoutSet, WorkoutStatus
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.services.analytics import AnalyticsAggregator, calendar_window, volume_change_rate

NOW = datetime(2026, 10, 18, 18, 0)

@pytest.fixture
def analytics(db):
    return AnalyticsAggregator(db, clock=lambda: NOW)

@pytest.fixture
def catalog(db):
    repo = ExerciseRepository(db)
    return {
        "squat": repo.create(name="Squat", body_part=BodyPart.legs, difficulty=Difficulty.intermediate),
        "bench": repo.create(name="Bench Press", body_part=BodyPart.chest, difficulty=Difficulty.intermediate),
        "plank": repo.create(name="Plank", body_part=BodyPart.core, difficulty=Difficulty.beginner),
    }

def add_workout(db, when, logs, *, username="alice", intensity=None, duration=None,
                status=WorkoutStatus.completed):
    """logs: [(exercise, [(weight, reps), ...]), ...]"""
    w = Workout(username=username, date=when, start_time=when, intensity=intensity,
                duration=duration, status=status)
    for exercise, sets in logs:
        log = ExerciseLog(exercise=exercise)
        for weight, reps in sets:
            log.sets.append(WorkoutSet(weight=weight, reps=reps, completed=True))
        w.exercises.append(log)
    db.add(w)
    db.commit()
    return w

def days_ago(n, hour=10):
    return (NOW - timedelta(days=n)).replace(hour=hour)

# --- helpers ---

def test_calendar_window_is_oldest_first():
    window = calendar_window(NOW.date(), 3)
    assert [d.isoformat() for d in window] == ["2026-10-16", "2026-10-17", "2026-10-18"]

@pytest.mark.parametrize("volumes,expected", [
    ([], 0.0),
    ([300, 300, 300, 200, 200], 0.0),          # fewer than 6 sessions
    ([300, 300, 300, 200, 200, 200], 50.0),
    ([100, 100, 100, 200, 200, 200, 999], -50.0),
    ([100, 100, 100, 0, 0, 0], 0.0),           # nothing to compare against
])
def test_volume_change_rate(volumes, expected):
    assert volume_change_rate(volumes) == expected

# --- overview ---

def test_overview_without_workouts(analytics):
    o = analytics.overview("alice", 7)
    assert o.summary.total_workouts == 0
    assert o.summary.avg_duration == 0
    assert o.summary.avg_intensity == 0
    assert o.summary.frequency_per_week == 0
    assert len(o.daily_series) == 7
    assert all(p.workouts == 0 and p.avg_intensity == 0 for p in o.daily_series)
    assert o.daily_series[-1].date == NOW.date()
    assert o.body_part_counts == {}
    assert (o.intensity_buckets.low, o.intensity_buckets.medium, o.intensity_buckets.high) == (0, 0, 0)

def test_overview_aggregates(analytics, db, catalog):
    squat, bench = catalog["squat"], catalog["bench"]
    add_workout(db, days_ago(0), [(squat, [(100, 5)] * 3)], intensity=8.0, duration=60)
    add_workout(db, days_ago(0, hour=19), [(bench, [(60, 8)] * 2)], intensity=5.0, duration=30)
    add_workout(db, days_ago(2), [(squat, [(80, 5)]), (bench, [(50, 10)])], intensity=3.0, duration=45)
    add_workout(db, days_ago(1), [(bench, [(40, 10)])], status=WorkoutStatus.in_progress)
    # outside the window / someone else
    add_workout(db, days_ago(7), [(squat, [(100, 5)])], intensity=9.0, duration=50)
    add_workout(db, days_ago(0), [(squat, [(100, 5)])], username="bob", intensity=9.0, duration=50)

    o = analytics.overview("alice", 7)
    s = o.summary
    assert s.total_workouts == 4
    assert s.training_days == 3
    assert s.frequency_per_week == 4.0
    assert s.avg_intensity == 5.3           # (8 + 5 + 3) / 3
    assert s.total_duration == 135
    assert s.avg_duration == 33.8           # 135 / 4

    by_date = {p.date.isoformat(): p for p in o.daily_series}
    assert by_date["2026-10-18"].workouts == 2
    assert by_date["2026-10-18"].avg_intensity == 6.5
    assert by_date["2026-10-17"].workouts == 1
    assert by_date["2026-10-17"].avg_intensity == 0
    assert by_date["2026-10-16"].avg_intensity == 3.0
    assert by_date["2026-10-12"].workouts == 0

    # set counts, not exercise counts
    assert o.body_part_counts == {"legs": 4, "chest": 4}
    b = o.intensity_buckets
    assert (b.low, b.medium, b.high) == (1, 1, 1)

def test_overview_frequency_scales_with_window(analytics, db, catalog):
    add_workout(db, days_ago(1), [(catalog["plank"], [(0, 60)])], intensity=4.0, duration=10)
    o = analytics.overview("alice", 30)
    assert len(o.daily_series) == 30
    assert o.summary.frequency_per_week == 0.2   # 1 / 30 * 7

# --- exercise history ---

def test_history_unknown_exercise(analytics):
    with pytest.raises(NotFoundError):
        analytics.exercise_history("alice", 424242, 180)

def test_history_entries_and_summary(analytics, db, catalog):
    squat, bench = catalog["squat"], catalog["bench"]
    older = add_workout(db, days_ago(5), [(squat, [(60, 10), (70, 8)])])
    newer = add_workout(db, days_ago(1), [(squat, [(80, 5)]), (bench, [(50, 10)]), (squat, [(90, 3)])])
    add_workout(db, days_ago(3), [(bench, [(50, 10)])])

    h = analytics.exercise_history("alice", squat.id, 180)
    assert h.exercise.name == "Squat"
    assert [e.workout_id for e in h.history] == [newer.id, older.id]
    assert [t.workout_id for t in h.trend] == [older.id, newer.id]

    latest = h.history[0]
    # both squat logs of the workout are pooled
    assert [s.weight for s in latest.sets] == [80, 90]
    assert (latest.totals.sets, latest.totals.reps, latest.totals.volume) == (2, 8, 670)
    assert (latest.bests.weight, latest.bests.set_volume) == (90, 400)

    first = h.history[1]
    assert (first.totals.sets, first.totals.reps, first.totals.volume) == (2, 18, 1160)
    assert (first.bests.weight, first.bests.set_volume) == (70, 600)

    s = h.summary
    assert s.total_workouts == 2
    assert s.total_sets == 4
    assert s.total_reps == 26
    assert s.total_volume == 1830
    assert s.best_weight == 90
    assert s.best_set_volume == 600
    assert s.avg_volume_per_workout == 915.0
    assert s.avg_reps_per_set == 6.5
    assert s.volume_change_rate == 0.0   # fewer than 6 sessions

def test_history_change_rate_with_six_sessions(analytics, db, catalog):
    squat = catalog["squat"]
    for n in range(6):
        # days 0..2 are the recent three (volume 300), 3..5 the earlier three (200)
        reps = 3 if n < 3 else 2
        add_workout(db, days_ago(n), [(squat, [(100, reps)])])
    h = analytics.exercise_history("alice", squat.id, 30)
    assert h.summary.volume_change_rate == 50.0
    assert [t.volume for t in h.trend] == [200, 200, 200, 300, 300, 300]

def test_history_respects_window_and_user(analytics, db, catalog):
    squat = catalog["squat"]
    add_workout(db, days_ago(40), [(squat, [(100, 5)])])
    add_workout(db, days_ago(1), [(squat, [(100, 5)])], username="bob")
    h = analytics.exercise_history("alice", squat.id, 30)
    assert h.history == []
    assert h.summary.total_workouts == 0
    assert h.summary.avg_volume_per_workout == 0
    assert h.summary.avg_reps_per_set == 0

# --- stats / brief ---

def test_stats(analytics, db, catalog):
    squat, bench = catalog["squat"], catalog["bench"]
    add_workout(db, days_ago(1), [(squat, [(100, 5)] * 3), (bench, [(60, 8)])], intensity=7.0)
    add_workout(db, days_ago(3), [(bench, [(60, 8)] * 2)], status=WorkoutStatus.in_progress)

    st = analytics.stats("alice", 30)
    assert st.total_workouts == 2
    assert st.total_sets == 6
    assert st.total_exercises == 3
    assert st.average_intensity == 3.5   # unscored workouts count in the denominator
    assert st.body_parts == {"legs": 3, "chest": 3}
    assert st.by_date["2026-10-17"].exercises == 2
    assert st.by_date["2026-10-17"].intensity == 7.0

def test_recent_brief_lists_distinct_body_parts(analytics, db, catalog):
    squat, bench = catalog["squat"], catalog["bench"]
    add_workout(db, days_ago(1), [(squat, [(100, 5)]), (bench, [(60, 8)]), (squat, [(90, 5)])], intensity=6.0)
    add_workout(db, days_ago(10), [(bench, [(60, 8)])])

    briefs = analytics.recent_brief("alice")
    assert len(briefs) == 1
    assert briefs[0].body_parts == [BodyPart.legs, BodyPart.chest]
    assert briefs[0].intensity == 6.0
    assert briefs[0].status == WorkoutStatus.completed
