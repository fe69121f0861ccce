import datetime as dt

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from liftlog.db import get_db
from liftlog.deps.ownership import caller_username, owned_workout
from liftlog.models import Workout
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.schemas.analytics import ExerciseHistory, Overview, WorkoutBrief, WorkoutStats
from liftlog.schemas.common import Envelope
from liftlog.schemas.workout import (
    AddExerciseRequest,
    AddSetRequest,
    SetPosition,
    WorkoutCreate,
    WorkoutRead,
    WorkoutUpdate,
)
from liftlog.services.analytics import AnalyticsAggregator
from liftlog.services.workout_mutator import WorkoutMutator
from liftlog.settings import Settings, app_settings

router = APIRouter(prefix="/workouts", tags=["workouts"])

def _read(workout: Workout) -> WorkoutRead:
    return WorkoutRead.model_validate(workout)

@router.post("", response_model=Envelope[WorkoutRead], response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
def create_workout(
    payload: WorkoutCreate,
    username: str = Depends(caller_username),
    db: Session = Depends(get_db),
):
    workout = WorkoutMutator(db).create(username, date=payload.date, notes=payload.notes)
    return Envelope(data=_read(workout), message="workout created")

@router.get("", response_model=Envelope[list[WorkoutRead]], response_model_exclude_none=True)
def list_workouts(
    username: str = Depends(caller_username),
    db: Session = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    page = WorkoutRepository(db).list_by_user(username, limit=limit, offset=offset)
    return Envelope(data=[_read(w) for w in page.items], count=len(page.items))

# Static paths go before /{workout_id}

@router.get("/recent", response_model=Envelope[list[WorkoutRead]], response_model_exclude_none=True)
def recent_workouts(
    days: int | None = Query(None, ge=1, le=3650),
    username: str = Depends(caller_username),
    db: Session = Depends(get_db),
    settings: Settings = Depends(app_settings),
):
    workouts = AnalyticsAggregator(db).recent(username, days or settings.RECENT_DAYS_DEFAULT)
    return Envelope(data=[_read(w) for w in workouts], count=len(workouts))

@router.get("/recent-7-days-brief", response_model=Envelope[list[WorkoutBrief]], response_model_exclude_none=True)
def recent_7_days_brief(
    username: str = Depends(caller_username),
    db: Session = Depends(get_db),
):
    briefs = AnalyticsAggregator(db).recent_brief(username)
    return Envelope(data=briefs, count=len(briefs))

@router.get("/stats", response_model=Envelope[WorkoutStats], response_model_exclude_none=True)
def workout_stats(
    days: int | None = Query(None, ge=1, le=3650),
    username: str = Depends(caller_username),
    db: Session = Depends(get_db),
    settings: Settings = Depends(app_settings),
):
    return Envelope(data=AnalyticsAggregator(db).stats(username, days or settings.RECENT_DAYS_DEFAULT))

@router.get("/overview", response_model=Envelope[Overview], response_model_exclude_none=True)
def workout_overview(
    days: int | None = Query(None, ge=1, le=3650),
    username: str = Depends(caller_username),
    db: Session = Depends(get_db),
    settings: Settings = Depends(app_settings),
):
    return Envelope(data=AnalyticsAggregator(db).overview(username, days or settings.RECENT_DAYS_DEFAULT))

@router.get("/exercise-history/{exercise_id}", response_model=Envelope[ExerciseHistory], response_model_exclude_none=True)
def exercise_history(
    exercise_id: int,
    days: int | None = Query(None, ge=1, le=3650),
    username: str = Depends(caller_username),
    db: Session = Depends(get_db),
    settings: Settings = Depends(app_settings),
):
    data = AnalyticsAggregator(db).exercise_history(
        username, exercise_id, days or settings.HISTORY_DAYS_DEFAULT
    )
    return Envelope(data=data)

@router.get("/date/{day}", response_model=Envelope[WorkoutRead], response_model_exclude_none=True)
def workout_by_date(
    day: dt.date,
    username: str = Depends(caller_username),
    db: Session = Depends(get_db),
):
    # no workout that day is not an error
    workout = WorkoutRepository(db).get_by_date(username, day)
    return Envelope(data=_read(workout) if workout else None)

# Single workout; owned_workout has already checked the caller

@router.get("/{workout_id}", response_model=Envelope[WorkoutRead], response_model_exclude_none=True)
def get_workout(workout: Workout = Depends(owned_workout)):
    return Envelope(data=_read(workout))

@router.put("/{workout_id}", response_model=Envelope[WorkoutRead], response_model_exclude_none=True)
def update_workout(
    payload: WorkoutUpdate,
    workout: Workout = Depends(owned_workout),
    db: Session = Depends(get_db),
):
    updated = WorkoutMutator(db).update(workout.id, payload.model_dump(exclude_unset=True))
    return Envelope(data=_read(updated), message="workout updated")

@router.delete("/{workout_id}", response_model=Envelope[WorkoutRead], response_model_exclude_none=True)
def delete_workout(workout: Workout = Depends(owned_workout), db: Session = Depends(get_db)):
    WorkoutMutator(db).delete(workout.id)
    return Envelope(message="workout deleted")

@router.post("/{workout_id}/exercises", response_model=Envelope[WorkoutRead], response_model_exclude_none=True)
def add_exercise(
    payload: AddExerciseRequest,
    workout: Workout = Depends(owned_workout),
    db: Session = Depends(get_db),
):
    updated = WorkoutMutator(db).add_exercise(workout.id, payload.exercise_id)
    return Envelope(data=_read(updated), message="exercise added")

@router.post("/{workout_id}/sets", response_model=Envelope[WorkoutRead], response_model_exclude_none=True)
def add_set(
    payload: AddSetRequest,
    workout: Workout = Depends(owned_workout),
    db: Session = Depends(get_db),
):
    updated = WorkoutMutator(db).add_set(workout.id, payload.exercise_index, payload.weight, payload.reps)
    return Envelope(data=_read(updated), message="set added")

@router.post("/{workout_id}/complete-set", response_model=Envelope[WorkoutRead], response_model_exclude_none=True)
def complete_set(
    payload: SetPosition,
    workout: Workout = Depends(owned_workout),
    db: Session = Depends(get_db),
):
    updated = WorkoutMutator(db).complete_set(workout.id, payload.exercise_index, payload.set_index)
    return Envelope(data=_read(updated), message="set completed")

@router.delete("/{workout_id}/sets", response_model=Envelope[WorkoutRead], response_model_exclude_none=True)
def remove_set(
    exercise_index: int = Query(..., alias="exerciseIndex"),
    set_index: int = Query(..., alias="setIndex"),
    workout: Workout = Depends(owned_workout),
    db: Session = Depends(get_db),
):
    updated = WorkoutMutator(db).remove_set(workout.id, exercise_index, set_index)
    return Envelope(data=_read(updated), message="set removed")

@router.post("/{workout_id}/complete", response_model=Envelope[WorkoutRead], response_model_exclude_none=True)
def complete_workout(workout: Workout = Depends(owned_workout), db: Session = Depends(get_db)):
    updated = WorkoutMutator(db).complete_workout(workout.id)
    return Envelope(data=_read(updated), message="workout completed")
