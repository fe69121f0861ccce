# liftlog/deps/ownership.py
import json

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from liftlog.db import get_db
from liftlog.errors import ForbiddenError, NotFoundError, ValidationError
from liftlog.models import Workout
from liftlog.repositories.workout_repo import WorkoutRepository

USERNAME_MAX = 64

async def _json_body(request: Request) -> dict:
    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}

async def caller_username(request: Request, username: str | None = Query(None)) -> str:
    """
    The username the client claims to be.

    Read from the query string; POST/PUT/DELETE may carry it in the JSON body
    instead.
    """
    if username is None and request.method in ("POST", "PUT", "DELETE"):
        value = (await _json_body(request)).get("username")
        username = value if isinstance(value, str) else None
    username = (username or "").strip()
    if not username:
        raise ValidationError("username is required")
    if len(username) > USERNAME_MAX:
        raise ValidationError(f"username must be at most {USERNAME_MAX} characters")
    return username

def owned_workout(
    workout_id: int,
    username: str = Depends(caller_username),
    db: Session = Depends(get_db),
) -> Workout:
    """
    Resolve the workout in the path and check it belongs to the caller.

    Every /workouts/{workout_id}... route depends on this, so the services below
    never see a workout the caller does not own.
    """
    workout = WorkoutRepository(db).get(workout_id)
    if workout is None:
        raise NotFoundError("workout not found")
    if workout.username != username:
        raise ForbiddenError("not allowed to access this workout")
    return workout
