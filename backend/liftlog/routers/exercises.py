from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from liftlog.db import get_db
from liftlog.models import BodyPart, Difficulty
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.schemas.common import Envelope
from liftlog.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseStats, ExerciseUpdate
from liftlog.services.catalog import ExerciseCatalog

router = APIRouter(prefix="/exercises", tags=["exercises"])

def _read_all(exercises) -> list[ExerciseRead]:
    return [ExerciseRead.model_validate(e) for e in exercises]

@router.post("", response_model=Envelope[ExerciseRead], response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
def create_exercise(payload: ExerciseCreate, db: Session = Depends(get_db)):
    exercise = ExerciseCatalog(db).create(payload.model_dump())
    return Envelope(data=ExerciseRead.model_validate(exercise), message="exercise created")

@router.get("", response_model=Envelope[list[ExerciseRead]], response_model_exclude_none=True)
def list_exercises(
    db: Session = Depends(get_db),
    body_part: BodyPart | None = Query(None, alias="bodyPart"),
    difficulty: Difficulty | None = Query(None),
    limit: int = Query(100, ge=1, le=500),
):
    exercises = ExerciseRepository(db).list(body_part=body_part, difficulty=difficulty, limit=limit)
    return Envelope(data=_read_all(exercises), count=len(exercises))

@router.get("/search", response_model=Envelope[list[ExerciseRead]], response_model_exclude_none=True)
def search_exercises(keyword: str | None = Query(None), db: Session = Depends(get_db)):
    exercises = ExerciseCatalog(db).search(keyword)
    return Envelope(data=_read_all(exercises), count=len(exercises))

@router.get("/stats", response_model=Envelope[ExerciseStats], response_model_exclude_none=True)
def exercise_stats(db: Session = Depends(get_db)):
    return Envelope(data=ExerciseCatalog(db).stats())

@router.post("/initialize", response_model=Envelope[list[ExerciseRead]], response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED)
def initialize_default_exercises(db: Session = Depends(get_db)):
    created = ExerciseCatalog(db).seed_defaults()
    return Envelope(
        data=_read_all(created),
        count=len(created),
        message=f"{len(created)} default exercises created",
    )

@router.get("/bodypart/{body_part}", response_model=Envelope[list[ExerciseRead]], response_model_exclude_none=True)
def exercises_by_body_part(body_part: BodyPart, db: Session = Depends(get_db)):
    exercises = ExerciseRepository(db).list(body_part=body_part, limit=500)
    return Envelope(data=_read_all(exercises), count=len(exercises))

@router.get("/difficulty/{difficulty}", response_model=Envelope[list[ExerciseRead]], response_model_exclude_none=True)
def exercises_by_difficulty(difficulty: Difficulty, db: Session = Depends(get_db)):
    exercises = ExerciseRepository(db).list(difficulty=difficulty, limit=500)
    return Envelope(data=_read_all(exercises), count=len(exercises))

@router.get("/{exercise_id}", response_model=Envelope[ExerciseRead], response_model_exclude_none=True)
def get_exercise(exercise_id: int, db: Session = Depends(get_db)):
    return Envelope(data=ExerciseRead.model_validate(ExerciseCatalog(db).get(exercise_id)))

@router.put("/{exercise_id}", response_model=Envelope[ExerciseRead], response_model_exclude_none=True)
def update_exercise(exercise_id: int, payload: ExerciseUpdate, db: Session = Depends(get_db)):
    exercise = ExerciseCatalog(db).update(exercise_id, payload.model_dump(exclude_unset=True))
    return Envelope(data=ExerciseRead.model_validate(exercise), message="exercise updated")

@router.delete("/{exercise_id}", response_model=Envelope[ExerciseRead], response_model_exclude_none=True)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db)):
    ExerciseCatalog(db).delete(exercise_id)
    return Envelope(message="exercise deleted")
