from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from fittrack.db import get_db
from fittrack.deps.auth import ensure_owner, get_current_user
from fittrack.models import User
from fittrack.repositories import ExerciseRepository
from fittrack.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("", response_model=list[ExerciseRead])
def list_exercises(
    db: Session = Depends(get_db),
    search: str | None = Query(None, max_length=120),
    muscle_group: str | None = Query(None, max_length=40),
):
    return ExerciseRepository(db).list(search=search, muscle_group=muscle_group)

@router.get("/{exercise_id}", response_model=ExerciseRead)
def get_exercise(exercise_id: int, db: Session = Depends(get_db)):
    return ExerciseRepository(db).require(exercise_id)

@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def create_exercise(
    payload: ExerciseCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return ExerciseRepository(db).create(**payload.model_dump(), is_custom=True, created_by=current.id)

@router.patch("/{exercise_id}", response_model=ExerciseRead)
def update_exercise(
    exercise_id: int,
    payload: ExerciseUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    repo = ExerciseRepository(db)
    ex = repo.require(exercise_id)
    if not ex.is_custom:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Built-in exercises are read-only")
    ensure_owner(ex.created_by, current, "exercise")
    # explicit nulls clear description, instructions and media urls
    return repo.update(exercise_id, payload.model_dump(exclude_unset=True))
