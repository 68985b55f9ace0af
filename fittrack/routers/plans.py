from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from fittrack.db import get_db
from fittrack.deps.auth import ensure_owner, get_current_user
from fittrack.models import User, WorkoutPlan
from fittrack.schemas.exercise import ExerciseRead
from fittrack.schemas.workout_plan import (
    PlanCreate, PlanEntryRead, PlanExerciseCreate, PlanExerciseRead, PlanExerciseUpdate,
    PlanRead, PlanReorder, PlanUpdate,
)
from fittrack.services import PlanComposer
from fittrack.services.plan_composition import PlanEntry

router = APIRouter(prefix="/workout-plans", tags=["plans"])

def _owned_plan(composer: PlanComposer, plan_id: int, current: User) -> WorkoutPlan:
    plan = composer.plans.require(plan_id)
    ensure_owner(plan.user_id, current, "plan")
    return plan

def _entry_read(pe: PlanEntry) -> PlanEntryRead:
    data = PlanExerciseRead.model_validate(pe.entry).model_dump()
    exercise = ExerciseRead.model_validate(pe.exercise) if pe.exercise is not None else None
    return PlanEntryRead(**data, exercise=exercise)

@router.get("", response_model=list[PlanRead])
def list_my_plans(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    day_of_week: int | None = Query(None, ge=0, le=6),
    active_only: bool = False,
):
    return PlanComposer(db).plans.list_by_user(current.id, day_of_week=day_of_week, active_only=active_only)

@router.post("", response_model=PlanRead, status_code=status.HTTP_201_CREATED)
def create_plan(payload: PlanCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return PlanComposer(db).create_plan(current.id, **payload.model_dump())

@router.post("/default-week", response_model=list[PlanRead], status_code=status.HTTP_201_CREATED)
def seed_default_week(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return PlanComposer(db).seed_default_week(current.id)

@router.get("/{plan_id}", response_model=PlanRead)
def get_plan(plan_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return _owned_plan(PlanComposer(db), plan_id, current)

@router.patch("/{plan_id}", response_model=PlanRead)
def update_plan(
    plan_id: int,
    payload: PlanUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    composer = PlanComposer(db)
    _owned_plan(composer, plan_id, current)
    # every plan column is NOT NULL, so a null means "leave as is"
    return composer.update_plan(plan_id, payload.model_dump(exclude_unset=True, exclude_none=True))

@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_plan(plan_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    composer = PlanComposer(db)
    _owned_plan(composer, plan_id, current)
    composer.delete_plan(plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# Exercises inside a plan
@router.get("/{plan_id}/exercises", response_model=list[PlanEntryRead])
def list_plan_exercises(plan_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    composer = PlanComposer(db)
    _owned_plan(composer, plan_id, current)
    return [_entry_read(pe) for pe in composer.list_for_plan(plan_id)]

@router.post("/{plan_id}/exercises", response_model=PlanExerciseRead, status_code=status.HTTP_201_CREATED)
def add_exercise_to_plan(
    plan_id: int,
    payload: PlanExerciseCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    composer = PlanComposer(db)
    _owned_plan(composer, plan_id, current)
    return composer.add_exercise(plan_id, **payload.model_dump())

@router.put("/{plan_id}/exercises/order", response_model=list[PlanEntryRead])
def reorder_plan_exercises(
    plan_id: int,
    payload: PlanReorder,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    composer = PlanComposer(db)
    _owned_plan(composer, plan_id, current)
    return [_entry_read(pe) for pe in composer.reorder(plan_id, payload.entry_ids)]

@router.patch("/{plan_id}/exercises/{entry_id}", response_model=PlanExerciseRead)
def update_plan_exercise(
    plan_id: int,
    entry_id: int,
    payload: PlanExerciseUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    composer = PlanComposer(db)
    _owned_plan(composer, plan_id, current)
    # "weight" or "rest_time": null clears them; sets/reps reject null
    return composer.update_entry(plan_id, entry_id, payload.model_dump(exclude_unset=True))

@router.delete("/{plan_id}/exercises/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_plan_exercise(
    plan_id: int,
    entry_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    composer = PlanComposer(db)
    _owned_plan(composer, plan_id, current)
    composer.remove(plan_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
