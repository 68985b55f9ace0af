from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fittrack.db import get_db
from fittrack.deps.auth import ensure_owner, get_current_user
from fittrack.models import User
from fittrack.schemas.exercise_log import LogRead, LogUpdate
from fittrack.services import SessionLifecycle

router = APIRouter(prefix="/exercise-logs", tags=["logs"])

@router.patch("/{log_id}", response_model=LogRead)
def update_log(
    log_id: int,
    payload: LogUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    lifecycle = SessionLifecycle(db)
    entry = lifecycle.logs.require(log_id)
    # ownership check via log -> session -> user
    ensure_owner(lifecycle.get(entry.workout_session_id).user_id, current, "exercise log")
    return lifecycle.update_log(log_id, payload.model_dump(exclude_unset=True, exclude_none=True))
