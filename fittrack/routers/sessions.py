from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from fittrack.db import get_db
from fittrack.deps.auth import ensure_owner, get_current_user
from fittrack.models import User, WorkoutSession
from fittrack.schemas.exercise_log import LogCreate, LogRead
from fittrack.schemas.session import SessionFinish, SessionRead, SessionStart, SessionUpdate
from fittrack.services import SessionLifecycle

router = APIRouter(prefix="/workout-sessions", tags=["sessions"])

def _owned_session(lifecycle: SessionLifecycle, session_id: int, current: User) -> WorkoutSession:
    sess = lifecycle.get(session_id)
    ensure_owner(sess.user_id, current, "session")
    return sess

@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def start_session(payload: SessionStart, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return SessionLifecycle(db).start(
        current.id, name=payload.name, plan_id=payload.workout_plan_id, notes=payload.notes
    )

@router.get("", response_model=list[SessionRead])
def list_my_sessions(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return SessionLifecycle(db).sessions.list_by_user(current.id, limit=limit, offset=offset)

@router.get("/{session_id}", response_model=SessionRead)
def get_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return _owned_session(SessionLifecycle(db), session_id, current)

@router.patch("/{session_id}", response_model=SessionRead)
def update_session(
    session_id: int,
    payload: SessionUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    lifecycle = SessionLifecycle(db)
    _owned_session(lifecycle, session_id, current)
    # "notes": null clears the notes
    return lifecycle.update_details(session_id, payload.model_dump(exclude_unset=True))

@router.post("/{session_id}/finish", response_model=SessionRead)
def finish_session(
    session_id: int,
    payload: SessionFinish,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    lifecycle = SessionLifecycle(db)
    _owned_session(lifecycle, session_id, current)
    return lifecycle.finish(session_id, is_completed=payload.is_completed, notes=payload.notes)

@router.post("/{session_id}/abandon", response_model=SessionRead)
def abandon_session(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    lifecycle = SessionLifecycle(db)
    _owned_session(lifecycle, session_id, current)
    return lifecycle.abandon(session_id)

# Logs nested under a session
@router.get("/{session_id}/logs", response_model=list[LogRead])
def list_session_logs(session_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    lifecycle = SessionLifecycle(db)
    _owned_session(lifecycle, session_id, current)
    return lifecycle.list_logs(session_id)

@router.post("/{session_id}/logs", response_model=LogRead, status_code=status.HTTP_201_CREATED)
def log_exercise(
    session_id: int,
    payload: LogCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    lifecycle = SessionLifecycle(db)
    _owned_session(lifecycle, session_id, current)
    return lifecycle.log_exercise(session_id, **payload.model_dump())
