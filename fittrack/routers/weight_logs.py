from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from fittrack.db import get_db
from fittrack.deps.auth import get_current_user
from fittrack.models import User
from fittrack.repositories import WeightLogRepository
from fittrack.schemas.weight_log import WeightLogCreate, WeightLogRead

router = APIRouter(prefix="/weight-logs", tags=["weight"])

@router.get("", response_model=list[WeightLogRead])
def list_my_weight_logs(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    limit: int | None = Query(None, ge=1, le=1000),
):
    return WeightLogRepository(db).list_by_user(current.id, limit=limit)

@router.post("", response_model=WeightLogRead, status_code=status.HTTP_201_CREATED)
def add_weight_log(payload: WeightLogCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WeightLogRepository(db).create(current.id, weight=payload.weight, date=payload.date, notes=payload.notes)
