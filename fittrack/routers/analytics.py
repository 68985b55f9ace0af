from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fittrack.db import get_db
from fittrack.deps.auth import get_current_user
from fittrack.models import User
from fittrack.schemas.analytics import WeeklyStatsRead, WeightTrendRead
from fittrack.services import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])

@router.get("/weekly", response_model=WeeklyStatsRead)
def weekly_stats(
    reference: datetime | None = None,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    return AnalyticsService(db).weekly_stats(current.id, reference)

@router.get("/weight", response_model=WeightTrendRead)
def weight_trend(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return AnalyticsService(db).weight_trend(current.id)
