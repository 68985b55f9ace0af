from __future__ import annotations
from datetime import datetime
from typing import Optional
from sqlalchemy import select, func
from fittrack.models import WorkoutSession
from fittrack.repositories.base import BaseRepository


class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession
    entity_name = "WorkoutSession"
    immutable_fields = frozenset({"id", "user_id", "workout_plan_id", "start_time"})

    def list_by_user(self, user_id: int, *, limit: int = 50, offset: int = 0) -> list[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.user_id == user_id)\
                                     .order_by(WorkoutSession.start_time.desc(), WorkoutSession.id.desc())\
                                     .limit(limit).offset(offset)
        return self.scalars(stmt)

    def count(
        self,
        user_id: int,
        *,
        completed: Optional[bool] = None,
        started_from: Optional[datetime] = None,
        started_before: Optional[datetime] = None,
    ) -> int:
        stmt = select(func.count()).select_from(WorkoutSession).where(WorkoutSession.user_id == user_id)
        if completed is not None:
            stmt = stmt.where(WorkoutSession.is_completed.is_(completed))
        if started_from is not None:
            stmt = stmt.where(WorkoutSession.start_time >= started_from)
        if started_before is not None:
            stmt = stmt.where(WorkoutSession.start_time < started_before)
        return self.scalar(stmt)
