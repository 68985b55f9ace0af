from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import select

from fittrack.db import as_utc
from fittrack.errors import ConflictError, NotFound, ValidationError
from fittrack.models import User, WeightLog
from fittrack.repositories.base import BaseRepository


class WeightLogRepository(BaseRepository[WeightLog]):
    """Append-only: there is no update or delete."""
    model = WeightLog
    entity_name = "WeightLog"

    def list_by_user(self, user_id: int, *, limit: Optional[int] = None) -> list[WeightLog]:
        stmt = select(WeightLog).where(WeightLog.user_id == user_id)\
                                .order_by(WeightLog.date.desc(), WeightLog.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return self.scalars(stmt)

    def create(self, user_id: int, *, weight: float, date: Optional[datetime] = None, notes: str | None = None) -> WeightLog:
        if not self.exists(User, user_id):
            raise NotFound("User", user_id)
        if weight is None or weight <= 0:
            raise ValidationError("weight must be > 0", field="weight")
        entry = WeightLog(user_id=user_id, weight=weight, notes=notes)
        if date is not None:
            entry.date = as_utc(date)
        return self.save(entry)

    def update(self, log_id: int, fields):
        raise ConflictError("weight logs are append-only", state="append_only")
