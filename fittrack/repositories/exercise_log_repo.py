from __future__ import annotations
from typing import Any, Mapping

from sqlalchemy import select

from fittrack.models import ExerciseLog
from fittrack.repositories.base import BaseRepository
from fittrack.validators import optional_non_negative, require_positive


class ExerciseLogRepository(BaseRepository[ExerciseLog]):
    model = ExerciseLog
    entity_name = "ExerciseLog"
    immutable_fields = frozenset({"id", "workout_session_id", "exercise_id", "order"})

    def list_by_session(self, session_id: int) -> list[ExerciseLog]:
        stmt = select(ExerciseLog).where(ExerciseLog.workout_session_id == session_id)\
                                  .order_by(ExerciseLog.order.asc())
        return self.scalars(stmt)

    @staticmethod
    def validate(fields: Mapping[str, Any]) -> None:
        if "sets" in fields:
            require_positive(fields["sets"], "sets")
        if "reps" in fields:
            require_positive(fields["reps"], "reps")
        if "weight" in fields:
            optional_non_negative(fields["weight"], "weight")

    def update(self, log_id: int, fields: Mapping[str, Any]) -> ExerciseLog:
        self.validate(fields)
        return super().update(log_id, fields)
