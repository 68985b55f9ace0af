from __future__ import annotations
from typing import Any, Mapping, Optional

from sqlalchemy import select, func

from fittrack.errors import NotFound
from fittrack.models import User, WorkoutPlan, WorkoutSession
from fittrack.repositories.base import BaseRepository
from fittrack.validators import (
    clean_muscle_groups, require_day_of_week, require_positive, require_text,
)


class WorkoutPlanRepository(BaseRepository[WorkoutPlan]):
    model = WorkoutPlan
    entity_name = "WorkoutPlan"
    immutable_fields = frozenset({"id", "created_at", "user_id"})

    def list_by_user(
        self, user_id: int, *, day_of_week: Optional[int] = None, active_only: bool = False
    ) -> list[WorkoutPlan]:
        stmt = select(WorkoutPlan).where(WorkoutPlan.user_id == user_id)
        if day_of_week is not None:
            stmt = stmt.where(WorkoutPlan.day_of_week == day_of_week)
        if active_only:
            stmt = stmt.where(WorkoutPlan.is_active.is_(True))
        return self.scalars(stmt.order_by(WorkoutPlan.day_of_week.asc(), WorkoutPlan.id.asc()))

    def active_for_day(self, user_id: int, day_of_week: int, *, exclude_id: int | None = None) -> Optional[WorkoutPlan]:
        stmt = select(WorkoutPlan).where(
            WorkoutPlan.user_id == user_id,
            WorkoutPlan.day_of_week == day_of_week,
            WorkoutPlan.is_active.is_(True),
        )
        if exclude_id is not None:
            stmt = stmt.where(WorkoutPlan.id != exclude_id)
        return self.first(stmt.limit(1))

    def session_count(self, plan_id: int) -> int:
        stmt = select(func.count()).select_from(WorkoutSession).where(WorkoutSession.workout_plan_id == plan_id)
        return self.scalar(stmt)

    def build(
        self,
        *,
        user_id: int,
        name: str,
        day_of_week: int,
        muscle_groups: list[str],
        estimated_duration: int,
        is_active: bool = True,
    ) -> WorkoutPlan:
        """Validated, unsaved plan; callers stage it or ``save`` it."""
        if not self.exists(User, user_id):
            raise NotFound("User", user_id)
        return WorkoutPlan(
            user_id=user_id,
            name=require_text(name, "name"),
            day_of_week=require_day_of_week(day_of_week),
            muscle_groups=clean_muscle_groups(muscle_groups),
            estimated_duration=require_positive(estimated_duration, "estimated_duration"),
            is_active=is_active,
        )

    def create(self, **fields: Any) -> WorkoutPlan:
        return self.save(self.build(**fields))

    def update(self, plan_id: int, fields: Mapping[str, Any]) -> WorkoutPlan:
        fields = dict(fields)
        if "name" in fields:
            fields["name"] = require_text(fields["name"], "name")
        if "day_of_week" in fields:
            require_day_of_week(fields["day_of_week"])
        if "muscle_groups" in fields:
            fields["muscle_groups"] = clean_muscle_groups(fields["muscle_groups"])
        if "estimated_duration" in fields:
            require_positive(fields["estimated_duration"], "estimated_duration")
        return super().update(plan_id, fields)

    def delete(self, plan: WorkoutPlan) -> None:
        self.db.delete(plan)
        self.commit()
