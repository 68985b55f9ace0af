from __future__ import annotations
from typing import Any, Mapping

from sqlalchemy import select

from fittrack.models import Exercise, WorkoutPlanExercise
from fittrack.repositories.base import BaseRepository
from fittrack.validators import optional_non_negative, require_positive


class PlanExerciseRepository(BaseRepository[WorkoutPlanExercise]):
    model = WorkoutPlanExercise
    entity_name = "WorkoutPlanExercise"
    immutable_fields = frozenset({"id", "workout_plan_id", "exercise_id", "order"})

    def entries(self, plan_id: int) -> list[WorkoutPlanExercise]:
        stmt = (
            select(WorkoutPlanExercise)
            .where(WorkoutPlanExercise.workout_plan_id == plan_id)
            .order_by(WorkoutPlanExercise.order.asc())
        )
        return self.scalars(stmt)

    def joined(self, plan_id: int) -> list[tuple[WorkoutPlanExercise, Exercise | None]]:
        """Entries paired with their exercise; a dangling exercise pairs with None."""
        stmt = (
            select(WorkoutPlanExercise, Exercise)
            .outerjoin(Exercise, WorkoutPlanExercise.exercise_id == Exercise.id)
            .where(WorkoutPlanExercise.workout_plan_id == plan_id)
            .order_by(WorkoutPlanExercise.order.asc())
        )
        return [(entry, ex) for entry, ex in self.execute(stmt).all()]

    @staticmethod
    def validate(fields: Mapping[str, Any]) -> None:
        if "sets" in fields:
            require_positive(fields["sets"], "sets")
        if "reps" in fields:
            require_positive(fields["reps"], "reps")
        if "weight" in fields:
            optional_non_negative(fields["weight"], "weight")
        if "rest_time" in fields:
            optional_non_negative(fields["rest_time"], "rest_time")

    def update(self, entry_id: int, fields: Mapping[str, Any]) -> WorkoutPlanExercise:
        self.validate(fields)
        return super().update(entry_id, fields)
