# fittrack/services/plan_composition.py
"""Editing a workout plan and its ordered exercise list.

Entries of a plan always carry ``order`` values 0..n-1. Inserting at an
occupied position shifts the tail right; removing closes the gap.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from fittrack.errors import ConflictError, NotFound, ValidationError
from fittrack.models import Exercise, WorkoutPlan, WorkoutPlanExercise
from fittrack.repositories import (
    ExerciseRepository, PlanExerciseRepository, UserRepository, WorkoutPlanRepository,
)
from fittrack.repositories.base import unit_of_work
from fittrack.repositories.ordering import insertion_index, resequence
from fittrack.validators import is_rest_day, require_day_of_week

log = logging.getLogger(__name__)

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

# index = day_of_week
DEFAULT_WEEK: tuple[tuple[str, ...], ...] = (
    ("Chest", "Triceps"),
    ("Back", "Biceps"),
    ("Legs", "Glutes"),
    ("Rest",),
    ("Shoulders", "Core"),
    ("Arms", "Abs"),
    ("Rest",),
)


@dataclass(slots=True)
class PlanEntry:
    entry: WorkoutPlanExercise
    exercise: Optional[Exercise]


class PlanComposer:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.plans = WorkoutPlanRepository(db)
        self.entries = PlanExerciseRepository(db)
        self.exercises = ExerciseRepository(db)

    # PLANS
    def _ensure_day_free(self, user_id: int, day_of_week: int, *, exclude_id: int | None = None) -> None:
        other = self.plans.active_for_day(user_id, day_of_week, exclude_id=exclude_id)
        if other is not None:
            raise ConflictError(
                f"plan {other.id} is already active for {DAY_NAMES[day_of_week]}", field="day_of_week"
            )

    def create_plan(self, user_id: int, **fields: Any) -> WorkoutPlan:
        plan = self.plans.build(user_id=user_id, **fields)
        if plan.is_active:
            self._ensure_day_free(user_id, plan.day_of_week)
        plan = self.plans.save(plan)
        log.info("created plan id=%s user=%s day=%s", plan.id, user_id, plan.day_of_week)
        return plan

    def update_plan(self, plan_id: int, fields: Mapping[str, Any]) -> WorkoutPlan:
        plan = self.plans.require(plan_id)
        day = fields.get("day_of_week", plan.day_of_week)
        if "day_of_week" in fields:
            require_day_of_week(day)
        if fields.get("is_active", plan.is_active):
            self._ensure_day_free(plan.user_id, day, exclude_id=plan.id)
        return self.plans.update(plan_id, fields)

    def delete_plan(self, plan_id: int) -> None:
        plan = self.plans.require(plan_id)
        if self.plans.session_count(plan_id):
            raise ConflictError("workout plan has recorded sessions", state="referenced")
        self.plans.delete(plan)
        log.info("deleted plan id=%s", plan_id)

    def seed_default_week(self, user_id: int) -> list[WorkoutPlan]:
        """Create the default split for every training day the user has no plan for.

        All plans are written in one transaction.
        """
        self.users.require(user_id)
        taken = {p.day_of_week for p in self.plans.list_by_user(user_id)}
        created: list[WorkoutPlan] = []
        with unit_of_work(self.db, "default week"):
            for day, groups in enumerate(DEFAULT_WEEK):
                if is_rest_day(groups) or day in taken:
                    continue
                plan = self.plans.build(
                    user_id=user_id,
                    name=f"{DAY_NAMES[day]} - {' & '.join(groups)}",
                    day_of_week=day,
                    muscle_groups=list(groups),
                    estimated_duration=45 if len(groups) == 1 else 60,
                )
                self.db.add(plan)
                created.append(plan)
            self.db.flush()
        self.plans.refresh(*created)
        log.info("seeded %d default plans for user=%s", len(created), user_id)
        return created

    # ENTRIES
    def list_for_plan(self, plan_id: int) -> list[PlanEntry]:
        self.plans.require(plan_id)
        return [PlanEntry(entry, ex) for entry, ex in self.entries.joined(plan_id)]

    def add_exercise(
        self,
        plan_id: int,
        exercise_id: int,
        *,
        sets: int,
        reps: int,
        weight: Optional[float] = None,
        rest_time: Optional[int] = None,
        order: Optional[int] = None,
    ) -> WorkoutPlanExercise:
        self.plans.require(plan_id)
        self.exercises.require(exercise_id)
        self.entries.validate({"sets": sets, "reps": reps, "weight": weight, "rest_time": rest_time})
        current = self.entries.entries(plan_id)
        idx = insertion_index(len(current), order)
        entry = WorkoutPlanExercise(
            workout_plan_id=plan_id,
            exercise_id=exercise_id,
            sets=sets,
            reps=reps,
            weight=weight,
            rest_time=rest_time,
            order=idx,
        )
        with unit_of_work(self.db, "WorkoutPlanExercise"):
            self.db.add(entry)
            resequence(self.db, current[:idx] + [entry] + current[idx:])
        self.entries.refresh(entry)
        log.info("plan=%s: added exercise=%s at order=%s", plan_id, exercise_id, entry.order)
        return entry

    def _require_entry(self, plan_id: int, entry_id: int) -> WorkoutPlanExercise:
        entry = self.entries.get(entry_id)
        if entry is None or entry.workout_plan_id != plan_id:
            raise NotFound("WorkoutPlanExercise", entry_id)
        return entry

    def update_entry(self, plan_id: int, entry_id: int, fields: Mapping[str, Any]) -> WorkoutPlanExercise:
        self._require_entry(plan_id, entry_id)
        return self.entries.update(entry_id, fields)

    def reorder(self, plan_id: int, entry_ids: Sequence[int]) -> list[PlanEntry]:
        self.plans.require(plan_id)
        current = {e.id: e for e in self.entries.entries(plan_id)}
        if len(entry_ids) != len(current) or set(entry_ids) != set(current):
            raise ValidationError("entry_ids must list every entry of the plan exactly once", field="entry_ids")
        with unit_of_work(self.db, "plan order"):
            resequence(self.db, [current[i] for i in entry_ids])
        return self.list_for_plan(plan_id)

    def remove(self, plan_id: int, entry_id: int) -> None:
        entry = self._require_entry(plan_id, entry_id)
        rest = [e for e in self.entries.entries(plan_id) if e.id != entry_id]
        with unit_of_work(self.db, "WorkoutPlanExercise"):
            self.db.delete(entry)
            self.db.flush()
            resequence(self.db, rest)
        log.info("plan=%s: removed entry=%s", plan_id, entry_id)
