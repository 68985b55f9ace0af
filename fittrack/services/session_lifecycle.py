# fittrack/services/session_lifecycle.py
"""Workout session state machine.

A session is *in progress* while ``end_time`` is null. ``finish`` moves it to
*completed* (``is_completed`` true) or *abandoned* (false); both are terminal
and every later write is rejected with ``ConflictError``.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.orm import Session

from fittrack.db import as_utc, utcnow
from fittrack.errors import ConflictError, ValidationError
from fittrack.models import ExerciseLog, WorkoutSession
from fittrack.repositories import (
    ExerciseLogRepository, ExerciseRepository, PlanExerciseRepository,
    SessionRepository, UserRepository, WorkoutPlanRepository,
)
from fittrack.repositories.base import unit_of_work
from fittrack.repositories.ordering import insertion_index, resequence
from fittrack.validators import require_text

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]

LOG_FIELDS = frozenset({"sets", "reps", "weight", "is_completed"})
DETAIL_FIELDS = frozenset({"name", "notes"})


class SessionLifecycle:
    def __init__(self, db: Session, clock: Clock = utcnow):
        self.db = db
        self.clock = clock
        self.users = UserRepository(db)
        self.plans = WorkoutPlanRepository(db)
        self.plan_entries = PlanExerciseRepository(db)
        self.sessions = SessionRepository(db)
        self.logs = ExerciseLogRepository(db)
        self.exercises = ExerciseRepository(db)

    def get(self, session_id: int) -> WorkoutSession:
        return self.sessions.require(session_id)

    def _require_open(self, session: WorkoutSession) -> None:
        if session.is_terminal:
            raise ConflictError(f"session {session.id} already ended", state=session.state)

    def start(
        self,
        user_id: int,
        *,
        name: Optional[str] = None,
        plan_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> WorkoutSession:
        """Open a session; with a plan, seed one log per plan entry in the same transaction."""
        self.users.require(user_id)
        plan = None
        if plan_id is not None:
            plan = self.plans.require(plan_id)
            if plan.user_id != user_id:
                raise ValidationError("workout plan belongs to another user", field="workout_plan_id")
        name = require_text(name or (plan.name if plan else None), "name")

        session = WorkoutSession(
            user_id=user_id,
            workout_plan_id=plan_id,
            name=name,
            start_time=as_utc(self.clock()),
            end_time=None,
            is_completed=False,
            notes=notes,
        )
        with unit_of_work(self.db, "WorkoutSession"):
            self.db.add(session)
            self.db.flush()
            if plan is not None:
                for entry in self.plan_entries.entries(plan.id):
                    self.db.add(ExerciseLog(
                        workout_session_id=session.id,
                        exercise_id=entry.exercise_id,
                        sets=entry.sets,
                        reps=entry.reps,
                        weight=entry.weight,
                        is_completed=False,
                        order=entry.order,
                    ))
                self.db.flush()
        self.sessions.refresh(session)
        log.info("started session id=%s user=%s plan=%s", session.id, user_id, plan_id)
        return session

    def list_logs(self, session_id: int) -> list[ExerciseLog]:
        self.sessions.require(session_id)
        return self.logs.list_by_session(session_id)

    def log_exercise(
        self,
        session_id: int,
        exercise_id: int,
        *,
        sets: int,
        reps: int,
        weight: Optional[float] = None,
        order: Optional[int] = None,
    ) -> ExerciseLog:
        session = self.sessions.require(session_id)
        self._require_open(session)
        self.exercises.require(exercise_id)
        self.logs.validate({"sets": sets, "reps": reps, "weight": weight})
        current = self.logs.list_by_session(session_id)
        idx = insertion_index(len(current), order)
        entry = ExerciseLog(
            workout_session_id=session_id,
            exercise_id=exercise_id,
            sets=sets,
            reps=reps,
            weight=weight,
            is_completed=False,
            order=idx,
        )
        with unit_of_work(self.db, "ExerciseLog"):
            self.db.add(entry)
            resequence(self.db, current[:idx] + [entry] + current[idx:])
        self.logs.refresh(entry)
        return entry

    def update_log(self, log_id: int, fields: Mapping[str, Any]) -> ExerciseLog:
        """Edit performed sets/reps/weight or tick a log off; the session itself is untouched."""
        entry = self.logs.require(log_id)
        self._require_open(self.sessions.require(entry.workout_session_id))
        for key in fields:
            if key not in LOG_FIELDS:
                raise ValidationError(f"{key} cannot be changed on an exercise log", field=key)
        return self.logs.update(log_id, fields)

    def update_details(self, session_id: int, fields: Mapping[str, Any]) -> WorkoutSession:
        session = self.sessions.require(session_id)
        self._require_open(session)
        fields = dict(fields)
        for key in fields:
            if key not in DETAIL_FIELDS:
                raise ValidationError(f"{key} cannot be changed here", field=key)
        if "name" in fields:
            fields["name"] = require_text(fields["name"], "name")
        return self.sessions.update(session_id, fields)

    def finish(self, session_id: int, *, is_completed: bool, notes: Optional[str] = None) -> WorkoutSession:
        session = self.sessions.require(session_id)
        if session.is_terminal:
            log.warning("refused to finish session id=%s: already %s", session_id, session.state)
            raise ConflictError("session already ended", state=session.state)
        # end_time never precedes start_time, even with a skewed clock
        session.end_time = max(as_utc(self.clock()), as_utc(session.start_time))
        session.is_completed = bool(is_completed)
        if notes is not None:
            session.notes = notes
        self.sessions.commit(session)
        log.info("session id=%s %s", session_id, session.state)
        return session

    def abandon(self, session_id: int, *, notes: Optional[str] = None) -> WorkoutSession:
        return self.finish(session_id, is_completed=False, notes=notes)
