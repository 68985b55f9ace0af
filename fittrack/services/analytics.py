# fittrack/services/analytics.py
"""Read-only workout and body-weight metrics.

Nothing here writes. The pure helpers (``week_start``, ``completion_rate``,
``weight_delta``) take plain values; ``AnalyticsService`` gathers those values
from the repositories.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from fittrack.db import utcnow
from fittrack.repositories import SessionRepository, UserRepository, WeightLogRepository
from fittrack.settings import get_settings

DAYS_PER_WEEK = 7


def resolve_tz(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def week_start(reference: datetime, tz: tzinfo) -> datetime:
    """Local midnight of the Sunday that starts the week containing ``reference``.

    A naive ``reference`` is read as local time in ``tz``.
    """
    local = reference.replace(tzinfo=tz) if reference.tzinfo is None else reference.astimezone(tz)
    days_since_sunday = (local.weekday() + 1) % 7  # weekday(): Monday == 0
    return datetime.combine(local.date() - timedelta(days=days_since_sunday), time.min, tzinfo=tz)


def completion_rate(weekly_workouts: int) -> int:
    """Share of the 7 days of a week with a completed workout, as a 0-100 integer."""
    pct = round(weekly_workouts / DAYS_PER_WEEK * 100)
    return max(0, min(100, pct))


def weight_delta(weights_newest_first: Sequence[float]) -> float:
    """Newest minus oldest weight; positive means weight was gained.

    Fewer than two values give 0.
    """
    if len(weights_newest_first) < 2:
        return 0.0
    return round(weights_newest_first[0] - weights_newest_first[-1], 2)


@dataclass(slots=True)
class WeeklyStats:
    weekly_workouts: int
    total_workouts: int
    completed_workouts: int
    completion_rate: int
    week_start: datetime


@dataclass(slots=True)
class WeightTrend:
    latest: Optional[float]
    oldest: Optional[float]
    delta: float
    count: int
    goal_weight: Optional[float]
    to_goal: Optional[float]


class AnalyticsService:
    def __init__(self, db: Session, tz: Optional[tzinfo] = None):
        self.users = UserRepository(db)
        self.sessions = SessionRepository(db)
        self.weights = WeightLogRepository(db)
        self.tz = tz or resolve_tz(get_settings().TIMEZONE)

    def weekly_stats(self, user_id: int, reference: Optional[datetime] = None) -> WeeklyStats:
        """Counts are per user. ``weekly_workouts`` stops at the following Sunday, so a past
        ``reference`` reports that week alone rather than everything since it.
        """
        self.users.require(user_id)
        start = week_start(reference or utcnow(), self.tz)
        end = datetime.combine(start.date() + timedelta(days=DAYS_PER_WEEK), time.min, tzinfo=self.tz)
        weekly = self.sessions.count(
            user_id,
            completed=True,
            started_from=start.astimezone(timezone.utc),
            started_before=end.astimezone(timezone.utc),
        )
        return WeeklyStats(
            weekly_workouts=weekly,
            total_workouts=self.sessions.count(user_id),
            completed_workouts=self.sessions.count(user_id, completed=True),
            completion_rate=completion_rate(weekly),
            week_start=start,
        )

    def weight_trend(self, user_id: int) -> WeightTrend:
        user = self.users.require(user_id)
        weights = [w.weight for w in self.weights.list_by_user(user_id)]
        latest = weights[0] if weights else user.current_weight
        goal = user.goal_weight
        return WeightTrend(
            latest=latest,
            oldest=weights[-1] if weights else None,
            delta=weight_delta(weights),
            count=len(weights),
            goal_weight=goal,
            to_goal=round(latest - goal, 2) if latest is not None and goal is not None else None,
        )
