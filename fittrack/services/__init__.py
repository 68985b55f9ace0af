from fittrack.services.accounts import AccountService
from fittrack.services.analytics import AnalyticsService
from fittrack.services.plan_composition import PlanComposer
from fittrack.services.session_lifecycle import SessionLifecycle

__all__ = ["AccountService", "AnalyticsService", "PlanComposer", "SessionLifecycle"]
