from fittrack.repositories.user_repo import UserRepository
from fittrack.repositories.exercise_repo import ExerciseRepository
from fittrack.repositories.plan_repo import WorkoutPlanRepository
from fittrack.repositories.plan_exercise_repo import PlanExerciseRepository
from fittrack.repositories.session_repo import SessionRepository
from fittrack.repositories.exercise_log_repo import ExerciseLogRepository
from fittrack.repositories.weight_log_repo import WeightLogRepository

__all__ = [
    "UserRepository",
    "ExerciseRepository",
    "WorkoutPlanRepository",
    "PlanExerciseRepository",
    "SessionRepository",
    "ExerciseLogRepository",
    "WeightLogRepository",
]
