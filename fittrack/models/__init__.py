from fittrack.models.user import User
from fittrack.models.exercise import Exercise
from fittrack.models.workout_plan import WorkoutPlan
from fittrack.models.workout_plan_exercise import WorkoutPlanExercise
from fittrack.models.workout_session import WorkoutSession
from fittrack.models.exercise_log import ExerciseLog
from fittrack.models.weight_log import WeightLog

__all__ = [
    "User",
    "Exercise",
    "WorkoutPlan",
    "WorkoutPlanExercise",
    "WorkoutSession",
    "ExerciseLog",
    "WeightLog",
]
