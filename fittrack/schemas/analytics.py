from datetime import datetime
from pydantic import BaseModel

class WeeklyStatsRead(BaseModel):
    weekly_workouts: int
    total_workouts: int
    completed_workouts: int
    completion_rate: int
    week_start: datetime

    model_config = {"from_attributes": True}

class WeightTrendRead(BaseModel):
    latest: float | None = None
    oldest: float | None = None
    # newest minus oldest; positive = gained
    delta: float
    count: int
    goal_weight: float | None = None
    to_goal: float | None = None

    model_config = {"from_attributes": True}
