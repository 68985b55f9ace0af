from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

from fittrack.schemas.exercise import ExerciseRead, MuscleGroup

PlanName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
DayOfWeek = Annotated[int, Field(ge=0, le=6, description="0 = Sunday")]
PosInt = Annotated[int, Field(ge=1)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0, le=1000)]
MuscleGroups = Annotated[list[MuscleGroup], Field(min_length=1)]

class PlanCreate(BaseModel):
    name: PlanName
    day_of_week: DayOfWeek
    muscle_groups: MuscleGroups
    estimated_duration: PosInt
    is_active: bool = True

class PlanUpdate(BaseModel):
    name: PlanName | None = None
    day_of_week: DayOfWeek | None = None
    muscle_groups: MuscleGroups | None = None
    estimated_duration: PosInt | None = None
    is_active: bool | None = None

class PlanRead(BaseModel):
    id: int
    user_id: int
    name: str
    day_of_week: int
    muscle_groups: list[str]
    estimated_duration: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}

class PlanExerciseCreate(BaseModel):
    exercise_id: int
    sets: PosInt
    reps: PosInt
    weight: NonNegFloat | None = None
    rest_time: NonNegInt | None = None
    # omitted -> appended; occupied -> inserted there, later entries shift down
    order: NonNegInt | None = None

class PlanExerciseUpdate(BaseModel):
    sets: PosInt | None = None
    reps: PosInt | None = None
    weight: NonNegFloat | None = None
    rest_time: NonNegInt | None = None

class PlanExerciseRead(BaseModel):
    id: int
    workout_plan_id: int
    exercise_id: int
    sets: int
    reps: int
    weight: float | None = None
    rest_time: int | None = None
    order: int

    model_config = {"from_attributes": True}

class PlanEntryRead(PlanExerciseRead):
    exercise: ExerciseRead | None = None

class PlanReorder(BaseModel):
    entry_ids: list[int]
