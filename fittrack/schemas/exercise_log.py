from typing import Annotated
from pydantic import BaseModel, Field

PosInt = Annotated[int, Field(ge=1)]
NonNegFloat = Annotated[float, Field(ge=0, le=1000)]

class LogCreate(BaseModel):
    exercise_id: int
    sets: PosInt
    reps: PosInt
    weight: NonNegFloat | None = None
    order: Annotated[int, Field(ge=0)] | None = None

class LogUpdate(BaseModel):
    sets: PosInt | None = None
    reps: PosInt | None = None
    weight: NonNegFloat | None = None
    is_completed: bool | None = None

class LogRead(BaseModel):
    id: int
    workout_session_id: int
    exercise_id: int
    sets: int
    reps: int
    weight: float | None = None
    is_completed: bool
    order: int

    model_config = {"from_attributes": True}
