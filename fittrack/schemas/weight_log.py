from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

class WeightLogCreate(BaseModel):
    weight: Annotated[float, Field(gt=0, le=700)]
    # defaults to now
    date: datetime | None = None
    notes: Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)] | None = None

class WeightLogRead(BaseModel):
    id: int
    user_id: int
    weight: float
    date: datetime
    notes: str | None = None

    model_config = {"from_attributes": True}
