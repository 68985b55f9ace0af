from typing import Annotated, Literal
from datetime import datetime
from pydantic import BaseModel, StringConstraints

# Notes: trimmed, up to 500 chars
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
SessionName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class SessionStart(BaseModel):
    # defaults to the plan's name
    name: SessionName | None = None
    workout_plan_id: int | None = None
    notes: NotesStr | None = None

class SessionUpdate(BaseModel):
    name: SessionName | None = None
    notes: NotesStr | None = None

class SessionFinish(BaseModel):
    is_completed: bool = True
    notes: NotesStr | None = None

class SessionRead(BaseModel):
    id: int
    user_id: int
    workout_plan_id: int | None = None
    name: str
    start_time: datetime
    end_time: datetime | None = None
    is_completed: bool
    notes: str | None = None
    state: Literal["in_progress", "completed", "abandoned"]

    model_config = {"from_attributes": True}
