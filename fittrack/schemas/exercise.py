from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

ExerciseName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
MuscleGroup = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=40)]
UrlStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class ExerciseCreate(BaseModel):
    name: ExerciseName
    muscle_groups: Annotated[list[MuscleGroup], Field(min_length=1)]
    description: str | None = None
    instructions: str | None = None
    # media lives outside the service; only the reference is stored
    image_url: UrlStr | None = None
    video_url: UrlStr | None = None

class ExerciseUpdate(BaseModel):
    name: ExerciseName | None = None
    muscle_groups: Annotated[list[MuscleGroup], Field(min_length=1)] | None = None
    description: str | None = None
    instructions: str | None = None
    image_url: UrlStr | None = None
    video_url: UrlStr | None = None

class ExerciseRead(BaseModel):
    id: int
    name: str
    description: str | None = None
    muscle_groups: list[str]
    instructions: str | None = None
    image_url: str | None = None
    video_url: str | None = None
    is_custom: bool
    created_by: int | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
