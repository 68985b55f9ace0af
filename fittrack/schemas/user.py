from typing import Annotated
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator
from datetime import datetime

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
UsernameStr = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
]
Feet = Annotated[int, Field(ge=0, le=9)]
Inches = Annotated[int, Field(ge=0, le=11)]
Kg = Annotated[float, Field(gt=0, le=700)]

class UserBase(BaseModel):
    email: EmailStr = Field(max_length=255)
    name: NameStr

class ProfileFields(BaseModel):
    height_feet: Feet | None = None
    height_inches: Inches | None = None
    current_weight: Kg | None = None
    goal_weight: Kg | None = None

class UserRegister(UserBase, ProfileFields):
    username: UsernameStr
    # checked in code: pydantic v2 regex has no look-arounds
    password: Annotated[str, Field(min_length=12, max_length=128)]

    @field_validator("password")
    @classmethod
    def password_policy(cls, v: str) -> str:
        # OWASP-ish: require lower, upper, digit, special
        if not any(c.islower() for c in v):
            raise ValueError("password must include a lowercase letter")
        if not any(c.isupper() for c in v):
            raise ValueError("password must include an uppercase letter")
        if not any(c.isdigit() for c in v):
            raise ValueError("password must include a digit")
        if not any(not c.isalnum() for c in v):
            raise ValueError("password must include a special character")
        return v

class UserLogin(BaseModel):
    email: EmailStr
    password: Annotated[str, Field(min_length=1, max_length=256)]

class UserUpdate(ProfileFields):
    name: NameStr | None = None

class UserRead(UserBase):
    id: int
    username: str
    height_feet: int | None = None
    height_inches: int | None = None
    current_weight: float | None = None
    goal_weight: float | None = None
    created_at: datetime
    model_config = {"from_attributes": True}

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
