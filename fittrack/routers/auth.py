from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fittrack.db import get_db
from fittrack.models import User
from fittrack.schemas.user import LoginResponse, UserRegister, UserLogin, UserRead
from fittrack.security import create_access_token
from fittrack.deps.auth import get_current_user
from fittrack.services import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    # 409 on a taken email/username comes from ConflictError
    profile = payload.model_dump(
        include={"height_feet", "height_inches", "current_weight", "goal_weight"}, exclude_none=True
    )
    return AccountService(db).register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        name=payload.name,
        **profile,
    )

@router.post("/login", response_model=LoginResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = AccountService(db).authenticate(payload.email, payload.password)
    return LoginResponse(access_token=create_access_token(user.id, username=user.username), user=UserRead.model_validate(user))

@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
