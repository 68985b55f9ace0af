from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fittrack.db import get_db
from fittrack.repositories import UserRepository
from fittrack.schemas.user import UserRead, UserUpdate
from fittrack.deps.auth import require_self

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db), _auth=Depends(require_self)):
    return UserRepository(db).require(user_id)

@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    _auth=Depends(require_self),
):
    return UserRepository(db).update(user_id, payload.model_dump(exclude_unset=True, exclude_none=True))
