# fittrack/deps/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from fittrack.db import get_db
from fittrack.models import User
from fittrack.repositories import UserRepository
from fittrack.security import token_user_id

# Swagger's "Authorize" button posts to the JSON login route
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> User:
    try:
        user_id = token_user_id(token)
    except ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except (JWTError, ValueError):
        raise _unauthorized("Not authenticated")

    user = UserRepository(db).get(user_id)
    if user is None:
        # token outlived its account row
        raise _unauthorized("Not authenticated")
    return user


def ensure_owner(owner_id: int | None, current: User, what: str) -> None:
    """Every plan, session, log and weight entry is private to its user."""
    if owner_id != current.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Not allowed for this {what}")


def require_self(user_id: int, current: User = Depends(get_current_user)) -> User:
    """
    Guard for /users/{user_id} routes.

    FastAPI fills ``user_id`` from the path parameter of the same name.
    """
    ensure_owner(user_id, current, "user")
    return current
