# fittrack/repositories/user_repo.py
from __future__ import annotations
import logging
from typing import Any, Mapping, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from fittrack.errors import ConflictError, StorageError
from fittrack.models import User
from fittrack.repositories.base import BaseRepository

log = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    model = User
    entity_name = "User"
    immutable_fields = frozenset({"id", "created_at", "password_hash"})

    # READS
    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.one_or_none(stmt)

    def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.username) == username.lower())
        return self.one_or_none(stmt)

    def _ensure_unique(self, *, email: str | None, username: str | None, exclude_id: int | None = None) -> None:
        if email is not None:
            other = self.get_by_email(email)
            if other and other.id != exclude_id:
                raise ConflictError("email already registered", field="email")
        if username is not None:
            other = self.get_by_username(username)
            if other and other.id != exclude_id:
                raise ConflictError("username already taken", field="username")

    # WRITES
    def create(self, *, username: str, email: str, name: str, password_hash: str, **profile: Any) -> User:
        self._ensure_unique(email=email, username=username)
        user = User(username=username, email=email, name=name, password_hash=password_hash, **profile)
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent registration
            self.db.rollback()
            raise ConflictError("email or username already registered", field="email")
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("failed to save User") from e
        self.refresh(user)
        log.info("created user id=%s username=%s", user.id, user.username)
        return user

    def update(self, user_id: int, fields: Mapping[str, Any]) -> User:
        self.require(user_id)
        self._ensure_unique(email=fields.get("email"), username=fields.get("username"), exclude_id=user_id)
        return super().update(user_id, fields)
