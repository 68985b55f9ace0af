from __future__ import annotations
import logging
from typing import Any

from sqlalchemy.orm import Session

from fittrack.errors import Unauthorized
from fittrack.models import User
from fittrack.repositories import UserRepository
from fittrack.security import hash_password, verify_password

log = logging.getLogger(__name__)


class AccountService:
    def __init__(self, db: Session):
        self.users = UserRepository(db)

    def register(self, *, username: str, email: str, password: str, name: str, **profile: Any) -> User:
        return self.users.create(
            username=username,
            email=email,
            name=name,
            password_hash=hash_password(password),
            **profile,
        )

    def authenticate(self, email: str, password: str) -> User:
        # same message for unknown email and wrong password
        user = self.users.get_by_email(email)
        if not user or not user.password_hash or not verify_password(password, user.password_hash):
            log.info("failed login for %s", email)
            raise Unauthorized("invalid credentials")
        return user
