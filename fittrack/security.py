"""Password hashing and bearer tokens.

Tokens are HS256 JWTs whose ``sub`` is the user id as a string; ``usr``
carries the username for clients that want to show it without a lookup.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext

from fittrack.settings import get_settings

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

REQUIRED_CLAIMS = ("sub", "exp")


def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_ctx.verify(plain, hashed)


def create_access_token(
    user_id: int,
    *,
    username: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    s = get_settings()
    issued = datetime.now(timezone.utc)
    ttl = timedelta(minutes=expires_minutes or s.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims: Dict[str, Any] = {"sub": str(user_id), "iat": issued, "exp": issued + ttl}
    if username:
        claims["usr"] = username
    return jwt.encode(claims, s.SECRET_KEY, algorithm=s.ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Raises ExpiredSignatureError once ``exp`` has passed, JWTError otherwise."""
    s = get_settings()
    claims = jwt.decode(token, s.SECRET_KEY, algorithms=[s.ALGORITHM])
    missing = [c for c in REQUIRED_CLAIMS if c not in claims]
    if missing:
        raise JWTClaimsError(f"missing claims: {', '.join(missing)}")
    return claims


def token_user_id(token: str) -> int:
    """The user id a token was issued for; ValueError if ``sub`` is not numeric."""
    return int(decode_token(token)["sub"])
