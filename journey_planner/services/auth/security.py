"""Password hashing and signed session tokens."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt
from pydantic import BaseModel

from journey_planner.config import settings
from journey_planner.models.user import User, UserRole
from journey_planner.services.auth.exceptions import InvalidSessionToken

# bcrypt only looks at the first 72 bytes
BCRYPT_MAX_BYTES = 72


class SessionUser(BaseModel):
    """Identity carried inside a session token."""

    id: int
    username: str
    role: str
    full_name: str | None = None
    must_change_password: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def hash_password(password: str) -> str:
    password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def create_session_token(user: User, expires_in: timedelta | None = None) -> str:
    """Sign a session token for the user."""
    expire = datetime.now(UTC) + (expires_in or timedelta(seconds=settings.session_max_age_seconds))
    claims: dict[str, Any] = {
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
        "full_name": user.full_name,
        "must_change_password": user.must_change_password,
        "exp": expire,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> SessionUser:
    """Verify a session token and return the identity it carries."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return SessionUser(
            id=int(payload["sub"]),
            username=payload["username"],
            role=payload["role"],
            full_name=payload.get("full_name"),
            must_change_password=payload.get("must_change_password", False),
        )
    except (JWTError, KeyError, ValueError) as e:
        raise InvalidSessionToken("Invalid session token") from e
