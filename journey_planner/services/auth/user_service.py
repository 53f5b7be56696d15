"""User account administration."""

from collections.abc import Sequence

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from journey_planner.config import settings
from journey_planner.models.user import User, UserRole
from journey_planner.services.auth.exceptions import InvalidUserInput, UserAlreadyExists, UserNotFound
from journey_planner.services.auth.security import hash_password
from journey_planner.services.exceptions import storage_errors

logger = structlog.get_logger(__name__)

MIN_USERNAME_LENGTH = 3


def normalize_role(role: object) -> UserRole:
    """Map requested roles onto the two known ones ("employee" is a user)."""
    if role == UserRole.ADMIN:
        return UserRole.ADMIN
    return UserRole.USER


class UserService:
    """Service for creating and maintaining user accounts."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_users(self) -> Sequence[User]:
        statement = select(User).order_by(col(User.created_at).desc(), col(User.id).desc())
        with storage_errors("user list"):
            result = await self.session.execute(statement)
            return result.scalars().all()

    async def create_user(
        self,
        username: object,
        full_name: object = None,
        role: object = UserRole.USER,
        password: str | None = None,
    ) -> User:
        """Create an account.

        Without an explicit password the configured default is used and the
        user must change it on first login.
        """
        trimmed_username = username.strip() if isinstance(username, str) else ""
        trimmed_full_name = full_name.strip() if isinstance(full_name, str) else None

        if not trimmed_username:
            raise InvalidUserInput("Username is required")
        if len(trimmed_username) < MIN_USERNAME_LENGTH:
            raise InvalidUserInput(f"Username must be at least {MIN_USERNAME_LENGTH} characters")

        with storage_errors("user read"):
            existing = await self.session.execute(select(User.id).where(User.username == trimmed_username))
        if existing.first() is not None:
            raise UserAlreadyExists("Username already exists")

        user = User(
            username=trimmed_username,
            password_hash=hash_password(password or settings.default_new_user_password),
            full_name=trimmed_full_name or None,
            role=normalize_role(role),
            must_change_password=password is None,
        )
        self.session.add(user)
        try:
            with storage_errors("user create"):
                await self.session.commit()
                await self.session.refresh(user)
        except IntegrityError as e:
            # Lost a race with a concurrent create of the same username
            await self.session.rollback()
            raise UserAlreadyExists("Username already exists") from e

        logger.info("Created user", username=user.username, role=user.role)
        return user

    async def reset_password(self, user_id: int) -> User:
        """Reset to the default password and force a change on next login."""
        with storage_errors("user read"):
            user = await self.session.get(User, user_id)
        if user is None:
            raise UserNotFound()

        user.password_hash = hash_password(settings.default_new_user_password)
        user.must_change_password = True
        with storage_errors("password reset"):
            await self.session.commit()
            await self.session.refresh(user)

        logger.info("Reset user password", username=user.username)
        return user
