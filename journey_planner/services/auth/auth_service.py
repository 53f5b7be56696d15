"""Login and password management."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from journey_planner.config import MIN_PASSWORD_LENGTH
from journey_planner.models.types import utc_now
from journey_planner.models.user import User
from journey_planner.services.auth.exceptions import (
    IncorrectCurrentPassword,
    InvalidCredentials,
    InvalidUserInput,
    UserNotFound,
)
from journey_planner.services.auth.security import SessionUser, hash_password, verify_password
from journey_planner.services.exceptions import storage_errors

logger = structlog.get_logger(__name__)


class AuthService:
    """Service for authenticating users and changing passwords."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: int) -> User:
        with storage_errors("user read"):
            user = await self.session.get(User, user_id)
        if user is None:
            raise UserNotFound()
        return user

    async def get_user_by_username(self, username: str) -> User:
        with storage_errors("user read"):
            result = await self.session.execute(select(User).where(User.username == username))
            user = result.scalars().first()
        if user is None:
            raise UserNotFound()
        return user

    async def authenticate(self, username: str | None, password: str | None) -> User:
        """Check credentials and stamp last_login."""
        if not username or not password:
            raise InvalidUserInput("Username and password are required")

        try:
            user = await self.get_user_by_username(username)
        except UserNotFound:
            raise InvalidCredentials("Invalid username or password") from None

        if not verify_password(password, user.password_hash):
            logger.info("Rejected login", username=username)
            raise InvalidCredentials("Invalid username or password")

        user.last_login = utc_now()
        with storage_errors("login"):
            await self.session.commit()
        logger.info("User logged in", username=username, role=user.role)
        return user

    async def change_password(
        self,
        actor: SessionUser,
        new_password: str | None,
        current_password: str | None = None,
        target_username: str | None = None,
    ) -> User:
        """Change the actor's password, or another user's when the actor is an admin.

        The current password must be supplied for self-updates and for
        non-admins, and is checked whenever it is supplied. Users whose
        password was set by an admin must change it on next login.
        """
        if not new_password or not isinstance(new_password, str):
            raise InvalidUserInput("New password is required")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise InvalidUserInput(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")

        username = target_username if actor.is_admin and target_username else actor.username
        user = await self.get_user_by_username(username)
        is_self_update = username == actor.username

        if is_self_update or not actor.is_admin or current_password:
            if not current_password:
                raise InvalidUserInput("Current password is required")
            if not verify_password(current_password, user.password_hash):
                raise IncorrectCurrentPassword("Current password is incorrect")

        user.password_hash = hash_password(new_password)
        user.must_change_password = not is_self_update
        with storage_errors("password change"):
            await self.session.commit()
            await self.session.refresh(user)

        logger.info("Password changed", username=username, changed_by=actor.username)
        return user
