"""Authentication and user account services."""

from journey_planner.services.auth.auth_service import AuthService
from journey_planner.services.auth.security import SessionUser
from journey_planner.services.auth.user_service import UserService

__all__ = ["AuthService", "SessionUser", "UserService"]
