"""FastAPI dependencies for service injection and session authentication."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from journey_planner.config import settings
from journey_planner.db import get_session
from journey_planner.services.activity_log_service import ActivityLogService
from journey_planner.services.auth.auth_service import AuthService
from journey_planner.services.auth.exceptions import InvalidSessionToken
from journey_planner.services.auth.security import SessionUser, decode_session_token
from journey_planner.services.auth.user_service import UserService
from journey_planner.services.journey_plans.journey_plan_service import JourneyPlanService
from journey_planner.services.options_service import OptionsService

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_journey_plan_service(session: SessionDep) -> JourneyPlanService:
    """Get a JourneyPlanService instance with the current session."""
    return JourneyPlanService(session)


async def get_auth_service(session: SessionDep) -> AuthService:
    """Get an AuthService instance with the current session."""
    return AuthService(session)


async def get_user_service(session: SessionDep) -> UserService:
    """Get a UserService instance with the current session."""
    return UserService(session)


async def get_activity_log_service(session: SessionDep) -> ActivityLogService:
    """Get an ActivityLogService instance with the current session."""
    return ActivityLogService(session)


async def get_options_service(session: SessionDep) -> OptionsService:
    """Get an OptionsService instance with the current session."""
    return OptionsService(session)


def extract_token(request: Request) -> str | None:
    """Session token from the Authorization header, else the session cookie."""
    header = request.headers.get("Authorization")
    if header and header.startswith("Bearer "):
        return header[len("Bearer ") :]
    return request.cookies.get(settings.session_cookie_name)


async def get_current_user(request: Request) -> SessionUser:
    token = extract_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return decode_session_token(token)
    except InvalidSessionToken:
        raise HTTPException(status_code=401, detail="Unauthorized")


async def require_admin(user: Annotated[SessionUser, Depends(get_current_user)]) -> SessionUser:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Forbidden")
    return user


# Type aliases for cleaner endpoint signatures
JourneyPlanServiceDep = Annotated[JourneyPlanService, Depends(get_journey_plan_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ActivityLogServiceDep = Annotated[ActivityLogService, Depends(get_activity_log_service)]
OptionsServiceDep = Annotated[OptionsService, Depends(get_options_service)]
CurrentUserDep = Annotated[SessionUser, Depends(get_current_user)]
AdminUserDep = Annotated[SessionUser, Depends(require_admin)]
