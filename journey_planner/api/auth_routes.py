"""Login, logout and password change endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, Request, Response

from journey_planner.api.dependencies import (
    ActivityLogServiceDep,
    AuthServiceDep,
    CurrentUserDep,
    extract_token,
)
from journey_planner.api.schemas import (
    ChangePasswordRequest,
    ChangePasswordResponse,
    LoginRequest,
    LoginResponse,
    MeResponse,
    PublicUser,
    SuccessResponse,
)
from journey_planner.config import settings
from journey_planner.models.activity_log import ActivityAction
from journey_planner.models.user import User
from journey_planner.services.auth.exceptions import (
    IncorrectCurrentPassword,
    InvalidCredentials,
    InvalidSessionToken,
    InvalidUserInput,
    UserNotFound,
)
from journey_planner.services.auth.security import create_session_token, decode_session_token

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def set_session_cookie(response: Response, user: User) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        create_session_token(user),
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


@router.post("/login", response_model=LoginResponse, operation_id="login")
async def login(
    body: LoginRequest,
    response: Response,
    service: AuthServiceDep,
    activity: ActivityLogServiceDep,
) -> LoginResponse:
    """Check credentials and start a cookie session."""
    try:
        user = await service.authenticate(body.username, body.password)
    except InvalidUserInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=str(e))

    set_session_cookie(response, user)
    # The audit write may roll the session back, so read the user first
    result = LoginResponse(user=PublicUser.from_model(user))
    await activity.record(result.user.username, ActivityAction.LOGIN)
    return result


@router.get("/me", response_model=MeResponse, operation_id="getCurrentUser")
async def me(
    current_user: CurrentUserDep,
    response: Response,
    service: AuthServiceDep,
) -> MeResponse:
    """Current user, re-read from the database; the session cookie is refreshed."""
    try:
        user = await service.get_user(current_user.id)
    except UserNotFound:
        raise HTTPException(status_code=404, detail="User not found")

    set_session_cookie(response, user)
    return MeResponse(user=PublicUser.from_model(user))


@router.post("/logout", response_model=SuccessResponse, operation_id="logout")
async def logout(
    request: Request,
    response: Response,
    activity: ActivityLogServiceDep,
) -> SuccessResponse:
    """Clear the session cookie. Works without a valid session."""
    token = extract_token(request)
    if token:
        try:
            session_user = decode_session_token(token)
        except InvalidSessionToken:
            logger.debug("Logout with invalid session token")
        else:
            await activity.record(session_user.username, ActivityAction.LOGOUT)

    clear_session_cookie(response)
    return SuccessResponse()


@router.post("/change-password", response_model=ChangePasswordResponse, operation_id="changePassword")
async def change_password(
    body: ChangePasswordRequest,
    current_user: CurrentUserDep,
    response: Response,
    service: AuthServiceDep,
    activity: ActivityLogServiceDep,
) -> ChangePasswordResponse:
    """Change own password, or (admins) another user's password."""
    try:
        user = await service.change_password(
            current_user,
            new_password=body.new_password,
            current_password=body.current_password,
            target_username=body.username,
        )
    except InvalidUserInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IncorrectCurrentPassword as e:
        raise HTTPException(status_code=401, detail=str(e))
    except UserNotFound:
        raise HTTPException(status_code=404, detail="User not found")

    is_self_update = user.username == current_user.username
    # An admin changing someone else's password keeps their own session
    if is_self_update:
        set_session_cookie(response, user)

    result = ChangePasswordResponse(user=PublicUser.from_model(user))
    await activity.record(
        current_user.username,
        ActivityAction.CHANGE_PASSWORD,
        details={} if is_self_update else {"target_user": user.username},
    )
    return result
