"""User administration endpoints (admin only)."""

from fastapi import APIRouter, HTTPException

from journey_planner.api.dependencies import ActivityLogServiceDep, AdminUserDep, UserServiceDep
from journey_planner.api.schemas import (
    CreateUserRequest,
    DefaultPasswordResponse,
    PublicUser,
    UserListResponse,
    UserWithPasswordResponse,
)
from journey_planner.config import settings
from journey_planner.models.activity_log import ActivityAction
from journey_planner.services.auth.exceptions import InvalidUserInput, UserAlreadyExists, UserNotFound

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserWithPasswordResponse, status_code=201, operation_id="createUser")
async def create_user(
    body: CreateUserRequest,
    admin: AdminUserDep,
    service: UserServiceDep,
    activity: ActivityLogServiceDep,
) -> UserWithPasswordResponse:
    """Create an account with the default password."""
    try:
        user = await service.create_user(body.username, full_name=body.full_name, role=body.role)
    except InvalidUserInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UserAlreadyExists as e:
        raise HTTPException(status_code=409, detail=str(e))

    result = UserWithPasswordResponse(
        user=PublicUser.from_model(user),
        default_password=settings.default_new_user_password,
    )
    await activity.record(
        admin.username,
        ActivityAction.CREATE_USER,
        details={"created_user": user.username, "role": user.role},
    )
    return result


@router.get("/default-password", response_model=DefaultPasswordResponse, operation_id="getDefaultPassword")
async def get_default_password(admin: AdminUserDep) -> DefaultPasswordResponse:
    return DefaultPasswordResponse(default_password=settings.default_new_user_password)


@router.get("", response_model=UserListResponse, operation_id="listUsers")
async def list_users(admin: AdminUserDep, service: UserServiceDep) -> UserListResponse:
    """List users, newest first."""
    users = await service.list_users()
    return UserListResponse(users=[PublicUser.from_model(user) for user in users])


@router.post(
    "/{user_id}/reset-password",
    response_model=UserWithPasswordResponse,
    operation_id="resetUserPassword",
)
async def reset_password(
    user_id: int,
    admin: AdminUserDep,
    service: UserServiceDep,
    activity: ActivityLogServiceDep,
) -> UserWithPasswordResponse:
    """Reset a user's password to the default; they must change it on next login."""
    try:
        user = await service.reset_password(user_id)
    except UserNotFound:
        raise HTTPException(status_code=404, detail="User not found")

    result = UserWithPasswordResponse(
        user=PublicUser.from_model(user),
        default_password=settings.default_new_user_password,
    )
    await activity.record(admin.username, ActivityAction.RESET_PASSWORD, details={"target_user": user.username})
    return result
