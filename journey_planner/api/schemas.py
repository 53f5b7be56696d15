"""API request and response schemas.

JSON keys follow the front-end's conventions: record fields are snake_case
as stored, envelope keys (nextNumber, defaultPassword, ...) are camelCase.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from journey_planner.models.activity_log import ActivityLog
from journey_planner.models.journey_plan import JourneyPlan
from journey_planner.models.user import User
from journey_planner.utils.datetime_utils import to_api_isoformat

# =============================================================================
# Users and sessions
# =============================================================================


class PublicUser(BaseModel):
    """User as exposed to clients (no password hash)."""

    id: int
    username: str
    full_name: str | None
    role: str
    must_change_password: bool
    created_at: datetime | None
    last_login: datetime | None

    @field_serializer("created_at", "last_login")
    def serialize_datetime(self, dt: datetime | None) -> str | None:
        """Serialize datetime to API timezone."""
        return to_api_isoformat(dt)

    @classmethod
    def from_model(cls, user: User) -> "PublicUser":
        return cls(
            id=user.id,  # type: ignore[arg-type]
            username=user.username,
            full_name=user.full_name,
            role=user.role,
            must_change_password=user.must_change_password,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    success: bool = True
    user: PublicUser


class MeResponse(BaseModel):
    user: PublicUser


class SuccessResponse(BaseModel):
    success: bool = True


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None  # admins only: whose password to change
    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: Any = Field(default=None, alias="newPassword")


class ChangePasswordResponse(BaseModel):
    success: bool = True
    message: str = "Password changed successfully"
    user: PublicUser


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: Any = None
    full_name: Any = Field(default=None, alias="fullName")
    role: Any = "user"


class UserWithPasswordResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: PublicUser
    default_password: str = Field(alias="defaultPassword")


class UserListResponse(BaseModel):
    users: list[PublicUser]


class DefaultPasswordResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    default_password: str = Field(alias="defaultPassword")


# =============================================================================
# Audit log
# =============================================================================


class ActivityLogResponse(BaseModel):
    id: int
    user_name: str
    action: str
    journey_plan_number: int | None
    details: dict[str, Any]
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, dt: datetime) -> str | None:
        """Serialize datetime to API timezone."""
        return to_api_isoformat(dt)

    @classmethod
    def from_model(cls, entry: ActivityLog) -> "ActivityLogResponse":
        return cls(
            id=entry.id,  # type: ignore[arg-type]
            user_name=entry.user_name,
            action=entry.action,
            journey_plan_number=entry.journey_plan_number,
            details=entry.details,
            created_at=entry.created_at,
        )


class ActivityLogListResponse(BaseModel):
    data: list[ActivityLogResponse]


# =============================================================================
# Journey plans
# =============================================================================


class JourneyPlanResponse(BaseModel):
    id: int
    journey_plan_number: int
    departure_date: date | None
    vehicle_number: str | None
    driver_name: str | None
    from_location: str | None
    from_departure_time: str | None
    to_location: str | None
    to_arrival_time: str | None
    call_journey_manager: str | None
    signature_date: date | None
    journey_plan_number_hint: str | None
    passengers: list[Any]
    rest_stops: list[Any]
    route_snapshot: dict[str, Any]
    notes: str | None
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_timestamps(self, dt: datetime) -> str | None:
        """Serialize datetime to API timezone."""
        return to_api_isoformat(dt)

    @classmethod
    def from_model(cls, plan: JourneyPlan) -> "JourneyPlanResponse":
        return cls.model_validate(plan, from_attributes=True)


class JourneyPlanDataResponse(BaseModel):
    data: JourneyPlanResponse


class JourneyPlanListResponse(BaseModel):
    data: list[JourneyPlanResponse]


class JourneyPlanDeletedResponse(BaseModel):
    message: str = "Journey plan deleted successfully"
    data: JourneyPlanResponse


class NextNumberResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    next_number: int = Field(alias="nextNumber")


class NextNumberRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Validated by the allocator so that bad input maps to 400, not 422
    next_number: Any = Field(default=None, alias="nextNumber")


# =============================================================================
# Options
# =============================================================================


class DriverResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str | None
    gsm: str | None


class VehicleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    number: str


class NamedOptionResponse(BaseModel):
    """Location or rest type."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class DriverCreateRequest(BaseModel):
    name: Any = None
    code: str | None = None
    gsm: str | None = None


class VehicleCreateRequest(BaseModel):
    number: Any = None


class NamedOptionCreateRequest(BaseModel):
    name: Any = None


class DriverListResponse(BaseModel):
    data: list[DriverResponse]


class DriverDataResponse(BaseModel):
    data: DriverResponse


class VehicleListResponse(BaseModel):
    data: list[VehicleResponse]


class VehicleDataResponse(BaseModel):
    data: VehicleResponse


class NamedOptionListResponse(BaseModel):
    data: list[NamedOptionResponse]


class NamedOptionDataResponse(BaseModel):
    data: NamedOptionResponse


# =============================================================================
# Health
# =============================================================================


class HealthResponse(BaseModel):
    ok: bool = True
    timestamp: str
