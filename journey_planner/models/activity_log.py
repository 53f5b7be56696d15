"""Audit trail model."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from journey_planner.models.types import JSONType, utc_now


class ActivityAction(StrEnum):
    """Actions recorded in the audit trail."""

    LOGIN = "login"
    LOGOUT = "logout"
    CHANGE_PASSWORD = "change_password"
    CREATE_USER = "create_user"
    RESET_PASSWORD = "reset_password"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SET_NEXT_NUMBER = "set_next_number"


class ActivityLog(SQLModel, table=True):
    """Who did what, and to which journey plan."""

    __tablename__ = "activity_logs"

    id: int | None = Field(default=None, primary_key=True)
    user_name: str
    action: str = Field(index=True)
    journey_plan_number: int | None = None
    details: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType, nullable=False))
    created_at: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
