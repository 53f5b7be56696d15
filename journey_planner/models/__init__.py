"""Database models."""

from sqlmodel import SQLModel

from journey_planner.models.activity_log import ActivityAction, ActivityLog
from journey_planner.models.journey_plan import (
    JOURNEY_PLAN_NUMBER_CONSTRAINT,
    MAX_JOURNEY_PLAN_NUMBER,
    UPDATABLE_FIELDS,
    JourneyPlan,
)
from journey_planner.models.options import Driver, Location, RestType, Vehicle
from journey_planner.models.setting import NEXT_JOURNEY_PLAN_NUMBER_KEY, Setting
from journey_planner.models.user import User, UserRole

__all__ = [
    "SQLModel",
    "ActivityAction",
    "ActivityLog",
    "Driver",
    "JOURNEY_PLAN_NUMBER_CONSTRAINT",
    "JourneyPlan",
    "MAX_JOURNEY_PLAN_NUMBER",
    "Location",
    "NEXT_JOURNEY_PLAN_NUMBER_KEY",
    "RestType",
    "Setting",
    "UPDATABLE_FIELDS",
    "User",
    "UserRole",
    "Vehicle",
]
