"""Journey plan database model."""

from datetime import date, datetime
from typing import Any

from sqlalchemy import Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from journey_planner.models.types import JSONType, utc_now

# Named so that conflict detection can tell it apart from other integrity errors
JOURNEY_PLAN_NUMBER_CONSTRAINT = UniqueConstraint(
    "journey_plan_number", name="uq_journey_plans_journey_plan_number"
)

# Upper bound of the INTEGER column
MAX_JOURNEY_PLAN_NUMBER = 2**31 - 1

# Fields a client may change on an existing plan
UPDATABLE_FIELDS: tuple[str, ...] = (
    "journey_plan_number",
    "departure_date",
    "vehicle_number",
    "driver_name",
    "from_location",
    "from_departure_time",
    "to_location",
    "to_arrival_time",
    "call_journey_manager",
    "signature_date",
    "journey_plan_number_hint",
    "passengers",
    "rest_stops",
    "route_snapshot",
    "notes",
)


class JourneyPlan(SQLModel, table=True):
    """One vehicle trip log entry, identified by its journey plan number."""

    __tablename__ = "journey_plans"
    __table_args__ = (JOURNEY_PLAN_NUMBER_CONSTRAINT,)

    id: int | None = Field(default=None, primary_key=True)
    journey_plan_number: int = Field(index=True)

    departure_date: date | None = None
    vehicle_number: str | None = None
    driver_name: str | None = None
    from_location: str | None = None
    from_departure_time: str | None = None  # "HH:MM" as entered on the form
    to_location: str | None = None
    to_arrival_time: str | None = None
    call_journey_manager: str | None = None
    signature_date: date | None = None
    journey_plan_number_hint: str | None = None

    passengers: list[Any] = Field(default_factory=list, sa_column=Column(JSONType, nullable=False))
    rest_stops: list[Any] = Field(default_factory=list, sa_column=Column(JSONType, nullable=False))
    route_snapshot: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType, nullable=False))
    notes: str | None = None

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
