"""Validation of the descriptive fields of a journey plan."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JourneyPlanFields(BaseModel):
    """Everything on a journey plan except its number."""

    model_config = ConfigDict(extra="ignore")

    departure_date: date | None = None
    vehicle_number: str | None = None
    driver_name: str | None = None
    from_location: str | None = None
    from_departure_time: str | None = None
    to_location: str | None = None
    to_arrival_time: str | None = None
    call_journey_manager: str | None = None
    signature_date: date | None = None
    journey_plan_number_hint: str | None = None
    passengers: list[Any] = Field(default_factory=list)
    rest_stops: list[Any] = Field(default_factory=list)
    route_snapshot: dict[str, Any] = Field(default_factory=dict)
    notes: str | None = None

    @field_validator("departure_date", "signature_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, v: Any) -> Any:
        """Empty form inputs arrive as ""."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("passengers", "rest_stops", mode="before")
    @classmethod
    def null_list_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("route_snapshot", mode="before")
    @classmethod
    def null_snapshot_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v
