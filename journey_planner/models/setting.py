"""Key/value settings model."""

from datetime import datetime
from typing import Any

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from journey_planner.models.types import JSONType, utc_now

NEXT_JOURNEY_PLAN_NUMBER_KEY = "next_journey_plan_number"


class Setting(SQLModel, table=True):
    """Application setting stored as a JSON value under a unique key.

    The journey plan counter lives here as {"next": <int>}.
    """

    __tablename__ = "settings"

    key: str = Field(primary_key=True, max_length=128)
    value: Any = Field(default=None, sa_column=Column(JSONType, nullable=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
