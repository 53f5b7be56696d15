"""User account model."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import Column, DateTime, String
from sqlmodel import Field, SQLModel

from journey_planner.models.types import utc_now


class UserRole(StrEnum):
    """Access level of a user account."""

    ADMIN = "admin"
    USER = "user"


class User(SQLModel, table=True):
    """Login account for the journey plan front-end."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=64)
    password_hash: str
    full_name: str | None = None
    role: str = Field(default=UserRole.USER, sa_column=Column(String(16), nullable=False))
    must_change_password: bool = False
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    last_login: datetime | None = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
