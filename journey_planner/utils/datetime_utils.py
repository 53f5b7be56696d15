"""Datetime utility functions."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from journey_planner.config import settings

# Timezone for API responses (from config)
API_TIMEZONE = ZoneInfo(settings.timezone)


def to_api_timezone(dt: datetime | None) -> datetime | None:
    """Convert a datetime to API timezone (from config).

    Naive datetimes (SQLite drops tzinfo) are taken as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(API_TIMEZONE)


def to_api_isoformat(dt: datetime | None) -> str | None:
    localized = to_api_timezone(dt)
    return localized.isoformat() if localized is not None else None
