"""Utility functions and helpers."""

from journey_planner.utils.datetime_utils import to_api_isoformat, to_api_timezone
from journey_planner.utils.integrity import is_unique_violation
from journey_planner.utils.retry import ConflictRetryConfig, get_conflict_retrying

__all__ = [
    "ConflictRetryConfig",
    "get_conflict_retrying",
    "is_unique_violation",
    "to_api_isoformat",
    "to_api_timezone",
]
