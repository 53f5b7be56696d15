"""Journey plan storage, numbering and management."""

from journey_planner.services.journey_plans.allocator import (
    JourneyNumberAllocator,
    parse_next_value,
    parse_positive_int,
)
from journey_planner.services.journey_plans.journey_plan_service import JourneyPlanService
from journey_planner.services.journey_plans.journey_plan_table import JourneyPlanTable
from journey_planner.services.journey_plans.settings_store import SettingsStore

__all__ = [
    "JourneyNumberAllocator",
    "JourneyPlanService",
    "JourneyPlanTable",
    "SettingsStore",
    "parse_next_value",
    "parse_positive_int",
]
