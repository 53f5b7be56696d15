"""Journey plan number allocation.

The next number to hand out is cached in the settings table under
``next_journey_plan_number`` as ``{"next": n}``. The cache may run ahead of
the stored maximum (numbers get skipped) but must never fall behind it.
The unique constraint on ``journey_plans.journey_plan_number`` is the final
arbiter: when an insert collides, callers reseed from the table and retry.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from journey_planner.models.journey_plan import MAX_JOURNEY_PLAN_NUMBER
from journey_planner.models.setting import NEXT_JOURNEY_PLAN_NUMBER_KEY
from journey_planner.services.journey_plans.exceptions import InvalidNextNumber
from journey_planner.services.journey_plans.journey_plan_table import JourneyPlanTable
from journey_planner.services.journey_plans.settings_store import SettingsStore

logger = structlog.get_logger(__name__)


def _as_number(value: Any) -> int | float | None:
    # bool is an int subclass but never a counter value
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def parse_next_value(value: Any) -> int | None:
    """Extract a usable counter from a stored setting value.

    Accepts a bare number, ``{"next": n}`` or ``{"value": n}``. Returns None
    for anything that is not a positive integer within the
    journey plan number column range.
    """
    number = _as_number(value)
    if number is None and isinstance(value, Mapping):
        number = _as_number(value.get("next"))
        if number is None:
            number = _as_number(value.get("value"))
    if number is None:
        return None
    if isinstance(number, float):
        if not number.is_integer():
            return None
        number = int(number)
    return number if 0 < number <= MAX_JOURNEY_PLAN_NUMBER else None


def parse_positive_int(value: Any) -> int | None:
    """Coerce user input (int, integral float or numeric string) to a positive int.

    Unlike stored counter values, objects are never unwrapped.
    """
    if isinstance(value, Mapping):
        return None
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    return parse_next_value(value)


class JourneyNumberAllocator:
    """Hands out journey plan numbers and keeps the cached counter honest.

    Holds no state of its own; bind one per session and share freely.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        table: JourneyPlanTable,
        key: str = NEXT_JOURNEY_PLAN_NUMBER_KEY,
    ):
        self.settings_store = settings_store
        self.table = table
        self.key = key

    async def cached_next(self) -> int | None:
        """Cached counter value, or None when absent or unusable."""
        return parse_next_value(await self.settings_store.get(self.key))

    async def get_next_number(self) -> int:
        """Number the next created plan should use. Does not consume it."""
        cached = await self.cached_next()
        if cached is not None:
            return cached
        logger.info("No usable cached journey plan number, reseeding")
        return await self.reseed()

    async def reseed(self) -> int:
        """Recompute the counter from the highest stored number and persist it."""
        max_number = await self.table.find_max_number()
        candidate = max_number + 1 if max_number is not None else 1
        await self.settings_store.put(self.key, {"next": candidate})
        logger.info("Reseeded journey plan number", max_number=max_number, next=candidate)
        return candidate

    async def commit(self, number: int) -> None:
        """Advance the counter past a number that was just stored."""
        await self.settings_store.put(self.key, {"next": number + 1})

    async def ensure_at_least(self, observed_number: int) -> int:
        """Raise the counter above an externally assigned number, never lower it.

        Returns the counter value after the call.
        """
        cached = await self.cached_next()
        wanted = observed_number + 1
        if cached is None or wanted > cached:
            await self.settings_store.put(self.key, {"next": wanted})
            logger.debug("Raised journey plan counter", previous=cached, next=wanted)
            return wanted
        return cached

    async def set_next_number(self, value: Any) -> int:
        """Administrative override of the counter. Skips the table scan."""
        number = parse_positive_int(value)
        if number is None:
            raise InvalidNextNumber("nextNumber must be a positive integer")
        await self.settings_store.put(self.key, {"next": number})
        logger.warning("Journey plan counter overridden", next=number)
        return number
