"""Journey plan management service.

Creation, renumbering and deletion of journey plans, orchestrating the
JourneyPlanTable and the JourneyNumberAllocator. Audit logging is left to
the API routes.
"""

from collections.abc import Sequence
from typing import Any

import pydantic
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from journey_planner.config import settings
from journey_planner.models.journey_plan import UPDATABLE_FIELDS, JourneyPlan
from journey_planner.services.journey_plans.allocator import JourneyNumberAllocator, parse_positive_int
from journey_planner.services.journey_plans.exceptions import (
    InvalidJourneyPlanFields,
    InvalidJourneyPlanNumber,
    JourneyPlanNumberConflict,
    NoFieldsToUpdate,
)
from journey_planner.services.journey_plans.fields import JourneyPlanFields
from journey_planner.services.journey_plans.journey_plan_table import JourneyPlanTable
from journey_planner.services.journey_plans.settings_store import SettingsStore
from journey_planner.utils.retry import ConflictRetryConfig, get_conflict_retrying

logger = structlog.get_logger(__name__)

LIST_FIELDS = ("passengers", "rest_stops")


def _validate_fields(data: dict[str, Any]) -> JourneyPlanFields:
    try:
        return JourneyPlanFields.model_validate(data)
    except pydantic.ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise InvalidJourneyPlanFields(f"Invalid journey plan fields: {fields}") from e


class JourneyPlanService:
    """Service for journey plan operations bound to one database session."""

    def __init__(self, session: AsyncSession, retry_config: ConflictRetryConfig | None = None):
        self.session = session
        self.table = JourneyPlanTable(session)
        self.allocator = JourneyNumberAllocator(SettingsStore(session), self.table)
        self.retry_config = retry_config or ConflictRetryConfig(
            max_attempts=settings.journey_number_max_attempts,
            max_wait=settings.journey_number_retry_wait_max,
        )

    async def list_plans(self, limit: int | None = None) -> Sequence[JourneyPlan]:
        return await self.table.list(limit)

    async def peek_next_number(self) -> int:
        """Number the next creation would use, without consuming it."""
        return await self.allocator.get_next_number()

    async def create_plan(self, data: dict[str, Any]) -> JourneyPlan:
        """Store a new plan under a freshly allocated number.

        A colliding number (concurrent creator or stale counter) triggers a
        reseed from the table and another attempt, up to the configured
        attempt limit. Raises JourneyPlanNumberConflict when all attempts
        collide.
        """
        fields = _validate_fields(data).model_dump()
        number = await self.allocator.get_next_number()

        async for attempt in get_conflict_retrying(JourneyPlanNumberConflict, self.retry_config):
            with attempt:
                try:
                    plan = await self.table.insert(JourneyPlan(journey_plan_number=number, **fields))
                except JourneyPlanNumberConflict:
                    logger.warning(
                        "Journey plan number collision, reseeding",
                        number=number,
                        attempt=attempt.retry_state.attempt_number,
                        max_attempts=self.retry_config.max_attempts,
                    )
                    number = await self.allocator.reseed()
                    raise

        # get_conflict_retrying either succeeds or re-raises the last conflict
        await self.allocator.commit(plan.journey_plan_number)
        logger.info("Created journey plan", number=plan.journey_plan_number, plan_id=plan.id)
        return plan

    async def update_plan(self, number: int, payload: dict[str, Any]) -> tuple[JourneyPlan, list[str]]:
        """Apply allow-listed fields to an existing plan.

        Returns (plan, updated_field_names). Renumbering reseeds the counter
        afterwards; a colliding new number raises JourneyPlanNumberConflict
        without retry.
        """
        update = {name: payload[name] for name in UPDATABLE_FIELDS if name in payload}

        new_number: int | None = None
        if "journey_plan_number" in update:
            new_number = parse_positive_int(update.pop("journey_plan_number"))
            if new_number is None:
                raise InvalidJourneyPlanNumber("journey_plan_number must be a positive integer")

        for name in LIST_FIELDS:
            if name in update and not isinstance(update[name], list):
                del update[name]

        if not update and new_number is None:
            raise NoFieldsToUpdate("No fields provided for update")

        fields = _validate_fields(update).model_dump(include=set(update))
        if new_number is not None:
            fields["journey_plan_number"] = new_number

        plan = await self.table.update_by_number(number, fields)

        if new_number is not None:
            await self.allocator.reseed()
            logger.info("Journey plan renumbered", previous=number, number=new_number)

        return plan, list(fields)

    async def delete_plan(self, number: int) -> JourneyPlan:
        """Delete a plan. The counter is left alone; freed numbers are not reused."""
        plan = await self.table.delete_by_number(number)
        logger.info("Deleted journey plan", number=number)
        return plan

    async def import_plan(self, data: dict[str, Any]) -> JourneyPlan:
        """Store a plan that already carries a number assigned elsewhere.

        The counter is raised past the imported number but never lowered.
        """
        number = parse_positive_int(data.get("journey_plan_number"))
        if number is None:
            raise InvalidJourneyPlanNumber("journey_plan_number must be a positive integer")
        fields = _validate_fields(data).model_dump()
        plan = await self.table.insert(JourneyPlan(journey_plan_number=number, **fields))
        await self.allocator.ensure_at_least(number)
        return plan

    async def set_next_number(self, value: Any) -> int:
        return await self.allocator.set_next_number(value)
