"""Persistence adapter for journey plan records."""

from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from journey_planner.models.journey_plan import JOURNEY_PLAN_NUMBER_CONSTRAINT, JourneyPlan
from journey_planner.models.types import utc_now
from journey_planner.services.exceptions import StorageUnavailable, storage_errors
from journey_planner.services.journey_plans.exceptions import JourneyPlanNotFound, JourneyPlanNumberConflict
from journey_planner.utils.integrity import is_unique_violation

logger = structlog.get_logger(__name__)


class JourneyPlanTable:
    """Journey plan records keyed by their unique journey_plan_number.

    Every write commits immediately; a unique violation on the number
    surfaces as JourneyPlanNumberConflict with the session rolled back.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_number(self, number: int) -> JourneyPlan:
        with storage_errors("journey plan read"):
            result = await self.session.execute(
                select(JourneyPlan).where(JourneyPlan.journey_plan_number == number)
            )
            plan = result.scalars().first()
        if plan is None:
            raise JourneyPlanNotFound(number)
        return plan

    async def list(self, limit: int | None = None) -> Sequence[JourneyPlan]:
        """List plans, highest number first."""
        statement = select(JourneyPlan).order_by(col(JourneyPlan.journey_plan_number).desc())
        if limit:
            statement = statement.limit(limit)
        with storage_errors("journey plan list"):
            result = await self.session.execute(statement)
            return result.scalars().all()

    async def find_max_number(self) -> int | None:
        """Highest stored journey_plan_number, or None for an empty table."""
        statement = (
            select(JourneyPlan.journey_plan_number)
            .order_by(col(JourneyPlan.journey_plan_number).desc())
            .limit(1)
        )
        with storage_errors("journey plan max number"):
            result = await self.session.execute(statement)
            return result.scalar_one_or_none()

    async def insert(self, plan: JourneyPlan) -> JourneyPlan:
        self.session.add(plan)
        await self._commit("journey plan insert", plan.journey_plan_number)
        await self.session.refresh(plan)
        return plan

    async def update_by_number(self, number: int, fields: dict[str, Any]) -> JourneyPlan:
        plan = await self.get_by_number(number)
        for name, value in fields.items():
            setattr(plan, name, value)
        plan.updated_at = utc_now()
        await self._commit("journey plan update", fields.get("journey_plan_number", number))
        await self.session.refresh(plan)
        return plan

    async def delete_by_number(self, number: int) -> JourneyPlan:
        plan = await self.get_by_number(number)
        await self.session.delete(plan)
        await self._commit("journey plan delete", number)
        return plan

    async def _commit(self, operation: str, number: int) -> None:
        try:
            with storage_errors(operation):
                await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e, JOURNEY_PLAN_NUMBER_CONSTRAINT):
                logger.info("Journey plan number already taken", number=number, operation=operation)
                raise JourneyPlanNumberConflict(number) from e
            raise
        except StorageUnavailable:
            await self.session.rollback()
            raise
