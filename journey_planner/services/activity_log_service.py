"""Audit trail of user actions.

Writes are best-effort: a failed write is logged and rolled back, never
raised, so the audited operation is not affected.
"""

from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from journey_planner.models.activity_log import ActivityAction, ActivityLog
from journey_planner.services.exceptions import storage_errors

logger = structlog.get_logger(__name__)

DEFAULT_LOG_LIMIT = 100


class ActivityLogService:
    """Service for recording and listing audit entries."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record(
        self,
        user_name: str,
        action: ActivityAction,
        journey_plan_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        entry = ActivityLog(
            user_name=user_name,
            action=action,
            journey_plan_number=journey_plan_number,
            details=details or {},
        )
        self.session.add(entry)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning("Failed to record activity", action=action, user_name=user_name, error=str(e))

    async def list_entries(self, limit: int = DEFAULT_LOG_LIMIT) -> Sequence[ActivityLog]:
        """Most recent entries first."""
        statement = (
            select(ActivityLog)
            .order_by(col(ActivityLog.created_at).desc(), col(ActivityLog.id).desc())
            .limit(limit)
        )
        with storage_errors("activity log read"):
            result = await self.session.execute(statement)
            return result.scalars().all()
