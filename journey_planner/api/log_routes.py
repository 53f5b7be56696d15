"""Audit log endpoints (admin only)."""

from fastapi import APIRouter, Query

from journey_planner.api.dependencies import ActivityLogServiceDep, AdminUserDep
from journey_planner.api.schemas import ActivityLogListResponse, ActivityLogResponse
from journey_planner.services.activity_log_service import DEFAULT_LOG_LIMIT

router = APIRouter(tags=["logs"])


@router.get("/logs", response_model=ActivityLogListResponse, operation_id="listActivityLogs")
async def list_logs(
    admin: AdminUserDep,
    service: ActivityLogServiceDep,
    limit: int = Query(default=DEFAULT_LOG_LIMIT, gt=0, le=1000),
) -> ActivityLogListResponse:
    entries = await service.list_entries(limit=limit)
    return ActivityLogListResponse(data=[ActivityLogResponse.from_model(entry) for entry in entries])
