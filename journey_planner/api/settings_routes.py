"""Administrative settings endpoints."""

from fastapi import APIRouter, HTTPException

from journey_planner.api.dependencies import ActivityLogServiceDep, AdminUserDep, JourneyPlanServiceDep
from journey_planner.api.schemas import NextNumberRequest, NextNumberResponse
from journey_planner.models.activity_log import ActivityAction
from journey_planner.services.journey_plans.exceptions import InvalidNextNumber

router = APIRouter(prefix="/settings", tags=["settings"])


@router.put("/next-number", response_model=NextNumberResponse, operation_id="setNextJourneyPlanNumber")
async def set_next_number(
    body: NextNumberRequest,
    admin: AdminUserDep,
    service: JourneyPlanServiceDep,
    activity: ActivityLogServiceDep,
) -> NextNumberResponse:
    """Override the journey plan counter (manual recovery and renumbering)."""
    try:
        next_number = await service.set_next_number(body.next_number)
    except InvalidNextNumber as e:
        raise HTTPException(status_code=400, detail=str(e))

    await activity.record(admin.username, ActivityAction.SET_NEXT_NUMBER, details={"next_number": next_number})
    return NextNumberResponse(next_number=next_number)
