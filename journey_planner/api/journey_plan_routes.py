"""Journey plan CRUD endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, HTTPException, Query

from journey_planner.api.dependencies import (
    ActivityLogServiceDep,
    AdminUserDep,
    CurrentUserDep,
    JourneyPlanServiceDep,
)
from journey_planner.api.schemas import (
    JourneyPlanDataResponse,
    JourneyPlanDeletedResponse,
    JourneyPlanListResponse,
    JourneyPlanResponse,
    NextNumberResponse,
)
from journey_planner.models.activity_log import ActivityAction
from journey_planner.services.exceptions import ValidationError
from journey_planner.services.journey_plans.exceptions import JourneyPlanNotFound, JourneyPlanNumberConflict

router = APIRouter(prefix="/journey-plans", tags=["journey-plans"])

JsonBody = Annotated[dict[str, Any], Body(default_factory=dict)]


@router.get("", response_model=JourneyPlanListResponse, operation_id="listJourneyPlans")
async def list_journey_plans(
    user: CurrentUserDep,
    service: JourneyPlanServiceDep,
    limit: int | None = Query(default=None, gt=0),
) -> JourneyPlanListResponse:
    """List journey plans, highest number first."""
    plans = await service.list_plans(limit=limit)
    return JourneyPlanListResponse(data=[JourneyPlanResponse.from_model(plan) for plan in plans])


@router.get("/next-number", response_model=NextNumberResponse, operation_id="getNextJourneyPlanNumber")
async def get_next_number(user: CurrentUserDep, service: JourneyPlanServiceDep) -> NextNumberResponse:
    """Number the next created plan is expected to get. Nothing is reserved."""
    return NextNumberResponse(next_number=await service.peek_next_number())


@router.post("", response_model=JourneyPlanDataResponse, status_code=201, operation_id="createJourneyPlan")
async def create_journey_plan(
    payload: JsonBody,
    user: CurrentUserDep,
    service: JourneyPlanServiceDep,
    activity: ActivityLogServiceDep,
) -> JourneyPlanDataResponse:
    """Create a journey plan under the next free number.

    Any journey_plan_number in the payload is ignored.
    """
    try:
        plan = await service.create_plan(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except JourneyPlanNumberConflict:
        raise HTTPException(status_code=409, detail="Could not allocate a free journey plan number, try again")

    # The audit write may roll the session back, so read the plan first
    result = JourneyPlanDataResponse(data=JourneyPlanResponse.from_model(plan))
    await activity.record(
        user.username,
        ActivityAction.CREATE,
        plan.journey_plan_number,
        {
            "driver": plan.driver_name,
            "vehicle": plan.vehicle_number,
            "from": plan.from_location,
            "to": plan.to_location,
        },
    )
    return result


@router.put("/{number}", response_model=JourneyPlanDataResponse, operation_id="updateJourneyPlan")
async def update_journey_plan(
    number: int,
    payload: JsonBody,
    user: CurrentUserDep,
    service: JourneyPlanServiceDep,
    activity: ActivityLogServiceDep,
) -> JourneyPlanDataResponse:
    """Update allow-listed fields, including renumbering the plan."""
    try:
        plan, updated_fields = await service.update_plan(number, payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except JourneyPlanNotFound:
        raise HTTPException(status_code=404, detail="Journey plan not found")
    except JourneyPlanNumberConflict:
        raise HTTPException(status_code=409, detail="Journey plan number already exists")

    result = JourneyPlanDataResponse(data=JourneyPlanResponse.from_model(plan))
    await activity.record(user.username, ActivityAction.UPDATE, number, {"updated_fields": updated_fields})
    return result


@router.delete("/{number}", response_model=JourneyPlanDeletedResponse, operation_id="deleteJourneyPlan")
async def delete_journey_plan(
    number: int,
    admin: AdminUserDep,
    service: JourneyPlanServiceDep,
    activity: ActivityLogServiceDep,
) -> JourneyPlanDeletedResponse:
    try:
        plan = await service.delete_plan(number)
    except JourneyPlanNotFound:
        raise HTTPException(status_code=404, detail="Journey plan not found")

    result = JourneyPlanDeletedResponse(data=JourneyPlanResponse.from_model(plan))
    await activity.record(
        admin.username,
        ActivityAction.DELETE,
        number,
        {"driver": plan.driver_name, "vehicle": plan.vehicle_number},
    )
    return result
