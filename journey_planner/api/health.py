"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter

from journey_planner.api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, operation_id="healthCheck")
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(timestamp=datetime.now(UTC).isoformat())
