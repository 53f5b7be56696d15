"""API package.

All endpoints are mounted under /api:
- health: liveness check
- auth_routes: login, logout, session and password changes
- user_routes: user administration (admin)
- log_routes: audit log (admin)
- journey_plan_routes: journey plan CRUD and next-number peek
- option_routes: drivers, vehicles, locations, rest types
- settings_routes: journey plan counter override (admin)
"""

from fastapi import APIRouter

from journey_planner.api.auth_routes import router as auth_router
from journey_planner.api.health import router as health_router
from journey_planner.api.journey_plan_routes import router as journey_plan_router
from journey_planner.api.log_routes import router as log_router
from journey_planner.api.option_routes import router as option_router
from journey_planner.api.settings_routes import router as settings_router
from journey_planner.api.user_routes import router as user_router

# Create a combined router for all endpoints
router = APIRouter()

router.include_router(health_router, tags=["health"])
router.include_router(auth_router)
router.include_router(user_router)
router.include_router(log_router)
router.include_router(journey_plan_router)
router.include_router(option_router)
router.include_router(settings_router)

__all__ = ["router"]
