"""
API v1 router setup
All dashboard routes are tenant-scoped through the JWT business_id claim
"""
from fastapi import APIRouter

from booking.api.v1.dashboard import appointments, calendar, provider_schedules, providers

api_v1_router = APIRouter()

# ============================================================================
# DASHBOARD ROUTES (JWT authentication required)
# ============================================================================
api_v1_router.include_router(
    calendar.router,
    prefix="/dashboard/calendar",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    appointments.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    provider_schedules.router,
    prefix="/dashboard/provider-schedules",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    providers.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)
