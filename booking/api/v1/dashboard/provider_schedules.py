# ============================================================================
# FILE: booking/api/v1/dashboard/provider_schedules.py
# Weekly provider availability - thin HTTP layer
# ============================================================================
from typing import List

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from booking.api.dependencies import get_current_business_id
from booking.config.database import get_db
from booking.schemas.provider_schedule import BulkScheduleUpdate, ProviderScheduleResponse
from booking.services.schedule.provider_schedule_service import ProviderScheduleService

router = APIRouter(tags=["dashboard-provider-schedules"])


@router.get("/provider/{provider_id}", response_model=List[ProviderScheduleResponse])
async def get_provider_schedules(
        provider_id: int = Path(..., description="The provider ID"),
        include_history: bool = Query(False, description="Also return closed versions"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """Current weekly schedule of a provider"""
    schedules = ProviderScheduleService.get_by_provider(
        db, business_id, provider_id, include_history=include_history
    )
    return [schedule.to_dict() for schedule in schedules]


@router.put("/provider/{provider_id}/bulk-update", response_model=List[ProviderScheduleResponse])
async def bulk_update_provider_schedules(
        request: BulkScheduleUpdate,
        provider_id: int = Path(..., description="The provider ID"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """
    Replace the provider's weekly schedule starting today.
    Previous versions are kept as history.
    """
    schedules = ProviderScheduleService.bulk_replace(
        db, business_id, provider_id, request.schedules
    )
    return [schedule.to_dict() for schedule in schedules]


@router.get("/{schedule_id}", response_model=ProviderScheduleResponse)
async def get_provider_schedule(
        schedule_id: int = Path(..., description="The schedule version ID"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    return ProviderScheduleService.get_by_id(db, business_id, schedule_id).to_dict()


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_provider_schedule(
        schedule_id: int = Path(..., description="The schedule version ID"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """Remove (soft delete) one schedule version"""
    ProviderScheduleService.delete(db, business_id, schedule_id)
