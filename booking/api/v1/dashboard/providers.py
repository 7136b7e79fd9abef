# ============================================================================
# FILE: booking/api/v1/dashboard/providers.py
# Provider directory - thin HTTP layer
# ============================================================================
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from booking.api.dependencies import get_current_business_id
from booking.config.database import get_db
from booking.schemas.provider import ProviderCreate, ProviderResponse
from booking.services.provider.provider_service import ProviderService

router = APIRouter(prefix="/providers", tags=["dashboard-providers"])


@router.get("", response_model=List[ProviderResponse])
async def list_providers(
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    providers = ProviderService.list_providers(db, business_id)
    return [provider.to_dict() for provider in providers]


@router.post("", response_model=ProviderResponse, status_code=status.HTTP_201_CREATED)
async def create_provider(
        request: ProviderCreate,
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """Add a provider; it starts with the default Monday-Friday schedule"""
    provider = ProviderService.create_provider(
        db,
        business_id,
        name=request.name,
        specialty=request.specialty,
        is_active=request.is_active
    )
    return provider.to_dict()
