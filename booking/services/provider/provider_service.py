# booking/services/provider/provider_service.py
"""Provider directory: tenant-scoped provider lookups and onboarding"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from booking.core.exceptions import InvalidInputError, NotFoundError
from booking.models.business import Provider

logger = logging.getLogger(__name__)


class ProviderService:
    """Handles provider operations"""

    @staticmethod
    def get_provider_ids_by_business(db: Session, business_id: int) -> List[int]:
        """Ids of the business's active, non-deleted providers"""
        rows = db.query(Provider.id).filter(
            Provider.business_id == business_id,
            Provider.is_active == True,
            Provider.is_deleted == False
        ).all()
        return [row.id for row in rows]

    @staticmethod
    def get_provider(db: Session, business_id: int, provider_id: int) -> Provider:
        """Get a provider of this business. Raises NotFoundError otherwise."""
        provider = db.query(Provider).filter(
            Provider.id == provider_id,
            Provider.business_id == business_id,
            Provider.is_deleted == False
        ).first()

        if not provider:
            raise NotFoundError(f"Provider {provider_id} not found")

        return provider

    @staticmethod
    def list_providers(db: Session, business_id: int) -> List[Provider]:
        return db.query(Provider).filter(
            Provider.business_id == business_id,
            Provider.is_deleted == False
        ).order_by(Provider.name.asc()).all()

    @staticmethod
    def create_provider(
            db: Session,
            business_id: int,
            name: str,
            specialty: Optional[str] = None,
            is_active: bool = True
    ) -> Provider:
        """Create a provider and seed its default weekly schedule in one transaction"""
        from booking.services.schedule.provider_schedule_service import ProviderScheduleService

        name = name.strip() if name else ""
        if not name:
            raise InvalidInputError("Provider name cannot be blank")

        provider = Provider(
            business_id=business_id,
            name=name,
            specialty=specialty,
            is_active=is_active,
        )

        try:
            db.add(provider)
            db.flush()
            ProviderScheduleService.create_default_schedules(db, provider.id, commit=False)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(provider)
        logger.info(f"Created provider {provider.id} for business {business_id}")
        return provider
