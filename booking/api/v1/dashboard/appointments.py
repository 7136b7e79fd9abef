# ============================================================================
# FILE: booking/api/v1/dashboard/appointments.py
# Appointment booking endpoints - thin HTTP layer
# IMPORTANT: Specific routes MUST come before parameterized routes
# ============================================================================
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from booking.api.dependencies import get_current_business_id
from booking.config.database import get_db
from booking.config.settings import get_settings
from booking.schemas.appointment import (
    AppointmentCreate,
    AppointmentPage,
    AppointmentResponse,
    AppointmentUpdate,
    ConflictCheckRequest,
    ConflictCheckResponse,
    NextAppointmentResponse,
)
from booking.services.appointment.appointment_service import AppointmentService
from booking.services.appointment.conflict_service import ConflictService
from booking.services.provider.provider_service import ProviderService
from booking.utils.pagination import page_count

router = APIRouter(prefix="/appointments", tags=["dashboard-appointments"])


@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(
        start_date: Optional[date] = Query(None, description="Filter appointments on or after this date"),
        end_date: Optional[date] = Query(None, description="Filter appointments on or before this date"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """Get the business's appointments, oldest first"""
    return AppointmentService.list_appointments(
        db=db,
        business_id=business_id,
        start_date=start_date,
        end_date=end_date
    )


@router.get("/next", response_model=Optional[NextAppointmentResponse])
async def get_next_appointment(
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """The next appointment that has not started yet, or null"""
    appointment = AppointmentService.get_next_appointment(db, business_id)
    if appointment is None:
        return None

    settings = get_settings()
    return NextAppointmentResponse(
        customer_name=appointment.customer.name if appointment.customer else settings.NO_CUSTOMER_LABEL,
        provider_name=appointment.provider.name if appointment.provider else settings.NO_PROVIDER_LABEL,
        start_time=appointment.start_time,
        end_time=appointment.end_time,
        day=appointment.start_time.strftime("%A"),
    )


@router.get("/date/{day}", response_model=AppointmentPage)
async def get_appointments_by_date(
        day: date = Path(..., description="The day to list (YYYY-MM-DD)"),
        page: int = Query(1, description="Page number, values below 1 are treated as 1"),
        page_size: int = Query(5, description="Rows per page, values below 1 fall back to the default"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """Appointments of one day, earliest first, one page at a time"""
    items, total_count, page, page_size = AppointmentService.get_paged_by_date(
        db, business_id, day, page=page, page_size=page_size
    )

    return AppointmentPage(
        items=[AppointmentResponse.model_validate(item) for item in items],
        total_count=total_count,
        page=page,
        page_size=page_size,
        total_pages=page_count(total_count, page_size),
    )


@router.post("/check-conflict", response_model=ConflictCheckResponse)
async def check_conflict(
        request: ConflictCheckRequest,
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """Whether the provider is already booked in the window"""
    ProviderService.get_provider(db, business_id, request.provider_id)

    return ConflictCheckResponse(
        has_conflict=ConflictService.has_conflict(
            db,
            request.provider_id,
            request.start_time,
            request.end_time,
            exclude_appointment_id=request.exclude_appointment_id
        )
    )


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
        appointment_id: int = Path(..., description="The appointment ID"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    return AppointmentService.get_appointment(db, business_id, appointment_id)


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
        request: AppointmentCreate,
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """
    Book an appointment.
    Answers 409 when the provider already has an appointment in the window.
    """
    return AppointmentService.create_appointment(
        db=db,
        business_id=business_id,
        **request.model_dump()
    )


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
        request: AppointmentUpdate,
        appointment_id: int = Path(..., description="The appointment ID"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """
    Move or edit an appointment.
    Answers 409 when the new window overlaps another appointment of the provider.
    """
    return AppointmentService.update_appointment(
        db=db,
        business_id=business_id,
        appointment_id=appointment_id,
        **request.model_dump()
    )


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_appointment(
        appointment_id: int = Path(..., description="The appointment ID"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """Cancel (soft delete) an appointment"""
    AppointmentService.cancel_appointment(db, business_id, appointment_id)
