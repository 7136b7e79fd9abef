# ============================================================================
# FILE: booking/api/v1/dashboard/calendar.py
# Calendar views - thin HTTP layer
# ============================================================================
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from booking.api.dependencies import get_current_business_id
from booking.config.database import get_db
from booking.models.appointment import AppointmentStatus
from booking.schemas.calendar import DayDetail, DaySummary
from booking.services.calendar.calendar_summary_service import CalendarSummaryService
from booking.services.calendar.day_detail_service import DayDetailService

router = APIRouter(tags=["dashboard-calendar"])

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


@router.get("/summary", response_model=List[DaySummary])
async def get_calendar_summary(
        start_date: date = Query(..., description="First day of the range"),
        end_date: date = Query(..., description="Last day of the range (inclusive)"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """
    Appointment count and scheduled/occupied/available minutes for every day
    in the range.
    """
    return CalendarSummaryService.get_calendar_summary(db, business_id, start_date, end_date)


@router.get("/day/{day}", response_model=DayDetail)
async def get_day_details(
        day: date = Path(..., description="The day to show (YYYY-MM-DD)"),
        page: int = Query(1, description="Page number, values below 1 are treated as 1"),
        page_size: int = Query(10, description="Rows per page, values below 1 fall back to 10"),
        start_time_from: Optional[str] = Query(None, pattern=HHMM_PATTERN, description="HH:MM"),
        start_time_to: Optional[str] = Query(None, pattern=HHMM_PATTERN, description="HH:MM"),
        search_text: Optional[str] = Query(None, max_length=200,
                                           description="Matches customer, provider or service name"),
        status: Optional[AppointmentStatus] = Query(None, description="Filter by appointment status"),
        business_id: int = Depends(get_current_business_id),
        db: Session = Depends(get_db)
):
    """
    Appointments of one day, newest first, with the day's totals and the
    trend against the previous day.
    """
    return DayDetailService.get_day_details(
        db=db,
        business_id=business_id,
        day=day,
        page=page,
        page_size=page_size,
        start_time_from=start_time_from,
        start_time_to=start_time_to,
        search_text=search_text,
        status=status.value if status else None,
    )
