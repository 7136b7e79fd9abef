# booking/schemas/calendar.py
"""Derived calendar views; never persisted"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field


class DaySummary(BaseModel):
    """Per-day totals for the month/week calendar"""
    date: date
    appointments_count: int = 0
    total_scheduled_minutes: int = Field(0, description="Minutes providers are scheduled to work")
    total_occupied_minutes: int = Field(0, description="Minutes taken by appointments")
    total_available_minutes: int = Field(0, ge=0, description="max(0, scheduled - occupied)")


class AppointmentDetail(BaseModel):
    """One row of the day view"""
    id: int
    customer_name: str
    provider_name: str
    service_name: Optional[str] = None
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    duration_minutes: int
    status: Optional[str] = None
    notes: Optional[str] = None


class DayDetail(BaseModel):
    """Filtered, paginated appointments of one day plus the day's totals"""
    date: date
    day_of_week: str
    total_appointments: int
    appointments_trend: int = Field(..., description="Appointments vs the previous day (+N, -N, 0)")
    total_scheduled_minutes: int
    total_occupied_minutes: int
    appointments: List[AppointmentDetail] = Field(default_factory=list)

    current_page: int
    page_size: int
    total_pages: int
    total_count: int
