# booking/schemas/appointment.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from booking.models.appointment import AppointmentStatus


class AppointmentCreate(BaseModel):
    """Appointment booking request"""
    provider_id: int
    customer_id: Optional[int] = None
    customer_name: Optional[str] = Field(None, max_length=200, description="Creates a customer when no id is given")
    service_id: Optional[int] = None
    service_name: Optional[str] = Field(None, max_length=200, description="Creates a service when no id is given")
    start_time: datetime
    end_time: datetime
    notes: Optional[str] = None

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, v: datetime, info) -> datetime:
        start_time = info.data.get("start_time")
        if start_time and v <= start_time:
            raise ValueError("End time must be after start time")
        return v


class AppointmentUpdate(AppointmentCreate):
    """Appointment update request"""
    status: AppointmentStatus = AppointmentStatus.PENDING


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    business_id: int
    provider_id: int
    customer_id: Optional[int] = None
    service_id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    status: str
    notes: Optional[str] = None


class NextAppointmentResponse(BaseModel):
    customer_name: str
    provider_name: str
    start_time: datetime
    end_time: datetime
    day: str


class ConflictCheckRequest(BaseModel):
    provider_id: int
    start_time: datetime
    end_time: datetime
    exclude_appointment_id: Optional[int] = None

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, v: datetime, info) -> datetime:
        start_time = info.data.get("start_time")
        if start_time and v <= start_time:
            raise ValueError("End time must be after start time")
        return v


class ConflictCheckResponse(BaseModel):
    has_conflict: bool


class AppointmentPage(BaseModel):
    """One page of a day's appointments"""
    items: List[AppointmentResponse] = Field(default_factory=list)
    total_count: int
    page: int
    page_size: int
    total_pages: int
