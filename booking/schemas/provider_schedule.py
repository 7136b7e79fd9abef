# booking/schemas/provider_schedule.py
from datetime import date, time
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class ScheduleItem(BaseModel):
    """One weekly availability window"""
    day_of_week: int = Field(..., ge=0, le=6, description="0=Monday, 6=Sunday")
    start_time: time
    end_time: time

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, v: time, info) -> time:
        start_time = info.data.get("start_time")
        if start_time and v <= start_time:
            raise ValueError("End time must be after start time")
        return v


class BulkScheduleUpdate(BaseModel):
    """Replaces the provider's whole weekly schedule"""
    schedules: List[ScheduleItem] = Field(default_factory=list)


class ProviderScheduleResponse(BaseModel):
    id: int
    provider_id: int
    day_of_week: int
    start_time: str
    end_time: str
    valid_from: date
    valid_until: Optional[date] = None
