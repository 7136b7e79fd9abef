# booking/schemas/__init__.py
from .calendar import DaySummary, DayDetail, AppointmentDetail
from .appointment import (
    AppointmentCreate,
    AppointmentPage,
    AppointmentUpdate,
    AppointmentResponse,
    ConflictCheckRequest,
    ConflictCheckResponse,
    NextAppointmentResponse,
)
from .provider_schedule import ScheduleItem, BulkScheduleUpdate, ProviderScheduleResponse
from .provider import ProviderCreate, ProviderResponse

__all__ = [
    "DaySummary",
    "DayDetail",
    "AppointmentDetail",
    "AppointmentCreate",
    "AppointmentPage",
    "AppointmentUpdate",
    "AppointmentResponse",
    "ConflictCheckRequest",
    "ConflictCheckResponse",
    "NextAppointmentResponse",
    "ScheduleItem",
    "BulkScheduleUpdate",
    "ProviderScheduleResponse",
    "ProviderCreate",
    "ProviderResponse",
]
