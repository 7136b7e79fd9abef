# booking/models/__init__.py
from .base import Base
from .business import Business, Provider
from .customer import Customer
from .service import Service
from .appointment import Appointment, AppointmentStatus
from .provider_schedule import ProviderSchedule

__all__ = [
    "Base",
    "Business",
    "Provider",
    "Customer",
    "Service",
    "Appointment",
    "AppointmentStatus",
    "ProviderSchedule",
]
