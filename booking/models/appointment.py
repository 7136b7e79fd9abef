# booking/models/appointment.py
import enum

from sqlalchemy import Column, String, Integer, Text, DateTime, Boolean, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from booking.models.base import Base


class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ABSENT = "absent"


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)

    # References
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False)
    provider_id = Column(Integer, ForeignKey("providers.id"), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=True)

    # Time window, [start_time, end_time) in the store's local time
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)

    status = Column(String(20), default=AppointmentStatus.PENDING.value, nullable=False)

    # Cancelled appointments stay in the table for history and trend queries
    is_deleted = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    provider = relationship("Provider", back_populates="appointments")
    customer = relationship("Customer", back_populates="appointments")
    service = relationship("Service", back_populates="appointments")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_appointments_end_after_start"),
        Index("ix_appointments_provider_window", "provider_id", "start_time", "end_time"),
        Index("ix_appointments_business_start", "business_id", "start_time"),
        Index("ix_appointments_status", "status"),
    )

    @property
    def duration_minutes(self) -> int:
        return int((self.end_time - self.start_time).total_seconds() // 60)

    def __repr__(self):
        return (
            f"<Appointment(id={self.id}, provider_id={self.provider_id}, "
            f"start={self.start_time}, end={self.end_time})>"
        )
