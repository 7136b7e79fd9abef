# booking/models/provider_schedule.py
"""
Versioned weekly availability.

Each row is one version of a provider's hours for one weekday, in effect from
valid_from to valid_until (both inclusive, valid_until NULL = open-ended).
Old versions are closed instead of rewritten so past dates keep reporting the
hours that were actually worked.
"""
from sqlalchemy import Column, Integer, Boolean, Time, Date, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from booking.models.base import Base


class ProviderSchedule(Base):
    __tablename__ = "provider_schedules"

    id = Column(Integer, primary_key=True)
    provider_id = Column(Integer, ForeignKey("providers.id"), nullable=False)

    day_of_week = Column(Integer, nullable=False)  # 0=Monday, 6=Sunday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    valid_from = Column(Date, nullable=False)
    valid_until = Column(Date, nullable=True)

    is_deleted = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    provider = relationship("Provider", back_populates="schedules")

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_provider_schedules_day_of_week"),
        CheckConstraint("end_time > start_time", name="ck_provider_schedules_end_after_start"),
        Index("ix_provider_schedules_provider_day", "provider_id", "day_of_week"),
        Index("ix_provider_schedules_validity", "provider_id", "valid_from", "valid_until"),
    )

    def __repr__(self):
        return (
            f"<ProviderSchedule(provider_id={self.provider_id}, day={self.day_of_week}, "
            f"{self.start_time}-{self.end_time}, valid {self.valid_from}..{self.valid_until})>"
        )

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": self.id,
            "provider_id": self.provider_id,
            "day_of_week": self.day_of_week,
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "valid_from": self.valid_from.isoformat(),
            "valid_until": self.valid_until.isoformat() if self.valid_until else None,
        }
