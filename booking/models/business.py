# booking/models/business.py
"""
Business and Provider models.
A business is the tenant; providers are the staff members appointments are booked against.
"""
from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from booking.models.base import Base


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    industry = Column(String(100), nullable=True)

    providers = relationship("Provider", back_populates="business")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    is_active = Column(Boolean, default=True)

    def __repr__(self):
        return f"<Business(id={self.id}, name={self.name})>"


class Provider(Base):
    __tablename__ = "providers"

    id = Column(Integer, primary_key=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    specialty = Column(String(200), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    business = relationship("Business", back_populates="providers")
    schedules = relationship("ProviderSchedule", back_populates="provider")
    appointments = relationship("Appointment", back_populates="provider")

    __table_args__ = (
        Index("ix_providers_business_active", "business_id", "is_active", "is_deleted"),
    )

    def __repr__(self):
        return f"<Provider(id={self.id}, name={self.name}, business_id={self.business_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": self.id,
            "business_id": self.business_id,
            "name": self.name,
            "specialty": self.specialty,
            "is_active": self.is_active,
        }
