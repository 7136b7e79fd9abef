# booking/models/service.py
"""
Service Model - what a customer is booked for.
Each service belongs to one business.
"""
from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from booking.models.base import Base


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True)
    business_id = Column(
        Integer,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(200), nullable=False)
    default_duration = Column(Integer, nullable=True)  # minutes
    price = Column(Numeric(10, 2), nullable=True)

    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    appointments = relationship("Appointment", back_populates="service")

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, business_id={self.business_id})>"
