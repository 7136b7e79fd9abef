# booking/services/appointment/conflict_service.py
"""Double-booking detection for a single provider"""
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from booking.models.appointment import Appointment


def intervals_overlap(a_start, a_end, b_start, b_end) -> bool:
    """
    Half-open interval overlap: [a_start, a_end) and [b_start, b_end).
    Touching endpoints (a_end == b_start) do not overlap.
    """
    return a_start < b_end and b_start < a_end


class ConflictService:
    """Read-only conflict checks against the appointment store"""

    @staticmethod
    def has_conflict(
            db: Session,
            provider_id: int,
            start_time: datetime,
            end_time: datetime,
            exclude_appointment_id: Optional[int] = None
    ) -> bool:
        """
        True if any non-deleted appointment of the provider overlaps
        [start_time, end_time). Pass exclude_appointment_id when re-checking
        an appointment that is being updated so it does not collide with itself.
        """
        query = db.query(Appointment.id).filter(
            Appointment.provider_id == provider_id,
            Appointment.is_deleted == False,
            Appointment.start_time < end_time,
            Appointment.end_time > start_time
        )

        if exclude_appointment_id is not None:
            query = query.filter(Appointment.id != exclude_appointment_id)

        return db.query(query.exists()).scalar()
