# booking/services/appointment/appointment_service.py
"""Booking workflow: create, update, cancel and read appointments"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from booking.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from booking.models.appointment import Appointment, AppointmentStatus
from booking.models.business import Provider
from booking.models.customer import Customer
from booking.models.service import Service
from booking.services.appointment.conflict_service import ConflictService
from booking.utils.datetime_utils import day_start, minutes_between
from booking.utils.pagination import normalize_pagination, page_offset

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "The provider already has an appointment in that time slot"
# Exclusion constraint created by the PostgreSQL migration
OVERLAP_CONSTRAINT = "ex_appointments_provider_no_overlap"


class AppointmentService:
    """Handles appointment operations"""

    @staticmethod
    def create_appointment(
            db: Session,
            business_id: int,
            provider_id: int,
            start_time: datetime,
            end_time: datetime,
            customer_id: Optional[int] = None,
            customer_name: Optional[str] = None,
            service_id: Optional[int] = None,
            service_name: Optional[str] = None,
            notes: Optional[str] = None
    ) -> Appointment:
        """
        Book a new appointment.

        The provider row is locked for the rest of the transaction so two
        concurrent bookings for the same provider cannot both pass the
        conflict check.
        """
        AppointmentService._validate_window(start_time, end_time)

        try:
            AppointmentService._lock_provider(db, business_id, provider_id)

            if ConflictService.has_conflict(db, provider_id, start_time, end_time):
                logger.warning(
                    f"Booking rejected for provider {provider_id}: "
                    f"{start_time.isoformat()} - {end_time.isoformat()} overlaps"
                )
                raise ConflictError(CONFLICT_MESSAGE)

            appointment = Appointment(
                business_id=business_id,
                provider_id=provider_id,
                customer_id=AppointmentService._resolve_customer(db, business_id, customer_id, customer_name),
                service_id=AppointmentService._resolve_service(
                    db, business_id, service_id, service_name, start_time, end_time
                ),
                start_time=start_time,
                end_time=end_time,
                status=AppointmentStatus.PENDING.value,
                notes=notes,
            )
            db.add(appointment)
            AppointmentService._commit(db)
        except Exception:
            db.rollback()
            raise

        db.refresh(appointment)
        logger.info(f"Created appointment {appointment.id} for provider {provider_id}")
        return appointment

    @staticmethod
    def update_appointment(
            db: Session,
            business_id: int,
            appointment_id: int,
            provider_id: int,
            start_time: datetime,
            end_time: datetime,
            status: AppointmentStatus = AppointmentStatus.PENDING,
            customer_id: Optional[int] = None,
            customer_name: Optional[str] = None,
            service_id: Optional[int] = None,
            service_name: Optional[str] = None,
            notes: Optional[str] = None
    ) -> Appointment:
        """Move or edit an appointment; it is never considered in conflict with itself"""
        AppointmentService._validate_window(start_time, end_time)

        try:
            appointment = AppointmentService.get_appointment(db, business_id, appointment_id)
            AppointmentService._lock_provider(db, business_id, provider_id)

            if ConflictService.has_conflict(
                    db, provider_id, start_time, end_time, exclude_appointment_id=appointment_id
            ):
                logger.warning(
                    f"Update of appointment {appointment_id} rejected: "
                    f"provider {provider_id} busy {start_time.isoformat()} - {end_time.isoformat()}"
                )
                raise ConflictError(CONFLICT_MESSAGE)

            appointment.provider_id = provider_id
            appointment.customer_id = AppointmentService._resolve_customer(
                db, business_id, customer_id, customer_name
            )
            appointment.service_id = AppointmentService._resolve_service(
                db, business_id, service_id, service_name, start_time, end_time
            )
            appointment.start_time = start_time
            appointment.end_time = end_time
            appointment.status = AppointmentStatus(status).value
            appointment.notes = notes
            AppointmentService._commit(db)
        except Exception:
            db.rollback()
            raise

        db.refresh(appointment)
        logger.info(f"Updated appointment {appointment_id}")
        return appointment

    @staticmethod
    def cancel_appointment(db: Session, business_id: int, appointment_id: int) -> None:
        """Soft delete: the row stays for history and trend queries"""
        appointment = AppointmentService.get_appointment(db, business_id, appointment_id)

        appointment.is_deleted = True
        appointment.status = AppointmentStatus.CANCELLED.value
        db.commit()
        logger.info(f"Cancelled appointment {appointment_id}")

    @staticmethod
    def get_appointment(db: Session, business_id: int, appointment_id: int) -> Appointment:
        """Get a non-deleted appointment of this business. Raises NotFoundError otherwise."""
        appointment = db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.business_id == business_id,
            Appointment.is_deleted == False
        ).first()

        if not appointment:
            raise NotFoundError(f"Appointment {appointment_id} not found")

        return appointment

    @staticmethod
    def get_appointments_in_window(
            db: Session,
            business_id: int,
            window_start: datetime,
            window_end: datetime,
            with_details: bool = False
    ) -> List[Appointment]:
        """Non-deleted appointments starting in [window_start, window_end), oldest first"""
        query = db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.is_deleted == False,
            Appointment.start_time >= window_start,
            Appointment.start_time < window_end
        )

        if with_details:
            query = query.options(
                joinedload(Appointment.provider),
                joinedload(Appointment.customer),
                joinedload(Appointment.service),
            )

        return query.order_by(Appointment.start_time.asc()).all()

    @staticmethod
    def get_paged_by_date(
            db: Session,
            business_id: int,
            day: date,
            page: int = 1,
            page_size: int = 5
    ) -> Tuple[List[Appointment], int, int, int]:
        """
        One page of the day's appointments, earliest first, paged in the database.

        Returns (items, total_count, page, page_size) with page values corrected
        the same way as the day view.
        """
        page, page_size = normalize_pagination(page, page_size)

        query = db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.is_deleted == False,
            Appointment.start_time >= day_start(day),
            Appointment.start_time < day_start(day + timedelta(days=1))
        )

        total_count = query.count()
        items = query.options(
            joinedload(Appointment.provider),
            joinedload(Appointment.customer),
            joinedload(Appointment.service),
        ).order_by(
            Appointment.start_time.asc(),
            Appointment.id.asc()
        ).offset(page_offset(page, page_size)).limit(page_size).all()

        return items, total_count, page, page_size

    @staticmethod
    def list_appointments(
            db: Session,
            business_id: int,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None
    ) -> List[Appointment]:
        """All appointments of the business, optionally limited to a date range (inclusive)"""
        query = db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.is_deleted == False
        )

        if start_date:
            query = query.filter(Appointment.start_time >= day_start(start_date))
        if end_date:
            query = query.filter(Appointment.start_time < day_start(end_date + timedelta(days=1)))

        return query.order_by(Appointment.start_time.asc()).all()

    @staticmethod
    def get_next_appointment(
            db: Session,
            business_id: int,
            now: Optional[datetime] = None
    ) -> Optional[Appointment]:
        """Earliest appointment that has not started yet"""
        now = now or datetime.now()

        return db.query(Appointment).options(
            joinedload(Appointment.provider),
            joinedload(Appointment.customer),
        ).filter(
            Appointment.business_id == business_id,
            Appointment.is_deleted == False,
            Appointment.start_time > now
        ).order_by(Appointment.start_time.asc()).first()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_window(start_time: datetime, end_time: datetime) -> None:
        if end_time <= start_time:
            raise InvalidInputError("End time must be after start time")

    @staticmethod
    def _lock_provider(db: Session, business_id: int, provider_id: int) -> Provider:
        """SELECT ... FOR UPDATE on the provider; serializes bookings per provider"""
        provider = db.query(Provider).filter(
            Provider.id == provider_id,
            Provider.business_id == business_id,
            Provider.is_deleted == False
        ).with_for_update().first()

        if not provider:
            raise NotFoundError(f"Provider {provider_id} not found")

        return provider

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as e:
            if OVERLAP_CONSTRAINT in str(e.orig):
                raise ConflictError(CONFLICT_MESSAGE) from e
            raise

    @staticmethod
    def _resolve_customer(
            db: Session,
            business_id: int,
            customer_id: Optional[int],
            customer_name: Optional[str]
    ) -> Optional[int]:
        """Use the given customer, or create one from a free-text name"""
        if customer_id is not None:
            exists = db.query(Customer.id).filter(
                Customer.id == customer_id,
                Customer.business_id == business_id,
                Customer.is_deleted == False
            ).first()
            if not exists:
                raise NotFoundError(f"Customer {customer_id} not found")
            return customer_id

        if customer_name and customer_name.strip():
            customer = Customer(business_id=business_id, name=customer_name.strip())
            db.add(customer)
            db.flush()
            return customer.id

        return None

    @staticmethod
    def _resolve_service(
            db: Session,
            business_id: int,
            service_id: Optional[int],
            service_name: Optional[str],
            start_time: datetime,
            end_time: datetime
    ) -> Optional[int]:
        """Use the given service, or create one whose default duration is this booking's length"""
        if service_id is not None:
            exists = db.query(Service.id).filter(
                Service.id == service_id,
                Service.business_id == business_id,
                Service.is_deleted == False
            ).first()
            if not exists:
                raise NotFoundError(f"Service {service_id} not found")
            return service_id

        if service_name and service_name.strip():
            service = Service(
                business_id=business_id,
                name=service_name.strip(),
                default_duration=minutes_between(start_time, end_time),
            )
            db.add(service)
            db.flush()
            return service.id

        return None
