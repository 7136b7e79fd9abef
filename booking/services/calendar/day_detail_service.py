# booking/services/calendar/day_detail_service.py
"""
Detail view of a single day: the day's totals, the trend against the
previous day, and the filtered, paginated appointment list.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from booking.config.settings import get_settings
from booking.models.appointment import Appointment
from booking.schemas.calendar import AppointmentDetail, DayDetail
from booking.services.appointment.appointment_service import AppointmentService
from booking.services.calendar.calendar_summary_service import CalendarSummaryService
from booking.services.provider.provider_service import ProviderService
from booking.services.schedule.schedule_resolver import ScheduleResolver
from booking.utils.datetime_utils import day_start, format_hhmm, parse_hhmm, to_date
from booking.utils.pagination import normalize_pagination, page_count, page_offset

logger = logging.getLogger(__name__)


class DayDetailService:
    """Builds the DayDetail view"""

    @staticmethod
    def get_day_details(
            db: Session,
            business_id: int,
            day: Union[date, datetime],
            page: int = 1,
            page_size: int = 10,
            start_time_from: Optional[str] = None,
            start_time_to: Optional[str] = None,
            search_text: Optional[str] = None,
            status: Optional[str] = None
    ) -> DayDetail:
        """
        Appointments of one day, filtered and paginated.

        Totals (appointment count, occupied minutes) always describe the whole
        day; filters only narrow the listed rows. Invalid page/page_size
        values are corrected instead of rejected.
        """
        day = to_date(day)
        page, page_size = normalize_pagination(page, page_size)
        time_from = parse_hhmm(start_time_from)
        time_to = parse_hhmm(start_time_to)

        appointments = AppointmentService.get_appointments_in_window(
            db,
            business_id,
            day_start(day),
            day_start(day + timedelta(days=1)),
            with_details=True,
        )

        total_appointments = len(appointments)
        total_occupied_minutes = sum(a.duration_minutes for a in appointments)
        appointments_trend = DayDetailService.get_appointments_trend(db, business_id, day)

        provider_ids = ProviderService.get_provider_ids_by_business(db, business_id)
        minutes_by_day = ScheduleResolver.minutes_by_day_of_week(db, provider_ids, day)
        total_scheduled_minutes = minutes_by_day.get(day.weekday(), 0)

        filtered = DayDetailService.apply_filters(
            appointments, time_from, time_to, search_text, status
        )
        filtered.sort(key=lambda a: a.start_time, reverse=True)

        page_items, total_count, total_pages = DayDetailService.paginate(filtered, page, page_size)

        return DayDetail(
            date=day,
            day_of_week=day.strftime("%A"),
            total_appointments=total_appointments,
            appointments_trend=appointments_trend,
            total_scheduled_minutes=total_scheduled_minutes,
            total_occupied_minutes=total_occupied_minutes,
            appointments=[DayDetailService._to_detail(a) for a in page_items],
            current_page=page,
            page_size=page_size,
            total_pages=total_pages,
            total_count=total_count,
        )

    @staticmethod
    def get_appointments_trend(db: Session, business_id: int, day: Union[date, datetime]) -> int:
        """Appointments on `day` minus appointments on the day before"""
        day = to_date(day)
        previous = day - timedelta(days=1)

        counts = CalendarSummaryService.count_and_minutes_by_date(db, business_id, previous, day)
        today_count = counts.get(day, (0, 0))[0]
        previous_count = counts.get(previous, (0, 0))[0]
        return today_count - previous_count

    @staticmethod
    def apply_filters(
            appointments: List[Appointment],
            time_from: Optional[time] = None,
            time_to: Optional[time] = None,
            search_text: Optional[str] = None,
            status: Optional[str] = None
    ) -> List[Appointment]:
        """Start-time window, then text search over customer/provider/service names, then status"""
        filtered = list(appointments)

        if time_from is not None:
            filtered = [a for a in filtered if a.start_time.time() >= time_from]

        if time_to is not None:
            filtered = [a for a in filtered if a.start_time.time() <= time_to]

        if search_text and search_text.strip():
            needle = search_text.strip().lower()
            filtered = [
                a for a in filtered
                if (a.customer is not None and needle in a.customer.name.lower())
                or (a.provider is not None and needle in a.provider.name.lower())
                or (a.service is not None and needle in a.service.name.lower())
            ]

        if status:
            filtered = [a for a in filtered if a.status == status.lower()]

        return filtered

    @staticmethod
    def paginate(items: list, page: int, page_size: int) -> Tuple[list, int, int]:
        """(items of the page, total item count, total pages)"""
        total_count = len(items)
        offset = page_offset(page, page_size)
        return items[offset:offset + page_size], total_count, page_count(total_count, page_size)

    @staticmethod
    def _to_detail(appointment: Appointment) -> AppointmentDetail:
        settings = get_settings()
        return AppointmentDetail(
            id=appointment.id,
            customer_name=appointment.customer.name if appointment.customer else settings.NO_CUSTOMER_LABEL,
            provider_name=appointment.provider.name if appointment.provider else settings.NO_PROVIDER_LABEL,
            service_name=appointment.service.name if appointment.service else None,
            start_time=format_hhmm(appointment.start_time),
            end_time=format_hhmm(appointment.end_time),
            duration_minutes=appointment.duration_minutes,
            status=appointment.status,
            notes=appointment.notes,
        )
