# booking/services/calendar/calendar_summary_service.py
"""
Per-day calendar totals over a date range.

The whole range costs two queries (appointments, schedule versions); every
per-date figure is then computed in memory.
"""
import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, List, Tuple, Union

from sqlalchemy.orm import Session

from booking.config.settings import get_settings
from booking.core.exceptions import InvalidInputError
from booking.schemas.calendar import DaySummary
from booking.services.appointment.appointment_service import AppointmentService
from booking.services.provider.provider_service import ProviderService
from booking.services.schedule.schedule_resolver import ScheduleResolver
from booking.utils.datetime_utils import day_start, iter_days, to_date

logger = logging.getLogger(__name__)


class CalendarSummaryService:
    """Aggregates appointments and availability into DaySummary rows"""

    @staticmethod
    def get_calendar_summary(
            db: Session,
            business_id: int,
            start_date: Union[date, datetime],
            end_date: Union[date, datetime]
    ) -> List[DaySummary]:
        """One DaySummary per day in [start_date, end_date], in date order"""
        start_date = to_date(start_date)
        end_date = to_date(end_date)
        CalendarSummaryService._validate_range(start_date, end_date)

        provider_ids = ProviderService.get_provider_ids_by_business(db, business_id)
        if not provider_ids:
            return CalendarSummaryService._empty_days(start_date, end_date)

        appointments_by_date = CalendarSummaryService.count_and_minutes_by_date(
            db, business_id, start_date, end_date
        )
        scheduled_by_date = CalendarSummaryService.scheduled_minutes_by_date(
            db, provider_ids, start_date, end_date
        )

        summaries = []
        for day in iter_days(start_date, end_date):
            scheduled = scheduled_by_date.get(day, 0)
            count, occupied = appointments_by_date.get(day, (0, 0))
            summaries.append(DaySummary(
                date=day,
                appointments_count=count,
                total_scheduled_minutes=scheduled,
                total_occupied_minutes=occupied,
                total_available_minutes=max(0, scheduled - occupied),
            ))

        logger.debug(
            f"Calendar summary for business {business_id}: {start_date} - {end_date}, "
            f"{len(provider_ids)} providers"
        )
        return summaries

    @staticmethod
    def count_and_minutes_by_date(
            db: Session,
            business_id: int,
            start_date: date,
            end_date: date
    ) -> Dict[date, Tuple[int, int]]:
        """(appointment count, occupied minutes) per start date, from a single query"""
        appointments = AppointmentService.get_appointments_in_window(
            db,
            business_id,
            day_start(start_date),
            day_start(end_date + timedelta(days=1)),
        )

        totals: Dict[date, List[int]] = defaultdict(lambda: [0, 0])
        for appointment in appointments:
            bucket = totals[appointment.start_time.date()]
            bucket[0] += 1
            bucket[1] += appointment.duration_minutes

        return {day: (count, minutes) for day, (count, minutes) in totals.items()}

    @staticmethod
    def scheduled_minutes_by_date(
            db: Session,
            provider_ids: List[int],
            start_date: date,
            end_date: date
    ) -> Dict[date, int]:
        """Scheduled minutes per date; one bulk fetch, then per-date filtering in memory"""
        schedules = ScheduleResolver.schedules_intersecting(db, provider_ids, start_date, end_date)

        return {
            day: ScheduleResolver.minutes_for_date(schedules, day)
            for day in iter_days(start_date, end_date)
        }

    @staticmethod
    def _validate_range(start_date: date, end_date: date) -> None:
        if end_date < start_date:
            raise InvalidInputError("end_date must be on or after start_date")

        max_days = get_settings().CALENDAR_MAX_RANGE_DAYS
        if max_days is not None and (end_date - start_date).days + 1 > max_days:
            raise InvalidInputError(f"Date range cannot exceed {max_days} days")

    @staticmethod
    def _empty_days(start_date: date, end_date: date) -> List[DaySummary]:
        return [DaySummary(date=day) for day in iter_days(start_date, end_date)]
