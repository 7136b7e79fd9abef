# booking/services/schedule/schedule_resolver.py
"""
Resolves which schedule versions are in effect on a given date.

A version applies to a date when the weekday matches and the date falls inside
[valid_from, valid_until] (valid_until NULL = open-ended). When several versions
of the same provider/weekday are valid on one date their minutes are summed.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from booking.models.provider_schedule import ProviderSchedule
from booking.utils.datetime_utils import minutes_between


class ScheduleResolver:
    """Time-versioned weekly availability lookups"""

    @staticmethod
    def is_valid_on(schedule: ProviderSchedule, day: date) -> bool:
        """Whether this version is in effect on the given date"""
        if schedule.is_deleted:
            return False
        return (
            schedule.day_of_week == day.weekday()
            and schedule.valid_from <= day
            and (schedule.valid_until is None or schedule.valid_until >= day)
        )

    @staticmethod
    def schedule_minutes(schedule: ProviderSchedule) -> int:
        return minutes_between(schedule.start_time, schedule.end_time)

    @staticmethod
    def minutes_for_date(schedules: Iterable[ProviderSchedule], day: date) -> int:
        """Sum the minutes of every version valid on the date (in-memory filter)"""
        return sum(
            ScheduleResolver.schedule_minutes(s)
            for s in schedules
            if ScheduleResolver.is_valid_on(s, day)
        )

    @staticmethod
    def schedules_intersecting(
            db: Session,
            provider_ids: List[int],
            start_date: date,
            end_date: date
    ) -> List[ProviderSchedule]:
        """Every version whose validity window touches [start_date, end_date], in one query"""
        if not provider_ids:
            return []

        return db.query(ProviderSchedule).filter(
            ProviderSchedule.provider_id.in_(provider_ids),
            ProviderSchedule.is_deleted == False,
            ProviderSchedule.valid_from <= end_date,
            or_(
                ProviderSchedule.valid_until.is_(None),
                ProviderSchedule.valid_until >= start_date
            )
        ).all()

    @staticmethod
    def minutes_by_day_of_week(
            db: Session,
            provider_ids: List[int],
            day: date
    ) -> Dict[int, int]:
        """
        Scheduled minutes of the versions in effect on `day`, keyed by weekday
        (0=Monday). Callers read the entry for day.weekday().
        """
        if not provider_ids:
            return {}

        schedules = db.query(ProviderSchedule).filter(
            ProviderSchedule.provider_id.in_(provider_ids),
            ProviderSchedule.is_deleted == False,
            ProviderSchedule.valid_from <= day,
            or_(
                ProviderSchedule.valid_until.is_(None),
                ProviderSchedule.valid_until >= day
            )
        ).all()

        minutes_by_day: Dict[int, int] = defaultdict(int)
        for schedule in schedules:
            minutes_by_day[schedule.day_of_week] += ScheduleResolver.schedule_minutes(schedule)

        return dict(minutes_by_day)
