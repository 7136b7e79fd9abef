# booking/services/schedule/provider_schedule_service.py
"""Provisioning and replacement of providers' weekly schedule versions"""
import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from booking.config.settings import get_settings
from booking.core.exceptions import InvalidInputError, NotFoundError
from booking.models.business import Provider
from booking.models.provider_schedule import ProviderSchedule
from booking.services.appointment.conflict_service import intervals_overlap
from booking.services.provider.provider_service import ProviderService
from booking.utils.datetime_utils import parse_hhmm

logger = logging.getLogger(__name__)


class ProviderScheduleService:
    """Handles provider schedule versions"""

    @staticmethod
    def create_default_schedules(
            db: Session,
            provider_id: int,
            commit: bool = True,
            today: Optional[date] = None
    ) -> List[ProviderSchedule]:
        """
        Seed the standard week for a new provider: Monday to Friday,
        09:00-18:00, valid from today with no end date.
        """
        settings = get_settings()
        valid_from = today or date.today()
        start_time = parse_hhmm(settings.DEFAULT_SCHEDULE_START)
        end_time = parse_hhmm(settings.DEFAULT_SCHEDULE_END)

        schedules = [
            ProviderSchedule(
                provider_id=provider_id,
                day_of_week=day,
                start_time=start_time,
                end_time=end_time,
                valid_from=valid_from,
                valid_until=None,
            )
            for day in settings.DEFAULT_SCHEDULE_DAYS
        ]

        db.add_all(schedules)
        if commit:
            db.commit()
        else:
            db.flush()

        logger.info(f"Seeded {len(schedules)} default schedules for provider {provider_id}")
        return schedules

    @staticmethod
    def get_by_provider(
            db: Session,
            business_id: int,
            provider_id: int,
            include_history: bool = False
    ) -> List[ProviderSchedule]:
        """Current (open-ended) versions of a provider, or every version with include_history"""
        ProviderService.get_provider(db, business_id, provider_id)

        query = db.query(ProviderSchedule).filter(
            ProviderSchedule.provider_id == provider_id,
            ProviderSchedule.is_deleted == False
        )
        if not include_history:
            query = query.filter(ProviderSchedule.valid_until.is_(None))

        return query.order_by(
            ProviderSchedule.day_of_week.asc(),
            ProviderSchedule.valid_from.asc(),
            ProviderSchedule.start_time.asc()
        ).all()

    @staticmethod
    def get_by_id(db: Session, business_id: int, schedule_id: int) -> ProviderSchedule:
        """Get one non-deleted version whose provider belongs to the business. Raises NotFoundError otherwise."""
        schedule = db.query(ProviderSchedule).join(
            Provider, ProviderSchedule.provider_id == Provider.id
        ).filter(
            ProviderSchedule.id == schedule_id,
            ProviderSchedule.is_deleted == False,
            Provider.business_id == business_id,
            Provider.is_deleted == False
        ).first()

        if not schedule:
            raise NotFoundError(f"Schedule {schedule_id} not found")

        return schedule

    @staticmethod
    def delete(db: Session, business_id: int, schedule_id: int) -> None:
        """Soft delete one version; its dates stop counting toward scheduled minutes"""
        schedule = ProviderScheduleService.get_by_id(db, business_id, schedule_id)

        schedule.is_deleted = True
        db.commit()
        logger.info(f"Deleted schedule {schedule_id} of provider {schedule.provider_id}")

    @staticmethod
    def bulk_replace(
            db: Session,
            business_id: int,
            provider_id: int,
            new_versions: Sequence,
            today: Optional[date] = None
    ) -> List[ProviderSchedule]:
        """
        Replace the provider's whole weekly schedule.

        Open versions that were already in effect are closed at yesterday so
        history keeps reporting them; open versions that never took effect are
        soft-deleted. The new windows start today with no end date.
        Nothing is written if the provider is not part of the business or the
        new windows are invalid.
        """
        ProviderService.get_provider(db, business_id, provider_id)
        ProviderScheduleService._validate_windows(new_versions)

        today = today or date.today()
        yesterday = today - timedelta(days=1)

        try:
            open_versions = db.query(ProviderSchedule).filter(
                ProviderSchedule.provider_id == provider_id,
                ProviderSchedule.is_deleted == False,
                ProviderSchedule.valid_until.is_(None)
            ).all()

            closed, dropped = 0, 0
            for version in open_versions:
                if version.valid_from < today:
                    version.valid_until = yesterday
                    closed += 1
                else:
                    version.is_deleted = True
                    dropped += 1

            created = [
                ProviderSchedule(
                    provider_id=provider_id,
                    day_of_week=item.day_of_week,
                    start_time=item.start_time,
                    end_time=item.end_time,
                    valid_from=today,
                    valid_until=None,
                )
                for item in new_versions
            ]
            db.add_all(created)
            db.commit()
        except Exception:
            db.rollback()
            logger.error(f"Failed to replace schedules for provider {provider_id}", exc_info=True)
            raise

        for schedule in created:
            db.refresh(schedule)

        logger.info(
            f"Replaced schedules for provider {provider_id}: "
            f"closed={closed} dropped={dropped} created={len(created)}"
        )
        return created

    @staticmethod
    def _validate_windows(new_versions: Sequence) -> None:
        """Reject bad days, inverted windows, and windows overlapping on the same weekday"""
        by_day = defaultdict(list)

        for item in new_versions:
            if not 0 <= item.day_of_week <= 6:
                raise InvalidInputError(f"Invalid day of week {item.day_of_week}, expected 0-6")
            if item.end_time <= item.start_time:
                raise InvalidInputError(
                    f"Schedule end {item.end_time} must be after start {item.start_time}"
                )
            by_day[item.day_of_week].append(item)

        for day, items in by_day.items():
            items = sorted(items, key=lambda i: i.start_time)
            for previous, current in zip(items, items[1:]):
                if intervals_overlap(previous.start_time, previous.end_time,
                                     current.start_time, current.end_time):
                    raise InvalidInputError(f"Overlapping schedule windows on day {day}")
