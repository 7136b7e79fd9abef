"""Tests for time-versioned schedule resolution."""

from datetime import date, timedelta

from booking.services.schedule.schedule_resolver import ScheduleResolver
from tests.conftest import MONDAY, make_provider, make_schedule


class TestIsValidOn:

    def test_open_ended_version(self, db_session, provider):
        schedule = make_schedule(db_session, provider, 0, valid_from=date(2024, 1, 1))

        assert ScheduleResolver.is_valid_on(schedule, MONDAY)
        assert ScheduleResolver.is_valid_on(schedule, date(2030, 6, 3))

    def test_wrong_weekday(self, db_session, provider):
        schedule = make_schedule(db_session, provider, 1)

        assert not ScheduleResolver.is_valid_on(schedule, MONDAY)

    def test_validity_bounds_are_inclusive(self, db_session, provider):
        schedule = make_schedule(
            db_session, provider, 0, valid_from=MONDAY, valid_until=MONDAY + timedelta(days=7)
        )

        assert ScheduleResolver.is_valid_on(schedule, MONDAY)
        assert ScheduleResolver.is_valid_on(schedule, MONDAY + timedelta(days=7))
        assert not ScheduleResolver.is_valid_on(schedule, MONDAY - timedelta(days=7))
        assert not ScheduleResolver.is_valid_on(schedule, MONDAY + timedelta(days=14))

    def test_deleted_version_is_never_valid(self, db_session, provider):
        schedule = make_schedule(db_session, provider, 0, is_deleted=True)

        assert not ScheduleResolver.is_valid_on(schedule, MONDAY)


class TestMinutesByDayOfWeek:

    def test_empty_provider_set(self, db_session):
        assert ScheduleResolver.minutes_by_day_of_week(db_session, [], MONDAY) == {}

    def test_sums_all_providers(self, db_session, business):
        first = make_provider(db_session, business, "First")
        second = make_provider(db_session, business, "Second")
        make_schedule(db_session, first, 0, "09:00", "17:00")
        make_schedule(db_session, second, 0, "09:00", "13:00")

        result = ScheduleResolver.minutes_by_day_of_week(db_session, [first.id, second.id], MONDAY)

        assert result.get(MONDAY.weekday(), 0) == 480 + 240

    def test_closed_version_is_ignored(self, db_session, provider):
        make_schedule(db_session, provider, 0, "09:00", "13:00",
                      valid_from=date(2024, 1, 1), valid_until=date(2024, 1, 7))
        make_schedule(db_session, provider, 0, "09:00", "17:00", valid_from=date(2024, 1, 8))

        result = ScheduleResolver.minutes_by_day_of_week(db_session, [provider.id], MONDAY)

        assert result.get(MONDAY.weekday(), 0) == 480

    def test_overlapping_versions_are_summed(self, db_session, provider):
        make_schedule(db_session, provider, 0, "09:00", "13:00", valid_from=date(2024, 1, 1))
        make_schedule(db_session, provider, 0, "09:00", "17:00", valid_from=date(2024, 1, 8))

        result = ScheduleResolver.minutes_by_day_of_week(db_session, [provider.id], MONDAY)

        assert result.get(MONDAY.weekday(), 0) == 240 + 480

    def test_version_not_yet_in_effect(self, db_session, provider):
        make_schedule(db_session, provider, 0, valid_from=MONDAY + timedelta(days=1))

        result = ScheduleResolver.minutes_by_day_of_week(db_session, [provider.id], MONDAY)

        assert result.get(MONDAY.weekday(), 0) == 0


class TestSchedulesIntersecting:

    def test_empty_provider_set(self, db_session):
        assert ScheduleResolver.schedules_intersecting(db_session, [], MONDAY, MONDAY) == []

    def test_filters_by_validity_window(self, db_session, provider):
        inside = make_schedule(db_session, provider, 0, valid_from=date(2024, 1, 1))
        ended = make_schedule(db_session, provider, 1, valid_from=date(2023, 1, 1),
                              valid_until=date(2023, 12, 31))
        future = make_schedule(db_session, provider, 2, valid_from=date(2024, 3, 1))
        make_schedule(db_session, provider, 3, is_deleted=True)

        result = ScheduleResolver.schedules_intersecting(
            db_session, [provider.id], date(2024, 1, 1), date(2024, 1, 31)
        )

        ids = {s.id for s in result}
        assert inside.id in ids
        assert ended.id not in ids
        assert future.id not in ids
        assert len(ids) == 1

    def test_minutes_for_date_filters_in_memory(self, db_session, provider):
        make_schedule(db_session, provider, 0, "09:00", "17:00")
        make_schedule(db_session, provider, 1, "10:00", "12:00")
        schedules = ScheduleResolver.schedules_intersecting(
            db_session, [provider.id], MONDAY, MONDAY + timedelta(days=1)
        )

        assert ScheduleResolver.minutes_for_date(schedules, MONDAY) == 480
        assert ScheduleResolver.minutes_for_date(schedules, MONDAY + timedelta(days=1)) == 120
        assert ScheduleResolver.minutes_for_date(schedules, MONDAY + timedelta(days=2)) == 0
