"""Tests for the single-day detail view."""

from datetime import timedelta

import pytest

from booking.core.exceptions import InvalidInputError
from booking.models import AppointmentStatus
from booking.services.calendar.day_detail_service import DayDetailService
from booking.utils.pagination import normalize_pagination, page_count
from tests.conftest import (
    MONDAY,
    at,
    make_appointment,
    make_customer,
    make_provider,
    make_schedule,
    make_service,
)

SUNDAY = MONDAY - timedelta(days=1)


def book_hours(db, provider, day, hours, **kwargs):
    """One 30 minute appointment at each "HH:MM" in hours."""
    return [
        make_appointment(db, provider, at(day, hhmm), at(day, hhmm) + timedelta(minutes=30), **kwargs)
        for hhmm in hours
    ]


class TestPagination:

    def test_invalid_values_are_corrected(self):
        assert normalize_pagination(-1, 0) == (1, 10)
        assert normalize_pagination(0, -5) == (1, 10)
        assert normalize_pagination(3, 25) == (3, 25)
        assert normalize_pagination(2, 0, default_page_size=5) == (2, 5)

    def test_page_count(self):
        assert page_count(0, 10) == 0
        assert page_count(10, 10) == 1
        assert page_count(11, 10) == 2

    def test_corrected_values_are_reported(self, db_session, business, provider):
        detail = DayDetailService.get_day_details(db_session, business.id, MONDAY, page=-1, page_size=0)

        assert detail.current_page == 1
        assert detail.page_size == 10

    def test_pages_are_sliced(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["09:00", "10:00", "11:00", "12:00", "13:00"])

        detail = DayDetailService.get_day_details(db_session, business.id, MONDAY, page=2, page_size=2)

        assert detail.total_count == 5
        assert detail.total_pages == 3
        assert [a.start_time for a in detail.appointments] == ["11:00", "10:00"]

    def test_page_past_the_end_is_empty(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["09:00"])

        detail = DayDetailService.get_day_details(db_session, business.id, MONDAY, page=5)

        assert detail.appointments == []
        assert detail.total_count == 1

    def test_empty_day_has_no_pages(self, db_session, business, provider):
        detail = DayDetailService.get_day_details(db_session, business.id, MONDAY)

        assert detail.total_count == 0
        assert detail.total_pages == 0


class TestTrend:

    def test_more_than_previous_day(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["09:00", "10:00", "11:00"])
        book_hours(db_session, provider, SUNDAY, ["09:00"])

        assert DayDetailService.get_appointments_trend(db_session, business.id, MONDAY) == 2

    def test_fewer_than_previous_day(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["09:00"])
        book_hours(db_session, provider, SUNDAY, ["09:00", "10:00", "11:00"])

        assert DayDetailService.get_appointments_trend(db_session, business.id, MONDAY) == -2

    def test_equal_days(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["09:00"])
        book_hours(db_session, provider, SUNDAY, ["09:00"])

        assert DayDetailService.get_appointments_trend(db_session, business.id, MONDAY) == 0

    def test_deleted_appointments_do_not_count(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["09:00"])
        book_hours(db_session, provider, SUNDAY, ["09:00", "10:00"], is_deleted=True)

        assert DayDetailService.get_appointments_trend(db_session, business.id, MONDAY) == 1


class TestDayDetails:

    def test_totals_and_projection(self, db_session, business, provider):
        make_schedule(db_session, provider, 0, "09:00", "17:00")
        customer = make_customer(db_session, business, "Laura Gomez")
        service = make_service(db_session, business, "Cleaning")
        make_appointment(
            db_session, provider, at(MONDAY, "10:00"), at(MONDAY, "11:30"),
            customer=customer, service=service, status=AppointmentStatus.CONFIRMED, notes="First visit",
        )

        detail = DayDetailService.get_day_details(db_session, business.id, MONDAY)

        assert detail.date == MONDAY
        assert detail.day_of_week == "Monday"
        assert detail.total_appointments == 1
        assert detail.total_scheduled_minutes == 480
        assert detail.total_occupied_minutes == 90
        [row] = detail.appointments
        assert row.customer_name == "Laura Gomez"
        assert row.provider_name == "Dr. Ana Ruiz"
        assert row.service_name == "Cleaning"
        assert row.start_time == "10:00"
        assert row.end_time == "11:30"
        assert row.duration_minutes == 90
        assert row.status == "confirmed"
        assert row.notes == "First visit"

    def test_missing_customer_gets_label(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["09:00"])

        detail = DayDetailService.get_day_details(db_session, business.id, MONDAY)

        assert detail.appointments[0].customer_name == "No customer assigned"
        assert detail.appointments[0].service_name is None

    def test_ordered_by_start_descending(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["11:00", "09:00", "15:00"])

        detail = DayDetailService.get_day_details(db_session, business.id, MONDAY)

        assert [a.start_time for a in detail.appointments] == ["15:00", "11:00", "09:00"]

    def test_time_window_filter(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["08:00", "10:00", "12:00", "14:00"])

        detail = DayDetailService.get_day_details(
            db_session, business.id, MONDAY, start_time_from="10:00", start_time_to="12:00"
        )

        assert [a.start_time for a in detail.appointments] == ["12:00", "10:00"]
        assert detail.total_count == 2

    def test_filters_do_not_change_day_totals(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["08:00", "10:00", "12:00"])

        detail = DayDetailService.get_day_details(
            db_session, business.id, MONDAY, start_time_from="11:00"
        )

        assert detail.total_count == 1
        assert detail.total_appointments == 3
        assert detail.total_occupied_minutes == 90

    def test_search_matches_customer_provider_and_service(self, db_session, business):
        ana = make_provider(db_session, business, "Ana")
        bruno = make_provider(db_session, business, "Bruno")
        make_appointment(db_session, ana, at(MONDAY, "09:00"), at(MONDAY, "09:30"),
                         customer=make_customer(db_session, business, "Carla Perez"))
        make_appointment(db_session, bruno, at(MONDAY, "10:00"), at(MONDAY, "10:30"),
                         service=make_service(db_session, business, "Whitening"))
        make_appointment(db_session, bruno, at(MONDAY, "11:00"), at(MONDAY, "11:30"))

        by_customer = DayDetailService.get_day_details(db_session, business.id, MONDAY, search_text="carla")
        by_service = DayDetailService.get_day_details(db_session, business.id, MONDAY, search_text="WHITEN")
        by_provider = DayDetailService.get_day_details(db_session, business.id, MONDAY, search_text="bru")

        assert [a.start_time for a in by_customer.appointments] == ["09:00"]
        assert [a.start_time for a in by_service.appointments] == ["10:00"]
        assert [a.start_time for a in by_provider.appointments] == ["11:00", "10:00"]

    def test_search_does_not_match_placeholder_label(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["09:00"])

        detail = DayDetailService.get_day_details(db_session, business.id, MONDAY, search_text="assigned")

        assert detail.total_count == 0

    def test_status_filter(self, db_session, business, provider):
        book_hours(db_session, provider, MONDAY, ["09:00"], status=AppointmentStatus.CONFIRMED)
        book_hours(db_session, provider, MONDAY, ["10:00"], status=AppointmentStatus.ABSENT)

        detail = DayDetailService.get_day_details(db_session, business.id, MONDAY, status="absent")

        assert [a.start_time for a in detail.appointments] == ["10:00"]

    def test_malformed_time_filter(self, db_session, business, provider):
        with pytest.raises(InvalidInputError):
            DayDetailService.get_day_details(db_session, business.id, MONDAY, start_time_from="25:99")
