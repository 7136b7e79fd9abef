"""Tests for provider double-booking detection."""

from datetime import timedelta

import pytest

from booking.services.appointment.conflict_service import ConflictService, intervals_overlap
from tests.conftest import MONDAY, at, make_appointment, make_business, make_provider


class TestIntervalsOverlap:

    @pytest.mark.parametrize(
        "a, b",
        [
            ((10, 12), (11, 13)),
            ((10, 12), (12, 14)),
            ((10, 14), (11, 12)),
            ((10, 11), (13, 14)),
        ],
    )
    def test_symmetric(self, a, b):
        assert intervals_overlap(*a, *b) == intervals_overlap(*b, *a)

    def test_touching_endpoints_do_not_overlap(self):
        assert not intervals_overlap(9, 10, 10, 11)

    def test_containment_overlaps(self):
        assert intervals_overlap(9, 17, 10, 11)
        assert intervals_overlap(10, 11, 9, 17)


class TestHasConflict:

    def test_partial_overlap_conflicts(self, db_session, provider):
        make_appointment(db_session, provider, at(MONDAY, "10:00"), at(MONDAY, "11:00"))

        assert ConflictService.has_conflict(
            db_session, provider.id, at(MONDAY, "10:30"), at(MONDAY, "11:30")
        )

    def test_overlap_is_symmetric(self, db_session, business):
        first = make_provider(db_session, business, "First")
        second = make_provider(db_session, business, "Second")
        make_appointment(db_session, first, at(MONDAY, "10:00"), at(MONDAY, "11:00"))
        make_appointment(db_session, second, at(MONDAY, "10:30"), at(MONDAY, "11:30"))

        assert ConflictService.has_conflict(db_session, first.id, at(MONDAY, "10:30"), at(MONDAY, "11:30"))
        assert ConflictService.has_conflict(db_session, second.id, at(MONDAY, "10:00"), at(MONDAY, "11:00"))

    def test_touching_windows_do_not_conflict(self, db_session, provider):
        make_appointment(db_session, provider, at(MONDAY, "10:00"), at(MONDAY, "11:00"))

        assert not ConflictService.has_conflict(
            db_session, provider.id, at(MONDAY, "11:00"), at(MONDAY, "12:00")
        )
        assert not ConflictService.has_conflict(
            db_session, provider.id, at(MONDAY, "09:00"), at(MONDAY, "10:00")
        )

    def test_containing_window_conflicts(self, db_session, provider):
        make_appointment(db_session, provider, at(MONDAY, "10:00"), at(MONDAY, "10:30"))

        assert ConflictService.has_conflict(
            db_session, provider.id, at(MONDAY, "09:00"), at(MONDAY, "12:00")
        )

    def test_contained_window_conflicts(self, db_session, provider):
        make_appointment(db_session, provider, at(MONDAY, "09:00"), at(MONDAY, "12:00"))

        assert ConflictService.has_conflict(
            db_session, provider.id, at(MONDAY, "10:00"), at(MONDAY, "10:30")
        )

    def test_excluded_appointment_never_conflicts_with_itself(self, db_session, provider):
        appointment = make_appointment(db_session, provider, at(MONDAY, "10:00"), at(MONDAY, "11:00"))

        assert not ConflictService.has_conflict(
            db_session,
            provider.id,
            at(MONDAY, "10:00"),
            at(MONDAY, "11:00"),
            exclude_appointment_id=appointment.id,
        )

    def test_exclusion_only_skips_that_appointment(self, db_session, provider):
        moving = make_appointment(db_session, provider, at(MONDAY, "10:00"), at(MONDAY, "11:00"))
        make_appointment(db_session, provider, at(MONDAY, "11:00"), at(MONDAY, "12:00"))

        assert ConflictService.has_conflict(
            db_session,
            provider.id,
            at(MONDAY, "10:30"),
            at(MONDAY, "11:30"),
            exclude_appointment_id=moving.id,
        )

    def test_soft_deleted_appointments_never_conflict(self, db_session, provider):
        make_appointment(
            db_session, provider, at(MONDAY, "10:00"), at(MONDAY, "11:00"), is_deleted=True
        )

        assert not ConflictService.has_conflict(
            db_session, provider.id, at(MONDAY, "10:00"), at(MONDAY, "11:00")
        )

    def test_different_providers_never_conflict(self, db_session, business):
        busy = make_provider(db_session, business, "Busy")
        free = make_provider(db_session, business, "Free")
        make_appointment(db_session, busy, at(MONDAY, "10:00"), at(MONDAY, "11:00"))

        assert not ConflictService.has_conflict(
            db_session, free.id, at(MONDAY, "10:00"), at(MONDAY, "11:00")
        )

    def test_other_business_provider_is_independent(self, db_session, provider):
        other = make_provider(db_session, make_business(db_session, "Other"), "Other provider")
        make_appointment(db_session, other, at(MONDAY, "10:00"), at(MONDAY, "11:00"))

        assert not ConflictService.has_conflict(
            db_session, provider.id, at(MONDAY, "10:00"), at(MONDAY, "11:00")
        )

    def test_appointment_spanning_midnight(self, db_session, provider):
        tuesday = MONDAY + timedelta(days=1)
        make_appointment(db_session, provider, at(MONDAY, "23:00"), at(tuesday, "01:00"))

        assert ConflictService.has_conflict(
            db_session, provider.id, at(tuesday, "00:30"), at(tuesday, "02:00")
        )
