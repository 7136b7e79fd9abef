"""Shared test fixtures and helpers."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from booking.api.dependencies import get_current_business_id
from booking.config.database import get_db
from booking.main import create_app
from booking.models import (
    Appointment,
    AppointmentStatus,
    Base,
    Business,
    Customer,
    Provider,
    ProviderSchedule,
    Service,
)
from booking.utils.datetime_utils import parse_hhmm

# 2024-01-15 is a Monday
MONDAY = date(2024, 1, 15)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def business(db_session):
    return make_business(db_session, "Downtown Clinic")


@pytest.fixture
def provider(db_session, business):
    return make_provider(db_session, business, "Dr. Ana Ruiz")


@pytest.fixture
def client(db_session, business):
    """TestClient bound to the test session and authenticated as `business`."""
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_current_business_id] = lambda: business.id

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_business(db, name: str = "Test Business") -> Business:
    business = Business(name=name)
    db.add(business)
    db.commit()
    return business


def make_provider(
    db,
    business: Business,
    name: str = "Provider",
    is_active: bool = True,
) -> Provider:
    """Helper to create a provider without any schedule."""
    provider = Provider(business_id=business.id, name=name, is_active=is_active)
    db.add(provider)
    db.commit()
    return provider


def make_customer(db, business: Business, name: str = "Customer") -> Customer:
    customer = Customer(business_id=business.id, name=name)
    db.add(customer)
    db.commit()
    return customer


def make_service(db, business: Business, name: str = "Consultation", duration: int = 30) -> Service:
    service = Service(business_id=business.id, name=name, default_duration=duration)
    db.add(service)
    db.commit()
    return service


def make_appointment(
    db,
    provider: Provider,
    start: datetime,
    end: datetime,
    customer: Optional[Customer] = None,
    service: Optional[Service] = None,
    status: AppointmentStatus = AppointmentStatus.PENDING,
    is_deleted: bool = False,
    notes: Optional[str] = None,
) -> Appointment:
    """Helper to insert an appointment directly, bypassing the conflict check."""
    appointment = Appointment(
        business_id=provider.business_id,
        provider_id=provider.id,
        customer_id=customer.id if customer else None,
        service_id=service.id if service else None,
        start_time=start,
        end_time=end,
        status=status.value,
        is_deleted=is_deleted,
        notes=notes,
    )
    db.add(appointment)
    db.commit()
    return appointment


def make_schedule(
    db,
    provider: Provider,
    day_of_week: int,
    start: str = "09:00",
    end: str = "17:00",
    valid_from: date = date(2024, 1, 1),
    valid_until: Optional[date] = None,
    is_deleted: bool = False,
) -> ProviderSchedule:
    """Helper to create one schedule version from "HH:MM" strings."""
    schedule = ProviderSchedule(
        provider_id=provider.id,
        day_of_week=day_of_week,
        start_time=parse_hhmm(start),
        end_time=parse_hhmm(end),
        valid_from=valid_from,
        valid_until=valid_until,
        is_deleted=is_deleted,
    )
    db.add(schedule)
    db.commit()
    return schedule


def at(day: date, hhmm: str) -> datetime:
    """datetime on `day` at "HH:MM"."""
    return datetime.combine(day, parse_hhmm(hhmm))
