"""
Pytest configuration: in-memory SQLite, a TestClient bound to it, and a
frozen UTC clock for availability.
"""

import os

# Set before any valet_api import so the module-level engine never touches a real database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from valet_api.database import Base, get_db
from valet_api.main import app
from valet_api.models import BookingSlotSettings, Valet, ValetBooking, ValetRota

# Monday 2030-01-07, 08:00 UTC
FROZEN_NOW = datetime(2030, 1, 7, 8, 0, tzinfo=timezone.utc)
MONDAY = date(2030, 1, 7)
TUESDAY = date(2030, 1, 8)
SATURDAY = date(2030, 1, 12)
NEXT_MONDAY = date(2030, 1, 14)


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
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def frozen_now(monkeypatch):
    monkeypatch.setattr("valet_api.domain.availability.service.utc_now", lambda: FROZEN_NOW)
    return FROZEN_NOW


@pytest.fixture
def slot_settings(db):
    """09:00-17:00 in 30 minute slots, lunch 12:00-13:00, 2 hours notice"""
    settings = BookingSlotSettings(
        slot_start_time="09:00",
        slot_end_time="17:00",
        slot_duration_minutes=30,
        break_start_time="12:00",
        break_end_time="13:00",
        lead_time_hours=2,
        updated_by="tests",
    )
    db.add(settings)
    db.commit()
    return settings


def make_valet(db, name="Alex Shine", with_rota=True, **rota_fields):
    valet = Valet(name=name, email=f"{name.split()[0].lower()}@example.com", status="active")
    db.add(valet)
    db.flush()
    if with_rota:
        db.add(ValetRota(valet_id=valet.valet_id, is_active=True, **rota_fields))
    db.commit()
    db.refresh(valet)
    return valet


def make_booking(db, valet, booking_date, booking_time="09:00", status="pending", **fields):
    values = {
        "booking_code": f"VB-{booking_date.isoformat()}-{booking_time}",
        "vehicle_make": "Ford",
        "vehicle_model": "Focus",
        "customer_name": "Sam Driver",
        "source": "manual",
    }
    values.update(fields)
    booking = ValetBooking(
        valet_id=valet.valet_id,
        booking_date=booking_date,
        booking_time=booking_time,
        status=status,
        **values,
    )
    db.add(booking)
    db.commit()
    return booking


@pytest.fixture
def valet(db):
    return make_valet(db)
