# Set test environment before any application or db imports.
import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_ENV"] = "test"
os.environ["APP_DEBUG"] = "false"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from vehicle_tracker.database import Base, SessionLocal, engine, get_db
from vehicle_tracker.main import app
from vehicle_tracker.models import FuelLog, MaintenanceRecord, User, Vehicle
from vehicle_tracker.utils.security import create_access_token


@pytest.fixture
def db_session():
    """Fresh schema per test on the shared in-memory engine."""
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def client(db_session):
    """API test client; overrides get_db to use the test db_session, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def now():
    return datetime.now(timezone.utc).replace(microsecond=0)


@pytest.fixture
def make_user(db_session):
    """Create users directly; password hashing is exercised by the auth tests."""
    counter = {"n": 0}

    def _make(email: str | None = None, name: str = "Driver") -> User:
        counter["n"] += 1
        user = User(
            name=name,
            email=email or f"user{counter['n']}@example.com",
            passwordHash="not-a-real-hash",
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make


@pytest.fixture
def make_vehicle(db_session):
    counter = {"n": 0}

    def _make(owner: User, registration: str | None = None, make: str = "Toyota",
              model: str = "Corolla", year: int | None = None) -> Vehicle:
        counter["n"] += 1
        vehicle = Vehicle(
            ownerId=owner.id,
            registrationNumber=registration or f"KA01AB{1000 + counter['n']}",
            make=make,
            model=model,
            year=year,
        )
        db_session.add(vehicle)
        db_session.commit()
        return vehicle
    return _make


@pytest.fixture
def make_record(db_session):
    def _make(vehicle: Vehicle, title: str = "Oil change", due: datetime | None = None,
              completed: bool = False, cost=None) -> MaintenanceRecord:
        record = MaintenanceRecord(
            vehicleId=vehicle.id,
            title=title,
            dueDate=due,
            completed=completed,
            cost=cost,
        )
        db_session.add(record)
        db_session.commit()
        return record
    return _make


@pytest.fixture
def make_fuel_log(db_session):
    def _make(vehicle: Vehicle, litres=30, cost=3000, odometer=None, date: datetime | None = None) -> FuelLog:
        log = FuelLog(vehicleId=vehicle.id, litres=litres, cost=cost, odometer=odometer)
        if date is not None:
            log.date = date
        db_session.add(log)
        db_session.commit()
        return log
    return _make


def _auth_header(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def headers_for():
    """Bearer headers for any user."""
    return _auth_header


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com", "Owner")


@pytest.fixture
def stranger(make_user):
    return make_user("stranger@example.com", "Stranger")


@pytest.fixture
def owner_headers(owner):
    return _auth_header(owner)


@pytest.fixture
def stranger_headers(stranger):
    return _auth_header(stranger)