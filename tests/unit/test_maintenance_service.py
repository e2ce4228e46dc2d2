"""Unit tests: maintenance lifecycle and the due-window query."""
import uuid
from datetime import timedelta

import pytest

from vehicle_tracker.database import SessionLocal
from vehicle_tracker.services.maintenance_service import (
    MAX_WINDOW_DAYS,
    coerce_days,
    maintenance_service,
)
from vehicle_tracker.utils.exceptions import (
    ForbiddenException,
    InvalidIdentifierException,
    NotFoundException,
    ValidationException,
)

pytestmark = pytest.mark.unit


# ─── coerce_days ──────────────────────────────────────────────────────────────
@pytest.mark.parametrize("raw, expected", [
    (None, 30),
    ("30", 30),
    ("45", 45),
    ("12abc", 12),
    ("abc", 30),
    ("", 30),
    ("0", 1),
    ("-5", 1),
    (7, 7),
    ("99999999999", MAX_WINDOW_DAYS),
])
def test_coerce_days(raw, expected):
    assert coerce_days(raw) == expected


def test_coerce_days_custom_default():
    assert coerce_days(None, default=14) == 14
    assert coerce_days("soon", default=14) == 14


# ─── create ───────────────────────────────────────────────────────────────────
def test_create_defaults_to_pending(db_session, owner, make_vehicle):
    vehicle = make_vehicle(owner)
    data = maintenance_service.create_record(db_session, {"vehicleId": str(vehicle.id)}, owner.id)
    assert data["completed"] is False
    assert data["title"] == ""
    assert data["dueDate"] is None
    assert data["cost"] is None
    assert data["vehicleId"] == str(vehicle.id)


def test_create_with_fields(db_session, owner, make_vehicle, now):
    vehicle = make_vehicle(owner)
    due = now + timedelta(days=10)
    data = maintenance_service.create_record(db_session, {
        "vehicleId": str(vehicle.id),
        "title": "Brake pads",
        "dueDate": due.isoformat(),
        "cost": 120.5,
    }, owner.id)
    assert data["title"] == "Brake pads"
    assert data["dueDate"] == due.isoformat()
    assert data["cost"] == 120.5


def test_create_empty_due_date_is_absent(db_session, owner, make_vehicle):
    vehicle = make_vehicle(owner)
    data = maintenance_service.create_record(
        db_session, {"vehicleId": str(vehicle.id), "dueDate": ""}, owner.id,
    )
    assert data["dueDate"] is None


@pytest.mark.parametrize("payload", [None, {}, {"vehicleId": ""}, {"title": "x"}])
def test_create_requires_vehicle_id(db_session, owner, payload):
    with pytest.raises(ValidationException):
        maintenance_service.create_record(db_session, payload, owner.id)


def test_create_rejects_malformed_vehicle_id(db_session, owner):
    with pytest.raises(InvalidIdentifierException):
        maintenance_service.create_record(db_session, {"vehicleId": "abc"}, owner.id)


def test_create_forbidden_for_other_users_vehicle(db_session, owner, stranger, make_vehicle):
    vehicle = make_vehicle(owner)
    with pytest.raises(ForbiddenException):
        maintenance_service.create_record(db_session, {"vehicleId": str(vehicle.id)}, stranger.id)


def test_create_forbidden_for_unknown_vehicle(db_session, owner):
    with pytest.raises(ForbiddenException):
        maintenance_service.create_record(db_session, {"vehicleId": str(uuid.uuid4())}, owner.id)


def test_create_ownership_checked_before_body(db_session, owner, stranger, make_vehicle):
    vehicle = make_vehicle(owner)
    payload = {"vehicleId": str(vehicle.id), "cost": "not-a-number"}
    with pytest.raises(ForbiddenException):
        maintenance_service.create_record(db_session, payload, stranger.id)
    with pytest.raises(ValidationException):
        maintenance_service.create_record(db_session, payload, owner.id)


@pytest.mark.parametrize("extra", [
    {"title": "x" * 256},
    {"cost": "1e20"},
    {"cost": "12.345"},
])
def test_create_rejects_values_too_big_for_columns(db_session, owner, make_vehicle, extra):
    vehicle = make_vehicle(owner)
    with pytest.raises(ValidationException):
        maintenance_service.create_record(db_session, {"vehicleId": str(vehicle.id), **extra}, owner.id)


def test_create_accepts_title_at_column_limit(db_session, owner, make_vehicle):
    vehicle = make_vehicle(owner)
    data = maintenance_service.create_record(
        db_session, {"vehicleId": str(vehicle.id), "title": "x" * 255, "cost": "9999999999.99"}, owner.id,
    )
    assert len(data["title"]) == 255
    assert data["cost"] == 9999999999.99


# ─── list for vehicle ─────────────────────────────────────────────────────────
def test_list_for_vehicle_sorted_by_due_date(db_session, owner, make_vehicle, make_record, now):
    vehicle = make_vehicle(owner)
    make_record(vehicle, "Later", due=now + timedelta(days=20))
    make_record(vehicle, "Undated")
    make_record(vehicle, "Sooner", due=now + timedelta(days=5))

    titles = [r["title"] for r in maintenance_service.list_for_vehicle(db_session, str(vehicle.id), owner.id)]
    assert titles == ["Sooner", "Later", "Undated"]


def test_list_for_vehicle_forbidden(db_session, owner, stranger, make_vehicle):
    vehicle = make_vehicle(owner)
    with pytest.raises(ForbiddenException):
        maintenance_service.list_for_vehicle(db_session, str(vehicle.id), stranger.id)


def test_list_for_vehicle_malformed_id(db_session, owner):
    with pytest.raises(InvalidIdentifierException):
        maintenance_service.list_for_vehicle(db_session, "nope", owner.id)


# ─── update ───────────────────────────────────────────────────────────────────
def test_partial_update_keeps_unsent_fields(db_session, owner, make_vehicle, make_record, now):
    record = make_record(make_vehicle(owner), "Oil change", due=now + timedelta(days=3), cost=40)
    data = maintenance_service.update_record(db_session, str(record.id), {"completed": True}, owner.id)
    assert data["completed"] is True
    assert data["title"] == "Oil change"
    assert data["cost"] == 40.0
    assert data["dueDate"] == (now + timedelta(days=3)).isoformat()


@pytest.mark.parametrize("cleared", [None, ""])
def test_update_clears_due_date(db_session, owner, make_vehicle, make_record, now, cleared):
    record = make_record(make_vehicle(owner), due=now + timedelta(days=3))
    data = maintenance_service.update_record(db_session, str(record.id), {"dueDate": cleared}, owner.id)
    assert data["dueDate"] is None
    assert data["title"] == "Oil change"


def test_update_clears_cost_and_sets_title(db_session, owner, make_vehicle, make_record):
    record = make_record(make_vehicle(owner), cost=99)
    data = maintenance_service.update_record(
        db_session, str(record.id), {"cost": None, "title": "Tyres"}, owner.id,
    )
    assert data["cost"] is None
    assert data["title"] == "Tyres"


def test_update_ignores_unknown_keys(db_session, owner, make_vehicle, make_record):
    vehicle = make_vehicle(owner)
    record = make_record(vehicle)
    data = maintenance_service.update_record(
        db_session, str(record.id), {"vehicleId": str(uuid.uuid4())}, owner.id,
    )
    assert data["vehicleId"] == str(vehicle.id)


def test_update_error_precedence(db_session, owner, stranger, make_vehicle, make_record):
    record = make_record(make_vehicle(owner))
    bad_body = {"cost": "lots"}

    with pytest.raises(InvalidIdentifierException):
        maintenance_service.update_record(db_session, "bad-id", bad_body, stranger.id)
    with pytest.raises(NotFoundException):
        maintenance_service.update_record(db_session, str(uuid.uuid4()), bad_body, stranger.id)
    with pytest.raises(ForbiddenException):
        maintenance_service.update_record(db_session, str(record.id), bad_body, stranger.id)
    with pytest.raises(ValidationException):
        maintenance_service.update_record(db_session, str(record.id), bad_body, owner.id)


def test_update_rejects_title_too_long(db_session, owner, make_vehicle, make_record):
    record = make_record(make_vehicle(owner))
    with pytest.raises(ValidationException):
        maintenance_service.update_record(db_session, str(record.id), {"title": "x" * 300}, owner.id)
    assert maintenance_service.get_record(db_session, str(record.id), owner.id)["title"] == "Oil change"


# ─── toggle ───────────────────────────────────────────────────────────────────
def test_toggle_is_its_own_inverse(db_session, owner, make_vehicle, make_record):
    record = make_record(make_vehicle(owner))

    first = maintenance_service.toggle_record(db_session, str(record.id), owner.id)
    assert first["completed"] is True
    assert first["record"]["completed"] is True

    second = maintenance_service.toggle_record(db_session, str(record.id), owner.id)
    assert second["completed"] is False
    assert second["record"]["title"] == "Oil change"


def test_toggle_forbidden_for_other_user(db_session, owner, stranger, make_vehicle, make_record):
    record = make_record(make_vehicle(owner))
    with pytest.raises(ForbiddenException):
        maintenance_service.toggle_record(db_session, str(record.id), stranger.id)
    assert maintenance_service.get_record(db_session, str(record.id), owner.id)["completed"] is False


def test_toggle_flips_database_value_not_stale_copy(db_session, owner, make_vehicle, make_record):
    record = make_record(make_vehicle(owner))
    assert record.completed is False

    # Another request toggles the record while this session still holds it as pending
    other = SessionLocal()
    try:
        first = maintenance_service.toggle_record(other, str(record.id), owner.id)
    finally:
        other.close()
    assert first["completed"] is True
    assert record.completed is False

    second = maintenance_service.toggle_record(db_session, str(record.id), owner.id)
    assert second["completed"] is False

    fresh = SessionLocal()
    try:
        assert maintenance_service.get_record(fresh, str(record.id), owner.id)["completed"] is False
    finally:
        fresh.close()


# ─── delete ───────────────────────────────────────────────────────────────────
def test_delete_twice_is_not_found(db_session, owner, make_vehicle, make_record):
    record = make_record(make_vehicle(owner))
    maintenance_service.delete_record(db_session, str(record.id), owner.id)
    with pytest.raises(NotFoundException):
        maintenance_service.delete_record(db_session, str(record.id), owner.id)


def test_delete_forbidden_for_other_user(db_session, owner, stranger, make_vehicle, make_record):
    record = make_record(make_vehicle(owner))
    with pytest.raises(ForbiddenException):
        maintenance_service.delete_record(db_session, str(record.id), stranger.id)


# ─── due window ───────────────────────────────────────────────────────────────
def test_due_excludes_completed_and_projects_vehicle(db_session, owner, make_vehicle, make_record, now):
    v1 = make_vehicle(owner, "KA01AB0001", make="Honda", model="City")
    v2 = make_vehicle(owner, "KA01AB0002")
    m1 = make_record(v1, "Service", due=now + timedelta(days=10))
    make_record(v2, "Wash", due=now + timedelta(days=10), completed=True)

    due = maintenance_service.list_due(db_session, owner.id, "30", now=now)
    assert [r["id"] for r in due] == [str(m1.id)]
    assert due[0]["vehicle"] == {
        "id": str(v1.id),
        "make": "Honda",
        "model": "City",
        "registrationNumber": "KA01AB0001",
    }


def test_due_window_length(db_session, owner, make_vehicle, make_record, now):
    record = make_record(make_vehicle(owner), due=now + timedelta(days=45))
    assert maintenance_service.list_due(db_session, owner.id, 30, now=now) == []
    assert [r["id"] for r in maintenance_service.list_due(db_session, owner.id, 50, now=now)] == [str(record.id)]


def test_due_window_bounds_inclusive(db_session, owner, make_vehicle, make_record, now):
    vehicle = make_vehicle(owner)
    at_start = make_record(vehicle, "Start", due=now)
    at_end = make_record(vehicle, "End", due=now + timedelta(days=7))
    make_record(vehicle, "Past", due=now - timedelta(seconds=1))
    make_record(vehicle, "Beyond", due=now + timedelta(days=7, seconds=1))

    due = maintenance_service.list_due(db_session, owner.id, 7, now=now)
    assert [r["id"] for r in due] == [str(at_start.id), str(at_end.id)]


def test_due_sorted_ascending(db_session, owner, make_vehicle, make_record, now):
    v1 = make_vehicle(owner)
    v2 = make_vehicle(owner)
    make_record(v1, "Third", due=now + timedelta(days=9))
    make_record(v2, "First", due=now + timedelta(days=1))
    make_record(v1, "Second", due=now + timedelta(days=4))

    titles = [r["title"] for r in maintenance_service.list_due(db_session, owner.id, now=now)]
    assert titles == ["First", "Second", "Third"]


def test_due_is_stable_across_calls(db_session, owner, make_vehicle, make_record, now):
    vehicle = make_vehicle(owner)
    for title in ("A", "B", "C"):
        make_record(vehicle, title, due=now + timedelta(days=2))

    first = maintenance_service.list_due(db_session, owner.id, now=now)
    second = maintenance_service.list_due(db_session, owner.id, now=now)
    assert [r["id"] for r in first] == [r["id"] for r in second]


def test_due_only_covers_own_vehicles(db_session, owner, stranger, make_vehicle, make_record, now):
    make_record(make_vehicle(stranger), due=now + timedelta(days=1))
    assert maintenance_service.list_due(db_session, owner.id, now=now) == []


def test_due_with_no_vehicles_is_empty(db_session, owner, now):
    assert maintenance_service.list_due(db_session, owner.id, now=now) == []


def test_due_ignores_undated_records(db_session, owner, make_vehicle, make_record, now):
    make_record(make_vehicle(owner))
    assert maintenance_service.list_due(db_session, owner.id, now=now) == []
