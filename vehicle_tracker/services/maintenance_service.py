import logging
import re
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import not_
from sqlalchemy.orm import Session, joinedload, load_only

from vehicle_tracker.config import settings
from vehicle_tracker.models.maintenance_record import MaintenanceRecord
from vehicle_tracker.models.vehicle import Vehicle
from vehicle_tracker.schemas.common import validate_payload
from vehicle_tracker.schemas.maintenance import MaintenanceCreateRequest, MaintenanceUpdateRequest
from vehicle_tracker.services.ownership_service import ownership_service
from vehicle_tracker.utils.exceptions import (
    ForbiddenException,
    InvalidIdentifierException,
    ValidationException,
)
from vehicle_tracker.utils.identifiers import as_utc, isoformat, parse_id

logger = logging.getLogger(__name__)

# timedelta/datetime overflow well before this matters to anyone
MAX_WINDOW_DAYS = 36500

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_days(raw, default: int | None = None) -> int:
    """
    Turn the optional `days` path segment into a window length.

    Missing or non-numeric input falls back to the default, a leading integer
    is honoured ("12abc" -> 12), and the result is clamped to [1, MAX_WINDOW_DAYS].
    """
    if default is None:
        default = settings.DUE_WINDOW_DEFAULT_DAYS

    if raw is None:
        days = default
    elif isinstance(raw, int) and not isinstance(raw, bool):
        days = raw
    else:
        match = _LEADING_INT.match(str(raw))
        days = int(match.group(1)) if match else default

    return min(max(1, days), MAX_WINDOW_DAYS)


def vehicle_projection(v: Vehicle | None) -> dict | None:
    """Short vehicle view for list screens."""
    if v is None:
        return None
    return {
        "id":                 str(v.id),
        "make":               v.make,
        "model":              v.model,
        "registrationNumber": v.registrationNumber,
    }


def _serialize(m: MaintenanceRecord) -> dict:
    return {
        "id":        str(m.id),
        "vehicleId": str(m.vehicleId) if m.vehicleId else None,
        "title":     m.title,
        "dueDate":   isoformat(m.dueDate),
        "completed": bool(m.completed),
        "cost":      float(m.cost) if m.cost is not None else None,
        "createdAt": isoformat(m.createdAt),
        "updatedAt": isoformat(m.updatedAt),
    }


class MaintenanceService:

    # ─── Create ───────────────────────────────────────────────────────────────
    def create_record(self, db: Session, payload: dict | None, user_id: uuid.UUID) -> dict:
        payload = payload or {}
        vehicle_id = payload.get("vehicleId")

        if vehicle_id is None or vehicle_id == "":
            raise ValidationException("vehicleId is required", field="vehicleId")
        if parse_id(vehicle_id) is None:
            raise InvalidIdentifierException("vehicle", field="vehicleId")

        vehicle = ownership_service.owned_vehicle(db, vehicle_id, user_id)
        if vehicle is None:
            raise ForbiddenException("Not allowed for this vehicle")

        data = validate_payload(MaintenanceCreateRequest, payload)

        record = MaintenanceRecord(
            vehicleId=vehicle.id,
            title=data.title or "",
            dueDate=data.dueDate,
            cost=data.cost,
            completed=data.completed,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        logger.info(f"Maintenance record {record.id} created for vehicle {vehicle.registrationNumber}")
        return _serialize(record)

    # ─── Read ─────────────────────────────────────────────────────────────────
    def list_for_vehicle(self, db: Session, vehicle_id: str, user_id: uuid.UUID) -> list[dict]:
        vid = parse_id(vehicle_id)
        if vid is None:
            raise InvalidIdentifierException("vehicle")
        if not ownership_service.verify_vehicle_ownership(db, vid, user_id):
            raise ForbiddenException("Not allowed for this vehicle")

        records = (
            db.query(MaintenanceRecord)
            .filter(MaintenanceRecord.vehicleId == vid)
            .order_by(MaintenanceRecord.dueDate.asc().nulls_last(), MaintenanceRecord.createdAt.desc())
            .all()
        )
        return [_serialize(m) for m in records]

    def get_record(self, db: Session, record_id: str, user_id: uuid.UUID) -> dict:
        record = ownership_service.verify_record_ownership(db, record_id, user_id).raise_for_status()
        return _serialize(record)

    # ─── Update ───────────────────────────────────────────────────────────────
    def update_record(self, db: Session, record_id: str, payload: dict | None, user_id: uuid.UUID) -> dict:
        record = ownership_service.verify_record_ownership(db, record_id, user_id).raise_for_status()
        data = validate_payload(MaintenanceUpdateRequest, payload)

        # Only keys present in the request are touched
        provided = data.model_fields_set
        if "title" in provided:     record.title     = data.title
        if "dueDate" in provided:   record.dueDate   = data.dueDate
        if "cost" in provided:      record.cost      = data.cost
        if "completed" in provided: record.completed = bool(data.completed)

        db.commit()
        db.refresh(record)
        return _serialize(record)

    def toggle_record(self, db: Session, record_id: str, user_id: uuid.UUID) -> dict:
        record = ownership_service.verify_record_ownership(db, record_id, user_id).raise_for_status()

        # Flipped by a single UPDATE, never read-modify-write
        db.query(MaintenanceRecord).filter(MaintenanceRecord.id == record.id).update(
            {MaintenanceRecord.completed: not_(MaintenanceRecord.completed)},
            synchronize_session=False,
        )
        db.commit()
        db.refresh(record)
        return {"completed": bool(record.completed), "record": _serialize(record)}

    # ─── Delete ───────────────────────────────────────────────────────────────
    def delete_record(self, db: Session, record_id: str, user_id: uuid.UUID) -> None:
        record = ownership_service.verify_record_ownership(db, record_id, user_id).raise_for_status()
        db.delete(record)
        db.commit()
        logger.info(f"Maintenance record {record.id} deleted by user {user_id}")

    # ─── Due window ───────────────────────────────────────────────────────────
    def list_due(
        self, db: Session, user_id: uuid.UUID, days=None, now: datetime | None = None,
    ) -> list[dict]:
        """
        Incomplete maintenance due within [now, now + days] across every
        vehicle the user owns, soonest first. Both bounds are inclusive.
        """
        window_days = coerce_days(days)
        start = as_utc(now) or datetime.now(timezone.utc)
        end = start + timedelta(days=window_days)

        vehicle_ids = ownership_service.owned_vehicle_ids(db, user_id)
        if not vehicle_ids:
            return []

        records = (
            db.query(MaintenanceRecord)
            .options(
                joinedload(MaintenanceRecord.vehicle).load_only(
                    Vehicle.id, Vehicle.make, Vehicle.model, Vehicle.registrationNumber,
                )
            )
            .filter(
                MaintenanceRecord.vehicleId.in_(vehicle_ids),
                MaintenanceRecord.dueDate >= start,
                MaintenanceRecord.dueDate <= end,
                MaintenanceRecord.completed.is_not(True),
            )
            .order_by(
                MaintenanceRecord.dueDate.asc(),
                MaintenanceRecord.createdAt.asc(),
                MaintenanceRecord.id.asc(),
            )
            .all()
        )

        return [
            {**_serialize(m), "vehicle": vehicle_projection(m.vehicle)}
            for m in records
        ]


maintenance_service = MaintenanceService()
