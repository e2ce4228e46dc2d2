"""
Ownership checks for vehicles and the records that hang off them.

Maintenance records never store their owner. Ownership is derived through
the referenced vehicle on every check, so a crafted record id that points at
somebody else's vehicle is always refused.
"""
import enum
import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.orm import Session, joinedload

from vehicle_tracker.models.maintenance_record import MaintenanceRecord
from vehicle_tracker.models.vehicle import Vehicle
from vehicle_tracker.utils.exceptions import (
    ForbiddenException,
    InvalidIdentifierException,
    NotFoundException,
)
from vehicle_tracker.utils.identifiers import parse_id

logger = logging.getLogger(__name__)


class OwnershipStatus(str, enum.Enum):
    AUTHORIZED         = "AUTHORIZED"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    NOT_FOUND          = "NOT_FOUND"
    FORBIDDEN          = "FORBIDDEN"


@dataclass(frozen=True)
class OwnershipCheck:
    """Outcome of a record ownership check. `record` is set only when authorized."""
    status: OwnershipStatus
    record: MaintenanceRecord | None = None

    @property
    def ok(self) -> bool:
        return self.status is OwnershipStatus.AUTHORIZED

    def raise_for_status(self) -> MaintenanceRecord:
        """Return the verified record or raise the matching AppException."""
        if self.status is OwnershipStatus.INVALID_IDENTIFIER:
            raise InvalidIdentifierException("maintenance")
        if self.status is OwnershipStatus.NOT_FOUND:
            raise NotFoundException("Maintenance record")
        if self.status is OwnershipStatus.FORBIDDEN:
            raise ForbiddenException("Not allowed")
        return self.record


class OwnershipService:

    def owned_vehicle(self, db: Session, vehicle_id, user_id: uuid.UUID) -> Vehicle | None:
        """Return the vehicle if it exists and belongs to user_id, else None."""
        vid = parse_id(vehicle_id)
        if vid is None:
            return None
        return db.query(Vehicle).filter(Vehicle.id == vid, Vehicle.ownerId == user_id).first()

    def verify_vehicle_ownership(self, db: Session, vehicle_id, user_id: uuid.UUID) -> bool:
        """
        True only when the vehicle exists and is owned by user_id.
        A malformed id is simply unauthorized; this never raises.
        """
        return self.owned_vehicle(db, vehicle_id, user_id) is not None

    def verify_record_ownership(self, db: Session, record_id, user_id: uuid.UUID) -> OwnershipCheck:
        """
        Resolve a maintenance record with its vehicle and check who owns it.

        Checks run in a fixed order: malformed id, then missing record (or a
        record whose vehicle no longer resolves), then owner mismatch.
        """
        rid = parse_id(record_id)
        if rid is None:
            return OwnershipCheck(OwnershipStatus.INVALID_IDENTIFIER)

        record = (
            db.query(MaintenanceRecord)
            .options(joinedload(MaintenanceRecord.vehicle))
            .filter(MaintenanceRecord.id == rid)
            .first()
        )

        if record is None or record.vehicleId is None or record.vehicle is None:
            return OwnershipCheck(OwnershipStatus.NOT_FOUND)

        if record.vehicle.ownerId != user_id:
            logger.warning(f"User {user_id} refused access to maintenance record {rid}")
            return OwnershipCheck(OwnershipStatus.FORBIDDEN)

        return OwnershipCheck(OwnershipStatus.AUTHORIZED, record)

    def owned_vehicle_ids(self, db: Session, user_id: uuid.UUID) -> list[uuid.UUID]:
        rows = db.query(Vehicle.id).filter(Vehicle.ownerId == user_id).all()
        return [r.id for r in rows]


ownership_service = OwnershipService()
