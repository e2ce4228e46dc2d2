import logging
import uuid

from sqlalchemy.orm import Session

from vehicle_tracker.models.vehicle import Vehicle
from vehicle_tracker.schemas.vehicle import VehicleCreateRequest, VehicleUpdateRequest
from vehicle_tracker.services.ownership_service import ownership_service
from vehicle_tracker.utils.exceptions import (
    DuplicateEntryException,
    InvalidIdentifierException,
    NotFoundException,
)
from vehicle_tracker.utils.identifiers import isoformat, parse_id

logger = logging.getLogger(__name__)

DUPLICATE_REGISTRATION = "A vehicle with this registration number already exists."


def _serialize(v: Vehicle) -> dict:
    return {
        "id":                 str(v.id),
        "ownerId":            str(v.ownerId),
        "registrationNumber": v.registrationNumber,
        "make":               v.make,
        "model":              v.model,
        "year":               v.year,
        "color":              v.color,
        "fuelType":           v.fuelType,
        "mileage":            v.mileage,
        "notes":              v.notes,
        "image":              v.image,
        "createdAt":          isoformat(v.createdAt),
        "updatedAt":          isoformat(v.updatedAt),
    }


class VehicleService:

    def _registration_taken(self, db: Session, registration: str, exclude_id: uuid.UUID | None = None) -> bool:
        # Checked against every owner's vehicles
        q = db.query(Vehicle.id).filter(Vehicle.registrationNumber == registration)
        if exclude_id is not None:
            q = q.filter(Vehicle.id != exclude_id)
        return q.first() is not None

    def _get_owned(self, db: Session, vehicle_id: str, user_id: uuid.UUID) -> Vehicle:
        if parse_id(vehicle_id) is None:
            raise InvalidIdentifierException("vehicle")
        v = ownership_service.owned_vehicle(db, vehicle_id, user_id)
        if not v:
            raise NotFoundException("Vehicle")
        return v

    def list_vehicles(self, db: Session, user_id: uuid.UUID) -> list[dict]:
        items = (
            db.query(Vehicle)
            .filter(Vehicle.ownerId == user_id)
            .order_by(Vehicle.createdAt.desc())
            .all()
        )
        return [_serialize(v) for v in items]

    def get_vehicle(self, db: Session, vehicle_id: str, user_id: uuid.UUID) -> dict:
        return _serialize(self._get_owned(db, vehicle_id, user_id))

    def create_vehicle(self, db: Session, data: VehicleCreateRequest, user_id: uuid.UUID) -> dict:
        if self._registration_taken(db, data.registrationNumber):
            raise DuplicateEntryException(DUPLICATE_REGISTRATION, field="registrationNumber")

        vehicle = Vehicle(ownerId=user_id, **data.model_dump())
        db.add(vehicle)
        db.commit()
        db.refresh(vehicle)
        logger.info(f"Vehicle {vehicle.registrationNumber} created by user {user_id}")
        return _serialize(vehicle)

    def update_vehicle(self, db: Session, vehicle_id: str, data: VehicleUpdateRequest, user_id: uuid.UUID) -> dict:
        v = self._get_owned(db, vehicle_id, user_id)

        if data.registrationNumber and data.registrationNumber != v.registrationNumber:
            if self._registration_taken(db, data.registrationNumber, exclude_id=v.id):
                raise DuplicateEntryException(DUPLICATE_REGISTRATION, field="registrationNumber")

        # Only keys present in the request are touched; year is the one nullable column
        for field in data.model_fields_set:
            val = getattr(data, field)
            if val is None and field != "year":
                continue
            setattr(v, field, val)

        db.commit()
        db.refresh(v)
        return _serialize(v)

    def delete_vehicle(self, db: Session, vehicle_id: str, user_id: uuid.UUID) -> None:
        """Maintenance and fuel records are left in place with no vehicle."""
        v = self._get_owned(db, vehicle_id, user_id)
        registration = v.registrationNumber
        db.delete(v)
        db.commit()
        logger.info(f"Vehicle {registration} deleted by user {user_id}")


vehicle_service = VehicleService()
