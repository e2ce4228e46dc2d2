import logging
import uuid

from sqlalchemy.orm import Session, contains_eager

from vehicle_tracker.models.fuel_log import FuelLog
from vehicle_tracker.models.vehicle import Vehicle
from vehicle_tracker.schemas.common import validate_payload
from vehicle_tracker.schemas.fuel_log import FuelLogCreateRequest
from vehicle_tracker.services.maintenance_service import vehicle_projection
from vehicle_tracker.services.ownership_service import ownership_service
from vehicle_tracker.utils.exceptions import ForbiddenException, InvalidIdentifierException
from vehicle_tracker.utils.identifiers import isoformat, parse_id

logger = logging.getLogger(__name__)


def _serialize(e: FuelLog) -> dict:
    return {
        "id":        str(e.id),
        "vehicleId": str(e.vehicleId) if e.vehicleId else None,
        "litres":    float(e.litres),
        "cost":      float(e.cost),
        "odometer":  e.odometer,
        "date":      isoformat(e.date),
    }


class FuelService:

    def _require_owned_vehicle(self, db: Session, vehicle_id, user_id: uuid.UUID) -> Vehicle:
        if parse_id(vehicle_id) is None:
            raise InvalidIdentifierException("vehicle", field="vehicleId")
        vehicle = ownership_service.owned_vehicle(db, vehicle_id, user_id)
        if vehicle is None:
            raise ForbiddenException("Not allowed for this vehicle")
        return vehicle

    def create_log(self, db: Session, payload: dict | None, user_id: uuid.UUID) -> dict:
        payload = payload or {}
        vehicle = self._require_owned_vehicle(db, payload.get("vehicleId"), user_id)
        data = validate_payload(FuelLogCreateRequest, payload)

        log = FuelLog(
            vehicleId=vehicle.id,
            litres=data.litres,
            cost=data.cost,
            odometer=data.odometer,
        )
        if data.date is not None:
            log.date = data.date

        db.add(log)
        db.commit()
        db.refresh(log)
        logger.info(f"Fuel log {log.id} added for vehicle {vehicle.registrationNumber}")
        return _serialize(log)

    def list_for_vehicle(self, db: Session, vehicle_id: str, user_id: uuid.UUID) -> list[dict]:
        vehicle = self._require_owned_vehicle(db, vehicle_id, user_id)
        logs = (
            db.query(FuelLog)
            .filter(FuelLog.vehicleId == vehicle.id)
            .order_by(FuelLog.date.desc())
            .all()
        )
        return [_serialize(e) for e in logs]

    def list_logs(self, db: Session, user_id: uuid.UUID) -> list[dict]:
        """Every fuel log on the user's vehicles, newest first."""
        logs = (
            db.query(FuelLog)
            .join(FuelLog.vehicle)
            .options(contains_eager(FuelLog.vehicle))
            .filter(Vehicle.ownerId == user_id)
            .order_by(FuelLog.date.desc())
            .all()
        )
        return [{**_serialize(e), "vehicle": vehicle_projection(e.vehicle)} for e in logs]


fuel_service = FuelService()
