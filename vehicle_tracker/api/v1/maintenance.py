from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from vehicle_tracker.database import get_db
from vehicle_tracker.dependencies import get_current_user
from vehicle_tracker.models.user import User
from vehicle_tracker.schemas.common import success_response
from vehicle_tracker.services.maintenance_service import maintenance_service

router = APIRouter(prefix="/maintenance")

# Bodies arrive as raw dicts: the service validates them only after the
# id and ownership checks have passed.


@router.post("", status_code=status.HTTP_201_CREATED, summary="Add a maintenance record (vehicle owner)")
def create_record(
    body: Optional[dict[str, Any]] = Body(None),
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = maintenance_service.create_record(db, body, current_user.id)
    return success_response("Maintenance record created", data)


@router.get("/vehicle/{vehicle_id}", summary="List maintenance for a vehicle (vehicle owner)")
def list_for_vehicle(vehicle_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    data = maintenance_service.list_for_vehicle(db, vehicle_id, current_user.id)
    return success_response("Maintenance records retrieved", data)


# ─── Due window (declared before /{record_id}) ────────────────────────────────
@router.get("/due", summary="Upcoming incomplete maintenance across my vehicles (30 days)")
def list_due_default(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return success_response("Due maintenance retrieved", maintenance_service.list_due(db, current_user.id))


@router.get("/due/{days}", summary="Upcoming incomplete maintenance across my vehicles")
def list_due(days: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return success_response("Due maintenance retrieved", maintenance_service.list_due(db, current_user.id, days))


@router.get("/{record_id}", summary="Get a maintenance record (vehicle owner)")
def get_record(record_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return success_response("Record retrieved", maintenance_service.get_record(db, record_id, current_user.id))


@router.patch("/{record_id}", summary="Partially update a maintenance record (vehicle owner)")
def update_record(
    record_id: str,
    body:      Optional[dict[str, Any]] = Body(None),
    db:        Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = maintenance_service.update_record(db, record_id, body, current_user.id)
    return success_response("Maintenance record updated", data)


@router.patch("/{record_id}/toggle", summary="Flip the completed flag (vehicle owner)")
def toggle_record(record_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return success_response("Toggled", maintenance_service.toggle_record(db, record_id, current_user.id))


@router.delete("/{record_id}", summary="Delete a maintenance record (vehicle owner)")
def delete_record(
    record_id: str,
    db:        Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    maintenance_service.delete_record(db, record_id, current_user.id)
    return success_response("Maintenance record deleted", None)
