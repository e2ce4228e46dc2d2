from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from vehicle_tracker.database import get_db
from vehicle_tracker.dependencies import get_current_user
from vehicle_tracker.models.user import User
from vehicle_tracker.schemas.common import success_response
from vehicle_tracker.services.fuel_service import fuel_service

router = APIRouter(prefix="/fuel")


@router.get("", summary="List fuel logs across my vehicles")
def list_logs(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return success_response("Fuel logs retrieved", fuel_service.list_logs(db, current_user.id))


@router.get("/vehicle/{vehicle_id}", summary="List fuel logs for a vehicle (vehicle owner)")
def list_for_vehicle(vehicle_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return success_response("Fuel logs retrieved", fuel_service.list_for_vehicle(db, vehicle_id, current_user.id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Add a fuel log (vehicle owner)")
def create_log(
    body: Optional[dict[str, Any]] = Body(None),
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = fuel_service.create_log(db, body, current_user.id)
    return success_response("Fuel log added", data)
