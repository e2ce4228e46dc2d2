from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vehicle_tracker.database import get_db
from vehicle_tracker.dependencies import get_current_user
from vehicle_tracker.models.user import User
from vehicle_tracker.schemas.vehicle import VehicleCreateRequest, VehicleUpdateRequest
from vehicle_tracker.schemas.common import success_response
from vehicle_tracker.services.vehicle_service import vehicle_service

router = APIRouter(prefix="/vehicles")


@router.get("", summary="List my vehicles")
def list_vehicles(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return success_response("Vehicles retrieved successfully", vehicle_service.list_vehicles(db, current_user.id))


@router.get("/{vehicle_id}", summary="Get one of my vehicles")
def get_vehicle(vehicle_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return success_response("Vehicle retrieved", vehicle_service.get_vehicle(db, vehicle_id, current_user.id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Register a vehicle")
def create_vehicle(
    body: VehicleCreateRequest,
    db:   Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = vehicle_service.create_vehicle(db, body, current_user.id)
    return success_response("Vehicle created successfully", data)


@router.patch("/{vehicle_id}", summary="Update one of my vehicles")
def update_vehicle(
    vehicle_id: str,
    body:       VehicleUpdateRequest,
    db:         Session = Depends(get_db),
    current_user: User  = Depends(get_current_user),
):
    data = vehicle_service.update_vehicle(db, vehicle_id, body, current_user.id)
    return success_response("Vehicle updated successfully", data)


@router.delete("/{vehicle_id}", summary="Delete one of my vehicles")
def delete_vehicle(
    vehicle_id: str,
    db:         Session = Depends(get_db),
    current_user: User  = Depends(get_current_user),
):
    vehicle_service.delete_vehicle(db, vehicle_id, current_user.id)
    return success_response("Vehicle deleted successfully", None)
