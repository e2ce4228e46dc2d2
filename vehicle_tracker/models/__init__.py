"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Parent tables are imported before child tables.
"""

from vehicle_tracker.models.user import User
from vehicle_tracker.models.vehicle import Vehicle
from vehicle_tracker.models.maintenance_record import MaintenanceRecord
from vehicle_tracker.models.fuel_log import FuelLog

__all__ = [
    "User",
    "Vehicle",
    "MaintenanceRecord",
    "FuelLog",
]
