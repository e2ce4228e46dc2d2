from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from vehicle_tracker.schemas.common import blank_to_none, normalize_datetime


class FuelLogCreateRequest(BaseModel):
    """vehicleId is checked by the service before this schema runs."""
    vehicleId: str
    litres:    Decimal            = Field(max_digits=10, decimal_places=2)
    cost:      Decimal            = Field(max_digits=12, decimal_places=2)
    odometer:  Optional[int]      = Field(default=None, le=2_147_483_647)
    date:      Optional[datetime] = None

    @field_validator("litres")
    @classmethod
    def check_litres(cls, v):
        if v <= 0: raise ValueError("Litres must be greater than 0")
        return v

    @field_validator("cost")
    @classmethod
    def check_cost(cls, v):
        if v < 0: raise ValueError("Cost cannot be negative")
        return v

    @field_validator("odometer")
    @classmethod
    def check_odometer(cls, v):
        if v is not None and v < 0: raise ValueError("Odometer cannot be negative")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def blank_date(cls, v): return blank_to_none(v)

    @field_validator("date")
    @classmethod
    def utc_date(cls, v): return normalize_datetime(v)
