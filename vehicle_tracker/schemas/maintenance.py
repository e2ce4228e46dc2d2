from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from vehicle_tracker.schemas.common import blank_to_none, normalize_datetime

# Column sizes on maintenance_records
TITLE_MAX = 255
COST_DIGITS = 12


class MaintenanceCreateRequest(BaseModel):
    """vehicleId is checked by the service before this schema runs."""
    vehicleId: str
    title:     Optional[str]      = Field(default=None, max_length=TITLE_MAX)
    dueDate:   Optional[datetime] = None
    cost:      Optional[Decimal]  = Field(default=None, max_digits=COST_DIGITS, decimal_places=2)
    completed: bool               = False

    @field_validator("dueDate", mode="before")
    @classmethod
    def blank_due_date(cls, v): return blank_to_none(v)

    @field_validator("dueDate")
    @classmethod
    def utc_due_date(cls, v): return normalize_datetime(v)

    @field_validator("cost")
    @classmethod
    def check_cost(cls, v):
        if v is not None and v < 0: raise ValueError("Cost cannot be negative")
        return v


class MaintenanceUpdateRequest(BaseModel):
    """
    Partial update. Only fields present in the payload are applied
    (see model_fields_set); dueDate or cost sent as null clears them.
    """
    title:     Optional[str]      = Field(default=None, max_length=TITLE_MAX)
    dueDate:   Optional[datetime] = None
    cost:      Optional[Decimal]  = Field(default=None, max_digits=COST_DIGITS, decimal_places=2)
    completed: Optional[bool]     = None

    @field_validator("dueDate", mode="before")
    @classmethod
    def blank_due_date(cls, v): return blank_to_none(v)

    @field_validator("dueDate")
    @classmethod
    def utc_due_date(cls, v): return normalize_datetime(v)

    @field_validator("cost")
    @classmethod
    def check_cost(cls, v):
        if v is not None and v < 0: raise ValueError("Cost cannot be negative")
        return v

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        # null title is stored as empty text
        return v if v is not None else ""
