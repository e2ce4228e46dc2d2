from pydantic import BaseModel, Field, field_validator
from typing import Optional

# Column sizes on vehicles
REGISTRATION_MAX = 32
INT_MAX = 2_147_483_647


def normalize_registration(v) -> str:
    """Registration numbers are stored trimmed and upper-cased."""
    reg = str(v).strip().upper()
    if len(reg) > REGISTRATION_MAX:
        raise ValueError(f"Registration number must be at most {REGISTRATION_MAX} characters")
    return reg


def validate_year(v):
    if v is not None and not (1900 <= v <= 2100): raise ValueError("Year must be between 1900 and 2100")
    return v


def validate_mileage(v):
    if v is not None and v < 0: raise ValueError("Mileage cannot be negative")
    return v


# ─── Requests ─────────────────────────────────────────────────────────────────
class VehicleCreateRequest(BaseModel):
    registrationNumber: Optional[str] = Field(default=None, validate_default=True)
    make:               str = Field(default="", max_length=100)
    model:              str = Field(default="", max_length=100)
    year:               Optional[int] = None
    color:              str = Field(default="", max_length=50)
    fuelType:           str = Field(default="", max_length=50)
    mileage:            int = Field(default=0, le=INT_MAX)
    notes:              str = ""
    image:              str = Field(default="", max_length=500)

    @field_validator("registrationNumber")
    @classmethod
    def check_registration(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Registration number is required.")
        return normalize_registration(v)

    @field_validator("year")
    @classmethod
    def check_year(cls, v): return validate_year(v)

    @field_validator("mileage")
    @classmethod
    def check_mileage(cls, v): return validate_mileage(v)


class VehicleUpdateRequest(BaseModel):
    """
    Partial update. Only fields present in the payload are applied;
    year sent as null clears it.
    """
    registrationNumber: Optional[str] = None
    make:               Optional[str] = Field(default=None, max_length=100)
    model:              Optional[str] = Field(default=None, max_length=100)
    year:               Optional[int] = None
    color:              Optional[str] = Field(default=None, max_length=50)
    fuelType:           Optional[str] = Field(default=None, max_length=50)
    mileage:            Optional[int] = Field(default=None, le=INT_MAX)
    notes:              Optional[str] = None
    image:              Optional[str] = Field(default=None, max_length=500)

    @field_validator("registrationNumber")
    @classmethod
    def check_registration(cls, v):
        if v is None: return v
        if not str(v).strip(): raise ValueError("Registration number cannot be empty")
        return normalize_registration(v)

    @field_validator("year")
    @classmethod
    def check_year(cls, v): return validate_year(v)

    @field_validator("mileage")
    @classmethod
    def check_mileage(cls, v): return validate_mileage(v)
