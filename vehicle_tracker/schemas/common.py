from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from vehicle_tracker.utils.exceptions import ValidationException
from vehicle_tracker.utils.identifiers import as_utc

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


# ─── Error Detail (per field) ──────────────────────────────────────────────────
class ErrorDetail(BaseModel):
    field: str
    message: str


# ─── Error Body ───────────────────────────────────────────────────────────────
class ErrorBody(BaseModel):
    code: str
    details: list[ErrorDetail] | None = None
    field: str | None = None


# ─── Standard Success Response ────────────────────────────────────────────────
class SuccessResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T | None = None


# ─── Error Response ───────────────────────────────────────────────────────────
class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: ErrorBody


# ─── Helper Functions ─────────────────────────────────────────────────────────
def success_response(message: str, data: Any = None) -> dict:
    """Return a standardized success dict (used in route handlers)."""
    return {"success": True, "message": message, "data": data}


def validate_payload(schema: type[M], payload: dict | None) -> M:
    """
    Validate a raw request body against a schema inside a service.

    Used where input validation must run after identifier and ownership
    checks, so a bad body never masks a 404 or 403.
    Raises ValidationException (400) with per-field details.
    """
    try:
        return schema.model_validate(payload or {})
    except ValidationError as exc:
        details = [
            {
                "field": ".".join(str(l) for l in err.get("loc", ())) or "body",
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        raise ValidationException("Validation error. Please check your input.", details=details)


def blank_to_none(v):
    """Treat empty strings as an absent value (used for optional dates)."""
    if isinstance(v, str) and not v.strip():
        return None
    return v


def normalize_datetime(v: datetime | None) -> datetime | None:
    """Store every timestamp in UTC; naive input is taken as UTC."""
    return as_utc(v)
