from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vehicle_tracker.database import get_db
from vehicle_tracker.dependencies import get_current_user
from vehicle_tracker.models.user import User
from vehicle_tracker.schemas.auth import LoginRequest, RegisterRequest
from vehicle_tracker.schemas.common import SuccessResponse, success_response
from vehicle_tracker.services.auth_service import auth_service, serialize_user

router = APIRouter(prefix="/auth")


# ─── POST /auth/register ──────────────────────────────────────────────────────
@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
    response_model=SuccessResponse,
)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user and return an access token.
    - Email must be unique (case-insensitive).
    - Password minimum 6 characters.
    """
    return success_response("Registration successful", auth_service.register(db, data))


# ─── POST /auth/login ─────────────────────────────────────────────────────────
@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="Login and receive an access token",
    response_model=SuccessResponse,
)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    return success_response("Login successful", auth_service.login(db, data))


# ─── GET /auth/me ─────────────────────────────────────────────────────────────
@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Get current authenticated user profile",
    response_model=SuccessResponse,
)
def me(current_user: User = Depends(get_current_user)):
    return success_response("User retrieved", serialize_user(current_user))
