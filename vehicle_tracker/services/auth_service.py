import logging

from sqlalchemy.orm import Session

from vehicle_tracker.models.user import User
from vehicle_tracker.schemas.auth import LoginRequest, RegisterRequest
from vehicle_tracker.utils.security import verify_password, hash_password, create_access_token
from vehicle_tracker.utils.exceptions import UnauthorizedException, DuplicateEntryException
from vehicle_tracker.utils.identifiers import isoformat

logger = logging.getLogger(__name__)


def serialize_user(user: User) -> dict:
    return {
        "id":        str(user.id),
        "name":      user.name,
        "email":     user.email,
        "createdAt": isoformat(user.createdAt),
    }


def _token_response(user: User) -> dict:
    return {
        "token":     create_access_token(user.id),
        "tokenType": "Bearer",
        "user":      serialize_user(user),
    }


class AuthService:

    # ─── Register ─────────────────────────────────────────────────────────────
    def register(self, db: Session, data: RegisterRequest) -> dict:
        if db.query(User.id).filter(User.email == data.email).first():
            raise DuplicateEntryException("User already exists", field="email")

        user = User(
            name=data.name,
            email=data.email,
            passwordHash=hash_password(data.password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"New user registered: {user.email}")
        return _token_response(user)

    # ─── Login ────────────────────────────────────────────────────────────────
    def login(self, db: Session, data: LoginRequest) -> dict:
        user = db.query(User).filter(User.email == data.email).first()

        if not user or not verify_password(data.password, user.passwordHash):
            raise UnauthorizedException("Invalid email or password")

        return _token_response(user)


auth_service = AuthService()
