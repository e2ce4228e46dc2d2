import uuid
from sqlalchemy import Column, String, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship
from vehicle_tracker.database import Base
from vehicle_tracker.models.mixins import utcnow


class User(Base):
    __tablename__ = "users"

    id           = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name         = Column(String(150), nullable=False, default="")
    email        = Column(String(255), unique=True, nullable=False, index=True)
    passwordHash = Column(String(255), nullable=False)
    createdAt    = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    vehicles = relationship("Vehicle", back_populates="owner")

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
