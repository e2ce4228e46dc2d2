import uuid
from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship
from vehicle_tracker.database import Base
from vehicle_tracker.models.mixins import utcnow


class Vehicle(Base):
    __tablename__ = "vehicles"

    id                 = Column(Uuid, primary_key=True, default=uuid.uuid4)
    ownerId            = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    # Unique across all owners, not per owner
    registrationNumber = Column(String(32), unique=True, nullable=False, index=True)
    make               = Column(String(100), nullable=False, default="")
    model              = Column(String(100), nullable=False, default="")
    year               = Column(Integer, nullable=True)
    color              = Column(String(50), nullable=False, default="")
    fuelType           = Column(String(50), nullable=False, default="")
    mileage            = Column(Integer, nullable=False, default=0)
    notes              = Column(Text, nullable=False, default="")
    image              = Column(String(500), nullable=False, default="")
    createdAt          = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)
    updatedAt          = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    # No delete cascade: records outlive their vehicle with a NULL reference
    owner               = relationship("User", back_populates="vehicles")
    maintenance_records = relationship("MaintenanceRecord", back_populates="vehicle")
    fuel_logs           = relationship("FuelLog", back_populates="vehicle")

    def __repr__(self):
        return f"<Vehicle id={self.id} reg={self.registrationNumber}>"
