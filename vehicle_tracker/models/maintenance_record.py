import uuid
from sqlalchemy import Column, Boolean, Numeric, String, ForeignKey, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship
from vehicle_tracker.database import Base
from vehicle_tracker.models.mixins import utcnow


class MaintenanceRecord(Base):
    __tablename__ = "maintenance_records"

    id        = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Nullable only so a deleted vehicle leaves the record behind unresolved
    vehicleId = Column(Uuid, ForeignKey("vehicles.id", ondelete="SET NULL"), nullable=True, index=True)
    title     = Column(String(255), nullable=False, default="")
    dueDate   = Column(TIMESTAMP(timezone=True), nullable=True, index=True)
    completed = Column(Boolean, nullable=False, default=False)
    cost      = Column(Numeric(12, 2), nullable=True)
    createdAt = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)
    updatedAt = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    vehicle = relationship("Vehicle", back_populates="maintenance_records")

    def __repr__(self):
        return f"<MaintenanceRecord id={self.id} vehicleId={self.vehicleId} completed={self.completed}>"
