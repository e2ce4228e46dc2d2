import uuid
from sqlalchemy import Column, Integer, Numeric, ForeignKey, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship
from vehicle_tracker.database import Base
from vehicle_tracker.models.mixins import utcnow


class FuelLog(Base):
    __tablename__ = "fuel_logs"

    id        = Column(Uuid, primary_key=True, default=uuid.uuid4)
    vehicleId = Column(Uuid, ForeignKey("vehicles.id", ondelete="SET NULL"), nullable=True, index=True)
    litres    = Column(Numeric(10, 2), nullable=False)
    cost      = Column(Numeric(12, 2), nullable=False)
    odometer  = Column(Integer, nullable=True)
    date      = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    vehicle = relationship("Vehicle", back_populates="fuel_logs")

    def __repr__(self):
        return f"<FuelLog id={self.id} vehicleId={self.vehicleId} litres={self.litres}>"
