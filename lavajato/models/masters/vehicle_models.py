from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from lavajato.core.db import Base
from lavajato.models.base.mixins import TimestampMixin, TenantMixin


class Vehicle(Base, TimestampMixin, TenantMixin):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    plate = Column(String(10), nullable=False, index=True)
    model = Column(String(120), nullable=False)
    color = Column(String(50), nullable=True)

    customer = relationship("Customer", back_populates="vehicles", lazy="noload")

    __table_args__ = (UniqueConstraint("car_wash_id", "plate", name="uq_vehicle_car_wash_plate"),)

    def __repr__(self):
        return f"<Vehicle id={self.id} plate={self.plate}>"
