from sqlalchemy import Column, Integer, String, Index
from sqlalchemy.orm import relationship
from lavajato.core.db import Base
from lavajato.models.base.mixins import TimestampMixin, TenantMixin, AuditMixin


class Customer(Base, TimestampMixin, TenantMixin, AuditMixin):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    phone = Column(String(20), nullable=True, index=True)
    email = Column(String(255), nullable=True)
    loyalty_points = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False, default=1)

    vehicles = relationship("Vehicle", back_populates="customer", lazy="noload")

    __table_args__ = (Index("ix_customer_car_wash_name", "car_wash_id", "name"),)

    def __repr__(self):
        return f"<Customer id={self.id} name={self.name} points={self.loyalty_points}>"
