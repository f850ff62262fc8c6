from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    DateTime,
    ForeignKey,
    JSON,
    Index,
    UniqueConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from lavajato.core.db import Base
from lavajato.models.base.mixins import TimestampMixin, TenantMixin, AuditMixin
from lavajato.models.enums.order_status import OrderStatus


class ServiceOrder(Base, TimestampMixin, TenantMixin, AuditMixin):
    __tablename__ = "service_orders"

    id = Column(Integer, primary_key=True)
    code = Column(Integer, nullable=False)

    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id", ondelete="SET NULL"), nullable=True, index=True)

    status = Column(SAEnum(OrderStatus), nullable=False, default=OrderStatus.AWAITING, index=True)
    total = Column(Numeric(10, 2), nullable=False, default=0)

    entered_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expected_exit_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    entry_checklist = Column(JSON, nullable=True)
    notes = Column(String(1000), nullable=True)

    version = Column(Integer, nullable=False, default=1)

    customer = relationship("Customer", lazy="selectin")
    vehicle = relationship("Vehicle", lazy="selectin")
    items = relationship(
        "ServiceOrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="ServiceOrderItem.position",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("car_wash_id", "code", name="uq_service_order_car_wash_code"),
        Index("ix_service_order_car_wash_status", "car_wash_id", "status"),
    )

    def __repr__(self):
        return f"<ServiceOrder id={self.id} code={self.code} status={self.status} v={self.version}>"


class ServiceOrderItem(Base):
    __tablename__ = "service_order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("service_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("wash_services.id", ondelete="SET NULL"), nullable=True, index=True)
    position = Column(Integer, nullable=False, default=0)

    # snapshots: catalogue edits never change past orders
    service_name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    order = relationship("ServiceOrder", back_populates="items", lazy="noload")
