from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, Enum as SAEnum
from sqlalchemy.orm import relationship
from lavajato.core.db import Base
from lavajato.models.base.mixins import TimestampMixin, TenantMixin, AuditMixin
from lavajato.models.enums.appointment_status import AppointmentStatus


class Appointment(Base, TimestampMixin, TenantMixin, AuditMixin):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="SET NULL"), nullable=True, index=True)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(SAEnum(AppointmentStatus), nullable=False, default=AppointmentStatus.PENDING, index=True)
    notes = Column(String(1000), nullable=True)

    customer = relationship("Customer", lazy="selectin")
    vehicle = relationship("Vehicle", lazy="selectin")

    __table_args__ = (Index("ix_appointment_car_wash_scheduled", "car_wash_id", "scheduled_at"),)

    def __repr__(self):
        return f"<Appointment id={self.id} status={self.status} at={self.scheduled_at}>"
