from sqlalchemy import Column, Integer, String, Boolean, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from lavajato.core.db import Base
from lavajato.models.base.mixins import TimestampMixin, TenantMixin, AuditMixin


class WashService(Base, TimestampMixin, TenantMixin, AuditMixin):
    """Catalogue entry (e.g. "Lavagem simples") priced per execution."""

    __tablename__ = "wash_services"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(String(500), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=30)
    is_active = Column(Boolean, default=True, nullable=False)

    product_usages = relationship(
        "ServiceProductUsage",
        back_populates="service",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (UniqueConstraint("car_wash_id", "name", name="uq_wash_service_car_wash_name"),)

    def __repr__(self):
        return f"<WashService id={self.id} name={self.name} price={self.price}>"


class ServiceProductUsage(Base):
    """Quantity of a product consumed each time the service is executed."""

    __tablename__ = "service_product_usages"

    id = Column(Integer, primary_key=True)
    service_id = Column(Integer, ForeignKey("wash_services.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = Column(Numeric(10, 3), nullable=False)

    service = relationship("WashService", back_populates="product_usages", lazy="noload")
    product = relationship("Product", lazy="selectin")

    __table_args__ = (UniqueConstraint("service_id", "product_id", name="uq_service_product_usage"),)
