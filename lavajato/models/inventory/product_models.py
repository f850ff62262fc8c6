from sqlalchemy import Column, Integer, String, Boolean, Numeric, UniqueConstraint
from lavajato.core.db import Base
from lavajato.models.base.mixins import TimestampMixin, TenantMixin, AuditMixin


class Product(Base, TimestampMixin, TenantMixin, AuditMixin):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    unit = Column(String(20), nullable=False, default="un")
    quantity = Column(Numeric(12, 3), nullable=False, default=0)
    reorder_point = Column(Numeric(12, 3), nullable=False, default=0)
    cost_per_unit = Column(Numeric(10, 2), nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)

    # quantity may go negative; order deductions never block a wash

    __table_args__ = (UniqueConstraint("car_wash_id", "name", name="uq_product_car_wash_name"),)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name} qty={self.quantity}{self.unit}>"
