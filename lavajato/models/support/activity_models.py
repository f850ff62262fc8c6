from sqlalchemy import Column, Integer, String, ForeignKey, Index
from lavajato.core.db import Base
from lavajato.models.base.mixins import TimestampMixin, TenantMixin


class UserActivity(Base, TimestampMixin, TenantMixin):
    """Audit trail of staff actions inside one car wash. Rows are only ever inserted."""

    __tablename__ = "user_activity"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    username_snapshot = Column(String(150), nullable=False, index=True)
    activity_code = Column(String(50), nullable=False, index=True)
    order_code = Column(Integer, nullable=True)
    message = Column(String, nullable=False)

    __table_args__ = (
        Index("ix_user_activity_car_wash_created", "car_wash_id", "created_at"),
        Index("ix_user_activity_car_wash_order", "car_wash_id", "order_code"),
    )

    def __repr__(self):
        return f"<UserActivity id={self.id} code={self.activity_code} user={self.username_snapshot}>"
