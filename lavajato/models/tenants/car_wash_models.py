from sqlalchemy import Column, Integer, String, Boolean
from sqlalchemy.orm import relationship
from lavajato.core.db import Base
from lavajato.models.base.mixins import TimestampMixin


class CarWash(Base, TimestampMixin):
    __tablename__ = "car_washes"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(120), nullable=False, unique=True, index=True)
    phone = Column(String(20), nullable=True)
    city = Column(String(120), nullable=True)
    state = Column(String(2), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    users = relationship("User", back_populates="car_wash", lazy="noload")

    def __repr__(self):
        return f"<CarWash id={self.id} slug={self.slug}>"
