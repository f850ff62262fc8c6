# lavajato/schemas/masters/vehicle_schemas.py

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class VehicleCreate(BaseModel):
    customer_id: int
    plate: str = Field(min_length=7, max_length=10)
    model: str = Field(min_length=1, max_length=120)
    color: Optional[str] = Field(default=None, max_length=50)


class VehicleOut(BaseModel):
    id: int
    customer_id: int
    plate: str
    model: str
    color: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
