# lavajato/schemas/scheduling/appointment_schemas.py

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from lavajato.models.enums.appointment_status import AppointmentStatus


class AppointmentCreate(BaseModel):
    customer_id: int
    vehicle_id: Optional[int] = None
    scheduled_at: datetime
    notes: Optional[str] = Field(default=None, max_length=1000)


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class AppointmentCustomerOut(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class AppointmentVehicleOut(BaseModel):
    id: int
    plate: str
    model: str

    class Config:
        from_attributes = True


class AppointmentOut(BaseModel):
    id: int
    status: AppointmentStatus
    scheduled_at: datetime
    notes: Optional[str] = None
    customer: AppointmentCustomerOut
    vehicle: Optional[AppointmentVehicleOut] = None

    class Config:
        from_attributes = True
