# lavajato/schemas/orders/order_schemas.py

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

from lavajato.models.enums.order_status import OrderStatus


# =========================
# REQUESTS
# =========================
class OrderCreate(BaseModel):
    customer_id: int
    vehicle_id: int
    service_ids: List[int] = Field(min_length=1)
    expected_exit_at: Optional[datetime] = None
    entry_checklist: Optional[Dict[str, Any]] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    appointment_id: Optional[int] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    version: int = Field(ge=1)


# =========================
# RESPONSES
# =========================
class OrderCustomerOut(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class OrderVehicleOut(BaseModel):
    id: int
    plate: str
    model: str
    color: Optional[str] = None

    class Config:
        from_attributes = True


class OrderItemOut(BaseModel):
    id: int
    service_id: Optional[int] = None
    service_name: str
    price: float

    class Config:
        from_attributes = True


class OrderOut(BaseModel):
    id: int
    code: int
    status: OrderStatus
    total: float
    version: int

    customer: OrderCustomerOut
    vehicle: OrderVehicleOut
    items: List[OrderItemOut] = []

    entered_at: datetime
    expected_exit_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    appointment_id: Optional[int] = None
    entry_checklist: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class BoardColumnOut(BaseModel):
    status: OrderStatus
    orders: List[OrderOut]


class BoardOut(BaseModel):
    columns: List[BoardColumnOut]


class NotificationLinkOut(BaseModel):
    url: str
    message: str
