# lavajato/schemas/dashboard/dashboard_schemas.py

from pydantic import BaseModel
from typing import List, Dict

from lavajato.schemas.orders.order_schemas import OrderOut


class LowStockProductOut(BaseModel):
    id: int
    name: str
    unit: str
    quantity: float
    reorder_point: float

    class Config:
        from_attributes = True


class TopServiceOut(BaseModel):
    service_id: int
    name: str
    times_sold: int


class DashboardOut(BaseModel):
    orders_by_status: Dict[str, int]
    orders_today: int
    open_orders: int

    revenue_today: float
    revenue_month: float

    total_customers: int
    new_customers_month: int

    pending_appointments: int
    appointments_today: int

    low_stock_products: List[LowStockProductOut] = []
    top_services: List[TopServiceOut] = []
    recent_orders: List[OrderOut] = []
