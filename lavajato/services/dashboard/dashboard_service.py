# lavajato/services/dashboard/dashboard_service.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import and_, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.models.enums.appointment_status import AppointmentStatus
from lavajato.models.enums.order_status import OrderStatus
from lavajato.models.inventory.product_models import Product
from lavajato.models.masters.customer_models import Customer
from lavajato.models.orders.service_order_models import ServiceOrder, ServiceOrderItem
from lavajato.models.scheduling.appointment_models import Appointment
from lavajato.schemas.dashboard.dashboard_schemas import (
    DashboardOut,
    LowStockProductOut,
    TopServiceOut,
)
from lavajato.schemas.orders.order_schemas import OrderOut
from lavajato.utils.decimal_utils import to_decimal
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)

TOP_SERVICES_LIMIT = 5
RECENT_ORDERS_LIMIT = 5

# statuses whose total counts as revenue
BILLED_STATUSES = (OrderStatus.READY, OrderStatus.DELIVERED)


def _day_window(now: datetime) -> tuple[datetime, datetime]:
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def _month_window(now: datetime) -> tuple[datetime, datetime]:
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        return start, start.replace(year=start.year + 1, month=1)
    return start, start.replace(month=start.month + 1)


async def _revenue_between(db: AsyncSession, car_wash_id: int, start: datetime, end: datetime):
    # finished_at when the car already left, entry time otherwise
    finished_in_window = and_(
        ServiceOrder.finished_at >= start,
        ServiceOrder.finished_at < end,
    )
    entered_in_window = and_(
        ServiceOrder.finished_at.is_(None),
        ServiceOrder.entered_at >= start,
        ServiceOrder.entered_at < end,
    )
    total = await db.scalar(
        select(func.coalesce(func.sum(ServiceOrder.total), 0)).where(
            ServiceOrder.car_wash_id == car_wash_id,
            ServiceOrder.status.in_(BILLED_STATUSES),
            or_(finished_in_window, entered_in_window),
        )
    )
    return to_decimal(total)


# =========================
# DASHBOARD
# =========================
async def get_dashboard(db: AsyncSession, user, *, now: Optional[datetime] = None) -> DashboardOut:
    car_wash_id = user.car_wash_id
    now = now or datetime.now(timezone.utc)
    day_start, day_end = _day_window(now)
    month_start, month_end = _month_window(now)

    # -------------------------
    # ORDERS
    # -------------------------
    status_rows = await db.execute(
        select(ServiceOrder.status, func.count(ServiceOrder.id))
        .where(ServiceOrder.car_wash_id == car_wash_id)
        .group_by(ServiceOrder.status)
    )
    orders_by_status = {status.value: 0 for status in OrderStatus}
    for status, count in status_rows.all():
        orders_by_status[OrderStatus(status).value] = count

    order_counts = (
        await db.execute(
            select(
                func.count(ServiceOrder.id)
                .filter(ServiceOrder.entered_at >= day_start, ServiceOrder.entered_at < day_end)
                .label("orders_today"),
                func.count(ServiceOrder.id)
                .filter(ServiceOrder.status != OrderStatus.DELIVERED)
                .label("open_orders"),
            ).where(ServiceOrder.car_wash_id == car_wash_id)
        )
    ).one()

    # -------------------------
    # CUSTOMERS
    # -------------------------
    customer_counts = (
        await db.execute(
            select(
                func.count(Customer.id).label("total_customers"),
                func.count(Customer.id)
                .filter(Customer.created_at >= month_start, Customer.created_at < month_end)
                .label("new_customers_month"),
            ).where(Customer.car_wash_id == car_wash_id)
        )
    ).one()

    # -------------------------
    # APPOINTMENTS
    # -------------------------
    appointment_counts = (
        await db.execute(
            select(
                func.count(Appointment.id)
                .filter(Appointment.status == AppointmentStatus.PENDING)
                .label("pending_appointments"),
                func.count(Appointment.id)
                .filter(
                    Appointment.scheduled_at >= day_start,
                    Appointment.scheduled_at < day_end,
                    Appointment.status.in_((AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)),
                )
                .label("appointments_today"),
            ).where(Appointment.car_wash_id == car_wash_id)
        )
    ).one()

    # -------------------------
    # STOCK / CATALOGUE
    # -------------------------
    low_stock = await db.execute(
        select(Product)
        .where(
            Product.car_wash_id == car_wash_id,
            Product.is_active.is_(True),
            Product.quantity <= Product.reorder_point,
        )
        .order_by(Product.name)
    )

    times_sold = func.count(ServiceOrderItem.id).label("times_sold")
    top_services = await db.execute(
        select(
            ServiceOrderItem.service_id,
            func.max(ServiceOrderItem.service_name).label("name"),
            times_sold,
        )
        .join(ServiceOrder, ServiceOrder.id == ServiceOrderItem.order_id)
        .where(
            ServiceOrder.car_wash_id == car_wash_id,
            ServiceOrderItem.service_id.is_not(None),
        )
        .group_by(ServiceOrderItem.service_id)
        .order_by(desc(times_sold), ServiceOrderItem.service_id)
        .limit(TOP_SERVICES_LIMIT)
    )

    recent = await db.execute(
        select(ServiceOrder)
        .where(
            ServiceOrder.car_wash_id == car_wash_id,
            ServiceOrder.entered_at >= day_start,
            ServiceOrder.entered_at < day_end,
        )
        .order_by(desc(ServiceOrder.entered_at), desc(ServiceOrder.id))
        .limit(RECENT_ORDERS_LIMIT)
    )

    summary = DashboardOut(
        orders_by_status=orders_by_status,
        orders_today=order_counts.orders_today,
        open_orders=order_counts.open_orders,
        revenue_today=await _revenue_between(db, car_wash_id, day_start, day_end),
        revenue_month=await _revenue_between(db, car_wash_id, month_start, month_end),
        total_customers=customer_counts.total_customers,
        new_customers_month=customer_counts.new_customers_month,
        pending_appointments=appointment_counts.pending_appointments,
        appointments_today=appointment_counts.appointments_today,
        low_stock_products=[LowStockProductOut.model_validate(p) for p in low_stock.scalars().all()],
        top_services=[
            TopServiceOut(service_id=row.service_id, name=row.name, times_sold=row.times_sold)
            for row in top_services.all()
        ],
        recent_orders=[OrderOut.model_validate(o) for o in recent.scalars().all()],
    )

    logger.info(
        "Dashboard computed",
        extra={"orders_today": summary.orders_today, "open_orders": summary.open_orders},
    )
    return summary
