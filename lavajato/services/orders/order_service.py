# lavajato/services/orders/order_service.py

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update, func, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import noload

from lavajato.constants.activity_codes import ActivityCode
from lavajato.constants.error_codes import ErrorCode
from lavajato.core.exceptions import AppException, OrderVersionConflict
from lavajato.models.enums.order_status import OrderStatus
from lavajato.models.masters.customer_models import Customer
from lavajato.models.masters.vehicle_models import Vehicle
from lavajato.models.masters.wash_service_models import WashService
from lavajato.models.orders.service_order_models import ServiceOrder, ServiceOrderItem
from lavajato.models.scheduling.appointment_models import Appointment
from lavajato.schemas.orders.order_schemas import (
    OrderCreate,
    OrderStatusUpdate,
    OrderOut,
    BoardOut,
    BoardColumnOut,
    NotificationLinkOut,
)
from lavajato.services.inventory.stock_service import deduct_stock_for_order
from lavajato.services.orders.notification_service import (
    ready_notification_link,
    summary_notification_link,
)
from lavajato.services.orders.status_machine import BOARD_STAGES, ensure_transition
from lavajato.services.scheduling.appointment_sync import sync_appointment_with_order
from lavajato.utils.activity_helpers import emit_activity
from lavajato.utils.decimal_utils import sum_prices, loyalty_points_for
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


# =====================================================
# HELPERS
# =====================================================
def _order_not_found() -> AppException:
    return AppException(404, "Service order not found", ErrorCode.ORDER_NOT_FOUND)


async def _load_order(db: AsyncSession, order_id: int, car_wash_id: int) -> ServiceOrder:
    order = await db.scalar(
        select(ServiceOrder)
        .where(
            ServiceOrder.id == order_id,
            ServiceOrder.car_wash_id == car_wash_id,
        )
        .execution_options(populate_existing=True)
    )
    if not order:
        raise _order_not_found()
    return order


async def _lock_order(db: AsyncSession, order_id: int, car_wash_id: int) -> ServiceOrder:
    # noload: FOR UPDATE cannot be combined with the outer joins of eager loads
    order = await db.scalar(
        select(ServiceOrder)
        .options(noload("*"))
        .where(
            ServiceOrder.id == order_id,
            ServiceOrder.car_wash_id == car_wash_id,
        )
        .with_for_update()
    )
    if not order:
        raise _order_not_found()
    return order


async def _next_order_code(db: AsyncSession, car_wash_id: int) -> int:
    last_code = await db.scalar(
        select(func.coalesce(func.max(ServiceOrder.code), 0)).where(
            ServiceOrder.car_wash_id == car_wash_id
        )
    )
    return int(last_code or 0) + 1


# =====================================================
# CREATE
# =====================================================
async def create_order(db: AsyncSession, payload: OrderCreate, user) -> OrderOut:
    car_wash_id = user.car_wash_id

    customer = await db.scalar(
        select(Customer).where(
            Customer.id == payload.customer_id,
            Customer.car_wash_id == car_wash_id,
        )
    )
    if not customer:
        raise AppException(404, "Customer not found", ErrorCode.CUSTOMER_NOT_FOUND)

    vehicle = await db.scalar(
        select(Vehicle).where(
            Vehicle.id == payload.vehicle_id,
            Vehicle.car_wash_id == car_wash_id,
        )
    )
    if not vehicle:
        raise AppException(404, "Vehicle not found", ErrorCode.VEHICLE_NOT_FOUND)

    if vehicle.customer_id != customer.id:
        raise AppException(
            400,
            "Vehicle does not belong to this customer",
            ErrorCode.VALIDATION_ERROR,
        )

    result = await db.execute(
        select(WashService).where(
            WashService.id.in_(set(payload.service_ids)),
            WashService.car_wash_id == car_wash_id,
            WashService.is_active.is_(True),
        )
    )
    services = {s.id: s for s in result.scalars().all()}

    missing = sorted(set(payload.service_ids) - services.keys())
    if missing:
        raise AppException(
            404,
            "One or more services were not found",
            ErrorCode.SERVICE_NOT_FOUND,
            {"service_ids": missing},
        )

    if payload.appointment_id:
        appointment_exists = await db.scalar(
            select(Appointment.id).where(
                Appointment.id == payload.appointment_id,
                Appointment.car_wash_id == car_wash_id,
            )
        )
        if not appointment_exists:
            raise AppException(404, "Appointment not found", ErrorCode.APPOINTMENT_NOT_FOUND)

    items = [
        ServiceOrderItem(
            service_id=services[service_id].id,
            service_name=services[service_id].name,
            price=services[service_id].price,
            position=position,
        )
        for position, service_id in enumerate(payload.service_ids)
    ]

    order = ServiceOrder(
        car_wash_id=car_wash_id,
        code=await _next_order_code(db, car_wash_id),
        customer_id=customer.id,
        vehicle_id=vehicle.id,
        appointment_id=payload.appointment_id,
        status=OrderStatus.AWAITING,
        total=sum_prices(item.price for item in items),
        expected_exit_at=payload.expected_exit_at,
        entry_checklist=payload.entry_checklist,
        notes=payload.notes,
        items=items,
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(order)

    try:
        await db.flush()
    except IntegrityError:
        # two orders opened at the same instant raced for the same code
        await db.rollback()
        raise AppException(
            409,
            "Order code already taken. Please retry.",
            ErrorCode.ORDER_CODE_EXISTS,
        )

    await sync_appointment_with_order(
        db,
        appointment_id=order.appointment_id,
        car_wash_id=car_wash_id,
        order_status=order.status,
    )

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_ORDER,
        order_code=order.code,
        plate=vehicle.plate,
    )

    await db.commit()

    logger.info(
        "Service order created",
        extra={"order_id": order.id, "code": order.code, "car_wash_id": car_wash_id},
    )
    return OrderOut.model_validate(await _load_order(db, order.id, car_wash_id))


# =====================================================
# READ
# =====================================================
async def list_orders(
    db: AsyncSession,
    user,
    *,
    status: Optional[OrderStatus] = None,
    include_delivered: bool = True,
) -> list[OrderOut]:
    query = select(ServiceOrder).where(ServiceOrder.car_wash_id == user.car_wash_id)

    if status:
        query = query.where(ServiceOrder.status == status)
    if not include_delivered:
        query = query.where(ServiceOrder.status != OrderStatus.DELIVERED)

    result = await db.execute(
        query.order_by(desc(ServiceOrder.entered_at), desc(ServiceOrder.id))
    )
    return [OrderOut.model_validate(o) for o in result.scalars().all()]


async def get_board(db: AsyncSession, user) -> BoardOut:
    orders = await list_orders(db, user, include_delivered=False)

    return BoardOut(
        columns=[
            BoardColumnOut(
                status=stage,
                orders=[o for o in orders if o.status == stage],
            )
            for stage in BOARD_STAGES
        ]
    )


async def get_order(db: AsyncSession, order_id: int, user) -> OrderOut:
    return OrderOut.model_validate(await _load_order(db, order_id, user.car_wash_id))


# =====================================================
# UPDATE STATUS (KANBAN)
# =====================================================
async def update_order_status(
    db: AsyncSession,
    order_id: int,
    payload: OrderStatusUpdate,
    user,
    *,
    allow_skip: bool = True,
    loyalty_points_divisor: int = 10,
) -> OrderOut:
    car_wash_id = user.car_wash_id
    order = await _lock_order(db, order_id, car_wash_id)

    if order.version != payload.version:
        raise OrderVersionConflict(order.id, payload.version, order.version)

    old_status = OrderStatus(order.status)
    new_status = payload.status
    ensure_transition(old_status, new_status, allow_skip)

    if new_status == OrderStatus.FINISHING:
        # items are noloaded by the lock query
        order = await _load_order(db, order.id, car_wash_id)
        await deduct_stock_for_order(db, order)

    order.status = new_status
    order.version += 1
    order.updated_by_id = user.id

    if new_status == OrderStatus.DELIVERED:
        order.finished_at = datetime.now(timezone.utc)

        points = loyalty_points_for(order.total, loyalty_points_divisor)
        if points:
            await db.execute(
                update(Customer)
                .where(Customer.id == order.customer_id)
                .values(loyalty_points=Customer.loyalty_points + points)
                .execution_options(synchronize_session=False)
            )
        logger.info(
            "Loyalty points credited",
            extra={"order_id": order.id, "customer_id": order.customer_id, "points": points},
        )

    await sync_appointment_with_order(
        db,
        appointment_id=order.appointment_id,
        car_wash_id=car_wash_id,
        order_status=new_status,
    )

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_ORDER_STATUS,
        order_code=order.code,
        old_status=old_status.value,
        new_status=new_status.value,
    )

    await db.commit()

    logger.info(
        "Service order status updated",
        extra={
            "order_id": order.id,
            "old_status": old_status.value,
            "new_status": new_status.value,
            "version": order.version,
        },
    )
    return OrderOut.model_validate(await _load_order(db, order.id, car_wash_id))


# =====================================================
# DELETE
# =====================================================
async def delete_order(db: AsyncSession, order_id: int, user) -> OrderOut:
    order = await _load_order(db, order_id, user.car_wash_id)
    snapshot = OrderOut.model_validate(order)

    # items go with the order (delete-orphan cascade)
    await db.delete(order)

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.DELETE_ORDER,
        order_code=order.code,
    )

    await db.commit()

    logger.info("Service order deleted", extra={"order_id": order_id})
    return snapshot


# =====================================================
# NOTIFICATION LINKS
# =====================================================
async def get_ready_notification(
    db: AsyncSession,
    order_id: int,
    user,
    country_code: str = "55",
) -> NotificationLinkOut:
    order = await _load_order(db, order_id, user.car_wash_id)
    url, message = ready_notification_link(order, country_code)
    return NotificationLinkOut(url=url, message=message)


async def get_summary_notification(
    db: AsyncSession,
    order_id: int,
    user,
    country_code: str = "55",
) -> NotificationLinkOut:
    order = await _load_order(db, order_id, user.car_wash_id)
    url, message = summary_notification_link(order, user.car_wash.name, country_code)
    return NotificationLinkOut(url=url, message=message)
