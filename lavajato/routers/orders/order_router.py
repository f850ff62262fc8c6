# lavajato/routers/orders/order_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.config import (
    ORDER_ALLOW_STAGE_SKIP,
    LOYALTY_POINTS_DIVISOR,
    WHATSAPP_COUNTRY_CODE,
)
from lavajato.core.db import get_db
from lavajato.models.enums.order_status import OrderStatus
from lavajato.schemas.orders.order_schemas import (
    OrderCreate,
    OrderStatusUpdate,
    OrderOut,
    BoardOut,
    NotificationLinkOut,
)
from lavajato.services.orders.order_service import (
    create_order,
    list_orders,
    get_board,
    get_order,
    update_order_status,
    delete_order,
    get_ready_notification,
    get_summary_notification,
)
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/orders", tags=["Service Orders"])
logger = get_logger(__name__)


@router.post("", response_model=APIResponse[OrderOut], status_code=201)
async def create_order_api(
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_CREATE")),
):
    logger.info(
        "Create service order",
        extra={"customer_id": payload.customer_id, "vehicle_id": payload.vehicle_id},
    )
    order = await create_order(db, payload, user)
    return success_response("Service order created successfully", order)


@router.get("", response_model=APIResponse[List[OrderOut]])
async def list_orders_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
    status: Optional[OrderStatus] = Query(None),
    include_delivered: bool = Query(True),
):
    logger.info(
        "List service orders",
        extra={"status": status, "include_delivered": include_delivered},
    )
    orders = await list_orders(
        db,
        user,
        status=status,
        include_delivered=include_delivered,
    )
    return success_response("Service orders fetched successfully", orders)


@router.get("/board", response_model=APIResponse[BoardOut])
async def get_board_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
):
    board = await get_board(db, user)
    return success_response("Board fetched successfully", board)


@router.get("/{order_id}", response_model=APIResponse[OrderOut])
async def get_order_api(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
):
    logger.info("Get service order", extra={"order_id": order_id})
    order = await get_order(db, order_id, user)
    return success_response("Service order fetched successfully", order)


@router.patch("/{order_id}", response_model=APIResponse[OrderOut])
async def update_order_status_api(
    order_id: int,
    payload: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("KANBAN_MOVE")),
):
    logger.info(
        "Update service order status",
        extra={
            "order_id": order_id,
            "target_status": payload.status.value,
            "version": payload.version,
        },
    )
    order = await update_order_status(
        db,
        order_id,
        payload,
        user,
        allow_skip=ORDER_ALLOW_STAGE_SKIP,
        loyalty_points_divisor=LOYALTY_POINTS_DIVISOR,
    )
    return success_response("Service order status updated successfully", order)


@router.delete("/{order_id}", response_model=APIResponse[OrderOut])
async def delete_order_api(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_DELETE")),
):
    logger.info("Delete service order", extra={"order_id": order_id})
    order = await delete_order(db, order_id, user)
    return success_response("Service order deleted successfully", order)


@router.get("/{order_id}/notify-link", response_model=APIResponse[NotificationLinkOut])
async def ready_notification_api(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
):
    logger.info("Build ready notification link", extra={"order_id": order_id})
    link = await get_ready_notification(db, order_id, user, WHATSAPP_COUNTRY_CODE)
    return success_response("Notification link generated", link)


@router.get("/{order_id}/summary-link", response_model=APIResponse[NotificationLinkOut])
async def summary_notification_api(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
):
    logger.info("Build order summary link", extra={"order_id": order_id})
    link = await get_summary_notification(db, order_id, user, WHATSAPP_COUNTRY_CODE)
    return success_response("Summary link generated", link)
