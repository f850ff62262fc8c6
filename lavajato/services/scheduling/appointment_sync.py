from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import noload

from lavajato.models.enums.appointment_status import AppointmentStatus
from lavajato.models.enums.order_status import OrderStatus
from lavajato.models.scheduling.appointment_models import Appointment
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)

ORDER_TO_APPOINTMENT_STATUS = {
    OrderStatus.AWAITING: AppointmentStatus.IN_PROGRESS,
    OrderStatus.WASHING: AppointmentStatus.IN_PROGRESS,
    OrderStatus.FINISHING: AppointmentStatus.IN_PROGRESS,
    OrderStatus.READY: AppointmentStatus.COMPLETED,
    OrderStatus.DELIVERED: AppointmentStatus.COMPLETED,
}


async def sync_appointment_with_order(
    db: AsyncSession,
    *,
    appointment_id: Optional[int],
    car_wash_id: int,
    order_status: OrderStatus,
) -> Optional[AppointmentStatus]:
    """Mirror the order stage on its linked appointment. Returns the new status when it changed."""
    if not appointment_id:
        return None

    appointment = await db.scalar(
        select(Appointment)
        .options(noload("*"))
        .where(
            Appointment.id == appointment_id,
            Appointment.car_wash_id == car_wash_id,
        )
    )
    if not appointment or appointment.status == AppointmentStatus.CANCELLED:
        return None

    target = ORDER_TO_APPOINTMENT_STATUS[OrderStatus(order_status)]
    if appointment.status == target:
        return None

    appointment.status = target
    logger.info(
        "Appointment synced with service order",
        extra={"appointment_id": appointment.id, "status": target.value},
    )
    return target
