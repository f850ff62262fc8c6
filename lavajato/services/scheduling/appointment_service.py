# lavajato/services/scheduling/appointment_service.py

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from lavajato.models.enums.appointment_status import AppointmentStatus
from lavajato.models.masters.vehicle_models import Vehicle
from lavajato.models.scheduling.appointment_models import Appointment
from lavajato.schemas.scheduling.appointment_schemas import (
    AppointmentCreate,
    AppointmentStatusUpdate,
    AppointmentOut,
)
from lavajato.services.masters.customer_service import get_customer_or_404
from lavajato.core.exceptions import AppException
from lavajato.constants.error_codes import ErrorCode
from lavajato.constants.activity_codes import ActivityCode
from lavajato.utils.activity_helpers import emit_activity
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)

# Manual moves from the agenda. IN_PROGRESS/COMPLETED are also reached
# automatically when a linked service order moves.
APPOINTMENT_TRANSITIONS = {
    AppointmentStatus.PENDING: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {AppointmentStatus.IN_PROGRESS, AppointmentStatus.CANCELLED},
    AppointmentStatus.IN_PROGRESS: {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED},
    AppointmentStatus.COMPLETED: set(),
    AppointmentStatus.CANCELLED: set(),
}


async def _load_appointment(db: AsyncSession, appointment_id: int, car_wash_id: int) -> Appointment:
    appointment = await db.scalar(
        select(Appointment)
        .where(
            Appointment.id == appointment_id,
            Appointment.car_wash_id == car_wash_id,
        )
        .execution_options(populate_existing=True)
    )
    if not appointment:
        raise AppException(404, "Appointment not found", ErrorCode.APPOINTMENT_NOT_FOUND)
    return appointment


# =========================
# CREATE
# =========================
async def create_appointment(db: AsyncSession, payload: AppointmentCreate, user):
    customer = await get_customer_or_404(db, payload.customer_id, user.car_wash_id)

    if payload.vehicle_id:
        vehicle_owner = await db.scalar(
            select(Vehicle.customer_id).where(
                Vehicle.id == payload.vehicle_id,
                Vehicle.car_wash_id == user.car_wash_id,
            )
        )
        if vehicle_owner is None:
            raise AppException(404, "Vehicle not found", ErrorCode.VEHICLE_NOT_FOUND)
        if vehicle_owner != customer.id:
            raise AppException(
                400,
                "Vehicle does not belong to this customer",
                ErrorCode.VALIDATION_ERROR,
            )

    appointment = Appointment(
        car_wash_id=user.car_wash_id,
        customer_id=customer.id,
        vehicle_id=payload.vehicle_id,
        scheduled_at=payload.scheduled_at,
        status=AppointmentStatus.PENDING,
        notes=payload.notes,
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(appointment)
    await db.flush()

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_APPOINTMENT,
        target_id=appointment.id,
        target_name=customer.name,
    )

    await db.commit()

    logger.info("Appointment created", extra={"appointment_id": appointment.id})
    return AppointmentOut.model_validate(
        await _load_appointment(db, appointment.id, user.car_wash_id)
    )


# =========================
# LIST
# =========================
async def list_appointments(
    db: AsyncSession,
    user,
    *,
    day: Optional[date] = None,
    status: Optional[AppointmentStatus] = None,
):
    query = select(Appointment).where(Appointment.car_wash_id == user.car_wash_id)

    if day:
        start = datetime.combine(day, time.min, tzinfo=timezone.utc)
        query = query.where(
            Appointment.scheduled_at >= start,
            Appointment.scheduled_at < start + timedelta(days=1),
        )
    if status:
        query = query.where(Appointment.status == status)

    result = await db.execute(query.order_by(Appointment.scheduled_at, Appointment.id))
    return [AppointmentOut.model_validate(a) for a in result.scalars().all()]


# =========================
# STATUS
# =========================
async def update_appointment_status(
    db: AsyncSession,
    appointment_id: int,
    payload: AppointmentStatusUpdate,
    user,
):
    appointment = await _load_appointment(db, appointment_id, user.car_wash_id)
    old_status = AppointmentStatus(appointment.status)

    if payload.status not in APPOINTMENT_TRANSITIONS[old_status]:
        raise AppException(
            400,
            f"Cannot change appointment from {old_status.value} to {payload.status.value}",
            ErrorCode.APPOINTMENT_INVALID_STATE,
            {"current_status": old_status.value, "target_status": payload.status.value},
        )

    appointment.status = payload.status
    appointment.updated_by_id = user.id

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_APPOINTMENT_STATUS,
        target_id=appointment.id,
        old_status=old_status.value,
        new_status=payload.status.value,
    )

    await db.commit()

    logger.info(
        "Appointment status updated",
        extra={"appointment_id": appointment.id, "status": payload.status.value},
    )
    return AppointmentOut.model_validate(
        await _load_appointment(db, appointment.id, user.car_wash_id)
    )
