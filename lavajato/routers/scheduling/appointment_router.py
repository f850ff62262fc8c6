# lavajato/routers/scheduling/appointment_router.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.db import get_db
from lavajato.models.enums.appointment_status import AppointmentStatus
from lavajato.schemas.scheduling.appointment_schemas import (
    AppointmentCreate,
    AppointmentStatusUpdate,
    AppointmentOut,
)
from lavajato.services.scheduling.appointment_service import (
    create_appointment,
    list_appointments,
    update_appointment_status,
)
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/appointments", tags=["Appointments"])
logger = get_logger(__name__)


@router.post("", response_model=APIResponse[AppointmentOut], status_code=201)
async def create_appointment_api(
    payload: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("APPOINTMENTS_MANAGE")),
):
    logger.info(
        "Create appointment",
        extra={"customer_id": payload.customer_id, "scheduled_at": payload.scheduled_at.isoformat()},
    )
    appointment = await create_appointment(db, payload, user)
    return success_response("Appointment created successfully", appointment)


@router.get("", response_model=APIResponse[List[AppointmentOut]])
async def list_appointments_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("APPOINTMENTS_VIEW")),
    day: Optional[date] = Query(None, alias="date"),
    status: Optional[AppointmentStatus] = Query(None),
):
    appointments = await list_appointments(db, user, day=day, status=status)
    return success_response("Appointments fetched successfully", appointments)


@router.patch("/{appointment_id}/status", response_model=APIResponse[AppointmentOut])
async def update_appointment_status_api(
    appointment_id: int,
    payload: AppointmentStatusUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("APPOINTMENTS_MANAGE")),
):
    logger.info(
        "Update appointment status",
        extra={"appointment_id": appointment_id, "status": payload.status.value},
    )
    appointment = await update_appointment_status(db, appointment_id, payload, user)
    return success_response("Appointment status updated successfully", appointment)
