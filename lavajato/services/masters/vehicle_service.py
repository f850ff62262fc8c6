# lavajato/services/masters/vehicle_service.py

import re
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from lavajato.models.masters.vehicle_models import Vehicle
from lavajato.schemas.masters.vehicle_schemas import VehicleCreate, VehicleOut
from lavajato.services.masters.customer_service import get_customer_or_404
from lavajato.core.exceptions import AppException
from lavajato.constants.error_codes import ErrorCode
from lavajato.utils.activity_helpers import emit_activity
from lavajato.constants.activity_codes import ActivityCode
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


def normalize_plate(plate: str) -> str:
    # "abc 1d23" -> "ABC1D23"
    return re.sub(r"\s+", "", plate or "").upper()


def _plate_taken(plate: str) -> AppException:
    return AppException(
        409,
        "A vehicle with this plate is already registered",
        ErrorCode.VEHICLE_PLATE_EXISTS,
        {"plate": plate},
    )


# =========================
# CREATE
# =========================
async def create_vehicle(db: AsyncSession, payload: VehicleCreate, user):
    customer = await get_customer_or_404(db, payload.customer_id, user.car_wash_id)
    plate = normalize_plate(payload.plate)

    exists = await db.scalar(
        select(Vehicle.id).where(
            Vehicle.car_wash_id == user.car_wash_id,
            Vehicle.plate == plate,
        )
    )
    if exists:
        raise _plate_taken(plate)

    vehicle = Vehicle(
        car_wash_id=user.car_wash_id,
        customer_id=customer.id,
        plate=plate,
        model=payload.model.strip(),
        color=payload.color,
    )
    db.add(vehicle)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise _plate_taken(plate)

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_VEHICLE,
        plate=plate,
        target_name=customer.name,
    )

    await db.commit()
    await db.refresh(vehicle)

    logger.info("Vehicle created", extra={"vehicle_id": vehicle.id, "plate": plate})
    return VehicleOut.model_validate(vehicle)


# =========================
# READ
# =========================
async def get_vehicle(db: AsyncSession, vehicle_id: int, user):
    vehicle = await db.scalar(
        select(Vehicle).where(
            Vehicle.id == vehicle_id,
            Vehicle.car_wash_id == user.car_wash_id,
        )
    )
    if not vehicle:
        raise AppException(404, "Vehicle not found", ErrorCode.VEHICLE_NOT_FOUND)
    return VehicleOut.model_validate(vehicle)


async def list_vehicles(
    db: AsyncSession,
    user,
    *,
    customer_id: Optional[int] = None,
    plate: Optional[str] = None,
):
    query = select(Vehicle).where(Vehicle.car_wash_id == user.car_wash_id)

    if customer_id:
        query = query.where(Vehicle.customer_id == customer_id)
    if plate:
        query = query.where(Vehicle.plate.ilike(f"%{normalize_plate(plate)}%"))

    result = await db.execute(query.order_by(Vehicle.plate))
    return [VehicleOut.model_validate(v) for v in result.scalars().all()]
