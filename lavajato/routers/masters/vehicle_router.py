# lavajato/routers/masters/vehicle_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.db import get_db
from lavajato.schemas.masters.vehicle_schemas import VehicleCreate, VehicleOut
from lavajato.services.masters.vehicle_service import (
    create_vehicle,
    get_vehicle,
    list_vehicles,
)
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])
logger = get_logger(__name__)


@router.post("", response_model=APIResponse[VehicleOut], status_code=201)
async def create_vehicle_api(
    payload: VehicleCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("VEHICLES_MANAGE")),
):
    logger.info("Create vehicle", extra={"customer_id": payload.customer_id})
    vehicle = await create_vehicle(db, payload, user)
    return success_response("Vehicle created successfully", vehicle)


@router.get("", response_model=APIResponse[List[VehicleOut]])
async def list_vehicles_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
    customer_id: Optional[int] = Query(None),
    plate: Optional[str] = Query(None),
):
    vehicles = await list_vehicles(db, user, customer_id=customer_id, plate=plate)
    return success_response("Vehicles fetched successfully", vehicles)


@router.get("/{vehicle_id}", response_model=APIResponse[VehicleOut])
async def get_vehicle_api(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
):
    logger.info("Get vehicle", extra={"vehicle_id": vehicle_id})
    vehicle = await get_vehicle(db, vehicle_id, user)
    return success_response("Vehicle fetched successfully", vehicle)
