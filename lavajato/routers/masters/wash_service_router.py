# lavajato/routers/masters/wash_service_router.py

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.db import get_db
from lavajato.schemas.masters.wash_service_schemas import (
    WashServiceCreate,
    WashServiceUpdate,
    WashServiceOut,
)
from lavajato.services.masters.wash_service_service import (
    create_service,
    list_services,
    update_service,
)
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/services", tags=["Service Catalogue"])
logger = get_logger(__name__)


@router.post("", response_model=APIResponse[WashServiceOut], status_code=201)
async def create_service_api(
    payload: WashServiceCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("SERVICES_MANAGE")),
):
    logger.info("Create wash service", extra={"service_name": payload.name})
    service = await create_service(db, payload, user)
    return success_response("Service created successfully", service)


@router.get("", response_model=APIResponse[List[WashServiceOut]])
async def list_services_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
    include_inactive: bool = Query(False),
):
    services = await list_services(db, user, include_inactive=include_inactive)
    return success_response("Services fetched successfully", services)


@router.patch("/{service_id}", response_model=APIResponse[WashServiceOut])
async def update_service_api(
    service_id: int,
    payload: WashServiceUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("SERVICES_MANAGE")),
):
    logger.info("Update wash service", extra={"service_id": service_id})
    service = await update_service(db, service_id, payload, user)
    return success_response("Service updated successfully", service)
