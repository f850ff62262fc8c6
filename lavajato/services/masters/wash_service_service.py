# lavajato/services/masters/wash_service_service.py

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from lavajato.models.inventory.product_models import Product
from lavajato.models.masters.wash_service_models import WashService, ServiceProductUsage
from lavajato.schemas.masters.wash_service_schemas import (
    ProductUsageIn,
    ProductUsageOut,
    WashServiceCreate,
    WashServiceUpdate,
    WashServiceOut,
)
from lavajato.core.exceptions import AppException
from lavajato.constants.error_codes import ErrorCode
from lavajato.constants.activity_codes import ActivityCode
from lavajato.utils.activity_helpers import emit_activity
from lavajato.utils.decimal_utils import to_decimal, to_quantity
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


def _map_service(service: WashService) -> WashServiceOut:
    return WashServiceOut(
        id=service.id,
        name=service.name,
        description=service.description,
        price=float(service.price),
        duration_minutes=service.duration_minutes,
        is_active=service.is_active,
        product_usages=[
            ProductUsageOut(
                product_id=usage.product_id,
                product_name=usage.product.name,
                unit=usage.product.unit,
                quantity=float(usage.quantity),
            )
            for usage in service.product_usages
        ],
    )


async def _load_service(db: AsyncSession, service_id: int, car_wash_id: int) -> WashService:
    service = await db.scalar(
        select(WashService)
        .options(
            selectinload(WashService.product_usages).selectinload(ServiceProductUsage.product)
        )
        .where(
            WashService.id == service_id,
            WashService.car_wash_id == car_wash_id,
        )
        .execution_options(populate_existing=True)
    )
    if not service:
        raise AppException(404, "Service not found", ErrorCode.SERVICE_NOT_FOUND)
    return service


async def _ensure_name_free(db: AsyncSession, name: str, car_wash_id: int, exclude_id: Optional[int] = None):
    query = select(WashService.id).where(
        WashService.car_wash_id == car_wash_id,
        WashService.name == name,
    )
    if exclude_id:
        query = query.where(WashService.id != exclude_id)

    if await db.scalar(query):
        raise AppException(409, "A service with this name already exists", ErrorCode.CONFLICT)


async def _build_usages(
    db: AsyncSession,
    usages: list[ProductUsageIn],
    car_wash_id: int,
) -> list[ServiceProductUsage]:
    product_ids = {u.product_id for u in usages}
    if len(product_ids) != len(usages):
        raise AppException(
            400,
            "Each product can appear only once per service",
            ErrorCode.VALIDATION_ERROR,
        )
    if not product_ids:
        return []

    result = await db.execute(
        select(Product.id).where(
            Product.id.in_(product_ids),
            Product.car_wash_id == car_wash_id,
        )
    )
    missing = sorted(product_ids - set(result.scalars().all()))
    if missing:
        raise AppException(
            404,
            "One or more products were not found",
            ErrorCode.PRODUCT_NOT_FOUND,
            {"product_ids": missing},
        )

    return [
        ServiceProductUsage(product_id=u.product_id, quantity=to_quantity(u.quantity))
        for u in usages
    ]


# ---------------- CREATE ----------------
async def create_service(db: AsyncSession, payload: WashServiceCreate, user):
    name = payload.name.strip()
    await _ensure_name_free(db, name, user.car_wash_id)

    service = WashService(
        car_wash_id=user.car_wash_id,
        name=name,
        description=payload.description,
        price=to_decimal(payload.price),
        duration_minutes=payload.duration_minutes,
        product_usages=await _build_usages(db, payload.product_usages, user.car_wash_id),
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(service)
    await db.flush()

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_SERVICE,
        target_name=service.name,
        price=service.price,
    )

    await db.commit()

    logger.info("Wash service created", extra={"service_id": service.id})
    return _map_service(await _load_service(db, service.id, user.car_wash_id))


# ---------------- LIST ----------------
async def list_services(db: AsyncSession, user, *, include_inactive: bool = False):
    query = (
        select(WashService)
        .options(
            selectinload(WashService.product_usages).selectinload(ServiceProductUsage.product)
        )
        .where(WashService.car_wash_id == user.car_wash_id)
    )
    if not include_inactive:
        query = query.where(WashService.is_active.is_(True))

    result = await db.execute(query.order_by(WashService.name))
    return [_map_service(s) for s in result.scalars().all()]


# ---------------- UPDATE ----------------
async def update_service(db: AsyncSession, service_id: int, payload: WashServiceUpdate, user):
    service = await _load_service(db, service_id, user.car_wash_id)
    data = payload.model_dump(exclude_unset=True, exclude={"product_usages"})
    changes = []

    if "name" in data and data["name"] is not None:
        data["name"] = data["name"].strip()
        await _ensure_name_free(db, data["name"], user.car_wash_id, exclude_id=service.id)

    for field, value in data.items():
        if value is None and field != "description":
            continue
        if field == "price":
            value = to_decimal(value)
        if getattr(service, field) != value:
            setattr(service, field, value)
            changes.append(field)

    if payload.product_usages is not None:
        usages = await _build_usages(db, payload.product_usages, user.car_wash_id)
        # flush the removals first: (service_id, product_id) is unique
        service.product_usages.clear()
        await db.flush()
        service.product_usages.extend(usages)
        changes.append("product_usages")

    if not changes:
        return _map_service(service)

    service.updated_by_id = user.id

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_SERVICE,
        target_name=service.name,
        changes=", ".join(changes),
    )

    await db.commit()

    logger.info("Wash service updated", extra={"service_id": service.id, "changes": changes})
    return _map_service(await _load_service(db, service.id, user.car_wash_id))
