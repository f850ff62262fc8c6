# lavajato/services/masters/customer_service.py

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_

from lavajato.models.masters.customer_models import Customer
from lavajato.schemas.masters.customer_schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerOut,
)
from lavajato.core.exceptions import AppException
from lavajato.constants.error_codes import ErrorCode
from lavajato.utils.activity_helpers import emit_activity
from lavajato.constants.activity_codes import ActivityCode
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


async def get_customer_or_404(db: AsyncSession, customer_id: int, car_wash_id: int) -> Customer:
    customer = await db.scalar(
        select(Customer).where(
            Customer.id == customer_id,
            Customer.car_wash_id == car_wash_id,
        )
    )
    if not customer:
        raise AppException(
            404,
            "Customer not found",
            ErrorCode.CUSTOMER_NOT_FOUND,
        )
    return customer


# =========================
# CREATE
# =========================
async def create_customer(db: AsyncSession, payload: CustomerCreate, user):
    customer = Customer(
        car_wash_id=user.car_wash_id,
        name=payload.name.strip(),
        phone=payload.phone,
        email=payload.email,
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(customer)
    await db.flush()

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_CUSTOMER,
        target_name=customer.name,
    )

    await db.commit()
    await db.refresh(customer)

    logger.info("Customer created", extra={"customer_id": customer.id})
    return CustomerOut.model_validate(customer)


# =========================
# GET
# =========================
async def get_customer(db: AsyncSession, customer_id: int, user):
    return CustomerOut.model_validate(
        await get_customer_or_404(db, customer_id, user.car_wash_id)
    )


# =========================
# LIST
# =========================
async def list_customers(
    db: AsyncSession,
    user,
    *,
    search: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
):
    conditions = [Customer.car_wash_id == user.car_wash_id]
    if search:
        pattern = f"%{search.strip()}%"
        conditions.append(
            or_(Customer.name.ilike(pattern), Customer.phone.ilike(pattern))
        )

    total = await db.scalar(select(func.count(Customer.id)).where(*conditions))
    result = await db.execute(
        select(Customer)
        .where(*conditions)
        .order_by(Customer.name, Customer.id)
        .limit(page_size)
        .offset((page - 1) * page_size)
    )

    return {
        "total": total or 0,
        "items": [CustomerOut.model_validate(c) for c in result.scalars().all()],
    }


# =========================
# UPDATE (optimistic lock)
# =========================
async def update_customer(db: AsyncSession, customer_id: int, payload: CustomerUpdate, user):
    customer = await get_customer_or_404(db, customer_id, user.car_wash_id)

    if customer.version != payload.version:
        raise AppException(
            409,
            "Customer was modified by another user",
            ErrorCode.CUSTOMER_VERSION_CONFLICT,
            {"current_version": customer.version},
        )

    data = payload.model_dump(exclude_unset=True, exclude={"version"})
    changes = [field for field, value in data.items() if getattr(customer, field) != value]

    if not changes:
        return CustomerOut.model_validate(customer)

    for field in changes:
        setattr(customer, field, data[field])

    customer.version += 1
    customer.updated_by_id = user.id

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.UPDATE_CUSTOMER,
        target_name=customer.name,
        changes=", ".join(changes),
    )

    await db.commit()
    await db.refresh(customer)

    logger.info("Customer updated", extra={"customer_id": customer.id, "changes": changes})
    return CustomerOut.model_validate(customer)
