# lavajato/routers/masters/customer_router.py

from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.config import LOYALTY_REWARD_POINTS
from lavajato.core.db import get_db
from lavajato.schemas.masters.customer_schemas import (
    CustomerCreate,
    CustomerUpdate,
    CustomerOut,
    LoyaltyRedeem,
    LoyaltyOut,
)
from lavajato.services.masters.customer_service import (
    create_customer,
    get_customer,
    list_customers,
    update_customer,
)
from lavajato.services.masters.loyalty_service import (
    get_loyalty,
    redeem_loyalty,
)
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, PageData, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/customers", tags=["Customers"])
logger = get_logger(__name__)


@router.post("", response_model=APIResponse[CustomerOut], status_code=201)
async def create_customer_api(
    payload: CustomerCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("CUSTOMERS_MANAGE")),
):
    logger.info("Create customer", extra={"customer_name": payload.name})
    customer = await create_customer(db, payload, user)
    return success_response("Customer created successfully", customer)


@router.get("", response_model=APIResponse[PageData[CustomerOut]])
async def list_customers_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    logger.info(
        "List customers",
        extra={"search": search, "page": page, "page_size": page_size},
    )
    data = await list_customers(db, user, search=search, page=page, page_size=page_size)
    return success_response("Customers fetched successfully", data)


@router.get("/{customer_id}", response_model=APIResponse[CustomerOut])
async def get_customer_api(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
):
    logger.info("Get customer", extra={"customer_id": customer_id})
    customer = await get_customer(db, customer_id, user)
    return success_response("Customer fetched successfully", customer)


@router.patch("/{customer_id}", response_model=APIResponse[CustomerOut])
async def update_customer_api(
    customer_id: int,
    payload: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("CUSTOMERS_MANAGE")),
):
    logger.info("Update customer", extra={"customer_id": customer_id})
    customer = await update_customer(db, customer_id, payload, user)
    return success_response("Customer updated successfully", customer)


# =========================
# LOYALTY
# =========================
@router.get("/{customer_id}/loyalty", response_model=APIResponse[LoyaltyOut])
async def get_loyalty_api(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ORDERS_VIEW")),
):
    card = await get_loyalty(db, customer_id, user, reward_points=LOYALTY_REWARD_POINTS)
    return success_response("Loyalty card fetched successfully", card)


@router.post("/{customer_id}/loyalty/redeem", response_model=APIResponse[LoyaltyOut])
async def redeem_loyalty_api(
    customer_id: int,
    payload: LoyaltyRedeem,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("LOYALTY_REDEEM")),
):
    logger.info(
        "Redeem loyalty",
        extra={"customer_id": customer_id, "rewards": payload.rewards},
    )
    card = await redeem_loyalty(
        db, customer_id, payload, user, reward_points=LOYALTY_REWARD_POINTS
    )
    return success_response("Loyalty reward redeemed successfully", card)
