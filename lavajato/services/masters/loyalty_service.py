# lavajato/services/masters/loyalty_service.py

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.models.masters.customer_models import Customer
from lavajato.schemas.masters.customer_schemas import LoyaltyRedeem, LoyaltyOut
from lavajato.services.masters.customer_service import get_customer_or_404
from lavajato.core.exceptions import AppException
from lavajato.constants.error_codes import ErrorCode
from lavajato.utils.activity_helpers import emit_activity
from lavajato.constants.activity_codes import ActivityCode
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


def _loyalty_card(customer: Customer, reward_points: int) -> LoyaltyOut:
    points = customer.loyalty_points or 0
    return LoyaltyOut(
        customer_id=customer.id,
        loyalty_points=points,
        reward_points=reward_points,
        rewards_available=points // reward_points,
        points_to_next_reward=reward_points - points % reward_points,
        version=customer.version,
    )


# =========================
# GET
# =========================
async def get_loyalty(db: AsyncSession, customer_id: int, user, *, reward_points: int) -> LoyaltyOut:
    customer = await get_customer_or_404(db, customer_id, user.car_wash_id)
    return _loyalty_card(customer, reward_points)


# =========================
# REDEEM
# =========================
async def redeem_loyalty(
    db: AsyncSession,
    customer_id: int,
    payload: LoyaltyRedeem,
    user,
    *,
    reward_points: int,
) -> LoyaltyOut:
    """
    Trade points for free washes.

    The balance only drops through a conditional UPDATE on the version the
    attendant saw, so two counters redeeming the same card cannot both win.
    """
    customer = await get_customer_or_404(db, customer_id, user.car_wash_id)

    if customer.version != payload.version:
        raise AppException(
            409,
            "Customer was modified by another user",
            ErrorCode.CUSTOMER_VERSION_CONFLICT,
            {"current_version": customer.version},
        )

    cost = payload.rewards * reward_points
    if customer.loyalty_points < cost:
        raise AppException(
            400,
            f"Customer needs {cost} points to redeem, has {customer.loyalty_points}",
            ErrorCode.LOYALTY_INSUFFICIENT_POINTS,
            {"required_points": cost, "current_points": customer.loyalty_points},
        )

    result = await db.execute(
        update(Customer)
        .where(
            Customer.id == customer.id,
            Customer.version == payload.version,
            Customer.loyalty_points >= cost,
        )
        .values(
            loyalty_points=Customer.loyalty_points - cost,
            version=Customer.version + 1,
            updated_by_id=user.id,
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        await db.rollback()
        raise AppException(
            409,
            "Customer was modified by another user",
            ErrorCode.CUSTOMER_VERSION_CONFLICT,
        )

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.REDEEM_LOYALTY,
        target_name=customer.name,
        points=cost,
    )

    await db.commit()
    await db.refresh(customer)

    logger.info(
        "Loyalty redeemed",
        extra={"customer_id": customer.id, "points": cost, "balance": customer.loyalty_points},
    )
    return _loyalty_card(customer, reward_points)
