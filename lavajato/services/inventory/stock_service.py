from collections import defaultdict
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.models.inventory.product_models import Product
from lavajato.models.masters.wash_service_models import ServiceProductUsage
from lavajato.utils.decimal_utils import to_quantity
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


async def consumption_for_services(
    db: AsyncSession,
    service_ids: list[int],
) -> dict[int, Decimal]:
    """Total quantity per product consumed by executing `service_ids` (repeats count)."""
    if not service_ids:
        return {}

    result = await db.execute(
        select(ServiceProductUsage).where(
            ServiceProductUsage.service_id.in_(set(service_ids))
        )
    )
    usages_by_service: dict[int, list[ServiceProductUsage]] = defaultdict(list)
    for usage in result.scalars().all():
        usages_by_service[usage.service_id].append(usage)

    consumption: dict[int, Decimal] = defaultdict(lambda: Decimal("0.000"))
    for service_id in service_ids:
        for usage in usages_by_service.get(service_id, []):
            consumption[usage.product_id] += to_quantity(usage.quantity)

    return dict(consumption)


async def deduct_stock_for_order(db: AsyncSession, order) -> dict[int, Decimal]:
    """
    Decrement inventory for every product used by the order's services.

    Runs inside the caller's transaction. Each decrement is a single
    `quantity = quantity - n` statement so concurrent deductions never
    overwrite each other.
    """
    service_ids = [item.service_id for item in order.items if item.service_id]
    consumption = await consumption_for_services(db, service_ids)

    for product_id, quantity in consumption.items():
        await db.execute(
            update(Product)
            .where(
                Product.id == product_id,
                Product.car_wash_id == order.car_wash_id,
            )
            .values(quantity=Product.quantity - quantity)
            .execution_options(synchronize_session=False)
        )

    logger.info(
        "Stock deducted for service order",
        extra={
            "order_id": order.id,
            "products": len(consumption),
        },
    )
    return consumption
