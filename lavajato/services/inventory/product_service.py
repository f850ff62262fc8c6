# lavajato/services/inventory/product_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from lavajato.models.inventory.product_models import Product
from lavajato.schemas.inventory.product_schemas import (
    ProductCreate,
    StockAdjust,
    ProductOut,
)
from lavajato.core.exceptions import AppException
from lavajato.constants.error_codes import ErrorCode
from lavajato.constants.activity_codes import ActivityCode
from lavajato.utils.activity_helpers import emit_activity
from lavajato.utils.decimal_utils import to_decimal, to_quantity
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


def _map_product(product: Product) -> ProductOut:
    return ProductOut(
        id=product.id,
        name=product.name,
        unit=product.unit,
        quantity=float(product.quantity),
        reorder_point=float(product.reorder_point),
        cost_per_unit=float(product.cost_per_unit),
        is_active=product.is_active,
        low_stock=product.quantity <= product.reorder_point,
    )


async def _load_product(db: AsyncSession, product_id: int, car_wash_id: int) -> Product:
    product = await db.scalar(
        select(Product)
        .where(
            Product.id == product_id,
            Product.car_wash_id == car_wash_id,
        )
        .execution_options(populate_existing=True)
    )
    if not product:
        raise AppException(404, "Product not found", ErrorCode.PRODUCT_NOT_FOUND)
    return product


# ---------------- CREATE ----------------
async def create_product(db: AsyncSession, payload: ProductCreate, user):
    product = Product(
        car_wash_id=user.car_wash_id,
        name=payload.name.strip(),
        unit=payload.unit,
        quantity=to_quantity(payload.quantity),
        reorder_point=to_quantity(payload.reorder_point),
        cost_per_unit=to_decimal(payload.cost_per_unit),
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(product)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "A product with this name already exists",
            ErrorCode.CONFLICT,
        )

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.CREATE_PRODUCT,
        target_name=product.name,
    )

    await db.commit()

    logger.info("Product created", extra={"product_id": product.id})
    return _map_product(await _load_product(db, product.id, user.car_wash_id))


# ---------------- LIST ----------------
async def list_products(db: AsyncSession, user, *, low_stock_only: bool = False):
    query = select(Product).where(
        Product.car_wash_id == user.car_wash_id,
        Product.is_active.is_(True),
    )
    if low_stock_only:
        query = query.where(Product.quantity <= Product.reorder_point)

    result = await db.execute(query.order_by(Product.name))
    return [_map_product(p) for p in result.scalars().all()]


# ---------------- ADJUST ----------------
async def adjust_stock(db: AsyncSession, product_id: int, payload: StockAdjust, user):
    """Manual stock correction (purchase received, loss, recount)."""
    product = await _load_product(db, product_id, user.car_wash_id)
    delta = to_quantity(payload.delta)

    await db.execute(
        update(Product)
        .where(Product.id == product.id)
        .values(
            quantity=Product.quantity + delta,
            updated_by_id=user.id,
        )
        .execution_options(synchronize_session=False)
    )

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.ADJUST_STOCK,
        target_name=product.name,
        delta=f"{delta:+}",
        unit=product.unit,
        reason=payload.reason,
    )

    await db.commit()

    logger.info(
        "Stock adjusted",
        extra={"product_id": product.id, "delta": str(delta)},
    )
    return _map_product(await _load_product(db, product.id, user.car_wash_id))
