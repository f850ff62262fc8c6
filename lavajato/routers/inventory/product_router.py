# lavajato/routers/inventory/product_router.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.db import get_db
from lavajato.schemas.inventory.product_schemas import (
    ProductCreate,
    StockAdjust,
    ProductOut,
)
from lavajato.services.inventory.product_service import (
    create_product,
    list_products,
    adjust_stock,
)
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/products", tags=["Inventory"])
logger = get_logger(__name__)


@router.post("", response_model=APIResponse[ProductOut], status_code=201)
async def create_product_api(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("STOCK_MANAGE")),
):
    logger.info("Create product", extra={"product_name": payload.name})
    product = await create_product(db, payload, user)
    return success_response("Product created successfully", product)


@router.get("", response_model=APIResponse[List[ProductOut]])
async def list_products_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("STOCK_MANAGE")),
):
    products = await list_products(db, user)
    return success_response("Products fetched successfully", products)


@router.get("/low-stock", response_model=APIResponse[List[ProductOut]])
async def list_low_stock_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("STOCK_MANAGE")),
):
    products = await list_products(db, user, low_stock_only=True)
    logger.info("Low stock products", extra={"count": len(products)})
    return success_response("Low stock products fetched successfully", products)


@router.post("/{product_id}/adjust", response_model=APIResponse[ProductOut])
async def adjust_stock_api(
    product_id: int,
    payload: StockAdjust,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("STOCK_MANAGE")),
):
    logger.info(
        "Adjust stock",
        extra={"product_id": product_id, "delta": str(payload.delta)},
    )
    product = await adjust_stock(db, product_id, payload, user)
    return success_response("Stock adjusted successfully", product)
