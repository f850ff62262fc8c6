# lavajato/schemas/inventory/product_schemas.py

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal


class ProductCreate(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    unit: str = Field(default="un", max_length=20)
    quantity: Decimal = Field(default=Decimal("0"), ge=0)
    reorder_point: Decimal = Field(default=Decimal("0"), ge=0)
    cost_per_unit: Decimal = Field(default=Decimal("0"), ge=0)


class StockAdjust(BaseModel):
    delta: Decimal
    reason: str = Field(min_length=2, max_length=255)

    @field_validator("delta")
    @classmethod
    def non_zero(cls, v: Decimal) -> Decimal:
        if v == 0:
            raise ValueError("delta must not be zero")
        return v


class ProductOut(BaseModel):
    id: int
    name: str
    unit: str
    quantity: float
    reorder_point: float
    cost_per_unit: float
    is_active: bool
    low_stock: bool = False

    class Config:
        from_attributes = True
