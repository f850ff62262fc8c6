# lavajato/schemas/masters/wash_service_schemas.py

from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal


class ProductUsageIn(BaseModel):
    product_id: int
    quantity: Decimal = Field(gt=0)


class WashServiceCreate(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    description: Optional[str] = Field(default=None, max_length=500)
    price: Decimal = Field(gt=0)
    duration_minutes: int = Field(default=30, gt=0)
    product_usages: List[ProductUsageIn] = []


class WashServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    description: Optional[str] = Field(default=None, max_length=500)
    price: Optional[Decimal] = Field(default=None, gt=0)
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    is_active: Optional[bool] = None
    # when given, replaces the whole list
    product_usages: Optional[List[ProductUsageIn]] = None


class ProductUsageOut(BaseModel):
    product_id: int
    product_name: str
    unit: str
    quantity: float


class WashServiceOut(BaseModel):
    id: int
    name: str
    description: Optional[str]
    price: float
    duration_minutes: int
    is_active: bool
    product_usages: List[ProductUsageOut]
