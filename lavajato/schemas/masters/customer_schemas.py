# lavajato/schemas/masters/customer_schemas.py

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class CustomerCreate(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None

    version: int


class CustomerOut(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    loyalty_points: int
    version: int

    created_at: datetime

    class Config:
        from_attributes = True


# =========================
# LOYALTY
# =========================
class LoyaltyRedeem(BaseModel):
    rewards: int = Field(default=1, ge=1, le=10)
    version: int


class LoyaltyOut(BaseModel):
    customer_id: int
    loyalty_points: int
    reward_points: int
    rewards_available: int
    points_to_next_reward: int
    version: int
