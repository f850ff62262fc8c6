from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal


class RegisterRequest(BaseModel):
    car_wash_name: str = Field(min_length=2, max_length=255)
    slug: str = Field(min_length=2, max_length=120, pattern=r"^[a-z0-9-]+$")
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = Field(default=None, min_length=2, max_length=2)

    name: str = Field(min_length=2, max_length=150)
    email: EmailStr
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str]
    token_type: Literal["bearer"] = "bearer"
    role: str


class CarWashOut(BaseModel):
    id: int
    name: str
    slug: str
    phone: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None

    class Config:
        from_attributes = True


class MeOut(BaseModel):
    id: int
    username: EmailStr
    name: str
    role: str
    car_wash: CarWashOut

    class Config:
        from_attributes = True
