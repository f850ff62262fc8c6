from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


# =========================
# CREATE / UPDATE
# =========================
class TeamMemberCreate(BaseModel):
    email: EmailStr
    name: str = Field(min_length=2, max_length=150)
    password: str = Field(min_length=6)
    role: str


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=150)
    role: Optional[str] = None
    is_active: Optional[bool] = None
    version: int


# =========================
# RESPONSE
# =========================
class TeamMemberOut(BaseModel):
    id: int
    username: EmailStr
    name: str
    role: str
    is_active: bool
    last_login: Optional[datetime]
    version: int

    class Config:
        from_attributes = True
