# lavajato/schemas/support/activity_schemas.py

from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from fastapi import Query

from lavajato.constants.activity_codes import ActivityCode


class UserActivityFilters(BaseModel):
    user_id: Optional[int] = Query(None)
    username: Optional[str] = Query(None)
    activity_code: Optional[ActivityCode] = Query(None)
    order_code: Optional[int] = Query(None, ge=1)

    page: int = Query(1, ge=1)
    page_size: int = Query(20, ge=1, le=100)

    sort_by: str = Query("created_at")
    sort_order: str = Query("desc")


class UserActivityOut(BaseModel):
    id: int
    user_id: Optional[int]
    username_snapshot: str
    activity_code: str
    order_code: Optional[int] = None
    message: str
    created_at: datetime

    class Config:
        from_attributes = True
