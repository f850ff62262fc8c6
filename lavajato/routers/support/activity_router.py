# lavajato/routers/support/activity_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.db import get_db
from lavajato.schemas.support.activity_schemas import UserActivityFilters, UserActivityOut
from lavajato.services.support.activity_service import list_user_activities
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, PageData, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/activities", tags=["User Activities"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[PageData[UserActivityOut]])
async def list_user_activities_api(
    filters: UserActivityFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("ACTIVITY_VIEW")),
):
    logger.info(
        "List user activities requested",
        extra=filters.model_dump(exclude_none=True),
    )

    result = await list_user_activities(
        db=db,
        filters=filters,
        car_wash_id=user.car_wash_id,
    )

    return success_response(
        "User activities fetched successfully",
        result,
    )
