# lavajato/routers/dashboard/dashboard_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.db import get_db
from lavajato.schemas.dashboard.dashboard_schemas import DashboardOut
from lavajato.services.dashboard.dashboard_service import get_dashboard
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[DashboardOut])
async def dashboard_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("DASHBOARD_VIEW")),
):
    logger.info("Dashboard requested")
    summary = await get_dashboard(db, user)
    return success_response("Dashboard fetched successfully", summary)
