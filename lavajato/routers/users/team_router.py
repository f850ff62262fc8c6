from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.db import get_db
from lavajato.schemas.users.team_schemas import (
    TeamMemberCreate,
    TeamMemberUpdate,
    TeamMemberOut,
)
from lavajato.services.users.team_service import (
    list_team,
    create_team_member,
    update_team_member,
)
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/team", tags=["Team"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[List[TeamMemberOut]])
async def list_team_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_permission("TEAM_VIEW")),
):
    members = await list_team(db, user)
    return success_response("Team fetched successfully", members)


@router.post("", response_model=APIResponse[TeamMemberOut], status_code=201)
async def create_team_member_api(
    payload: TeamMemberCreate,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_permission("TEAM_MANAGE")),
):
    logger.info("Create team member", extra={"email": payload.email, "role": payload.role})
    member = await create_team_member(db, payload, admin)
    return success_response("Team member created successfully", member)


@router.patch("/{user_id}", response_model=APIResponse[TeamMemberOut])
async def update_team_member_api(
    user_id: int,
    payload: TeamMemberUpdate,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_permission("TEAM_MANAGE")),
):
    logger.info("Update team member", extra={"user_id": user_id})
    member = await update_team_member(db, user_id, payload, admin)
    return success_response("Team member updated successfully", member)
