from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from lavajato.models.users.user_models import User
from lavajato.models.enums.user_role import UserRole
from lavajato.schemas.users.team_schemas import (
    TeamMemberCreate,
    TeamMemberUpdate,
    TeamMemberOut,
)
from lavajato.core.security import hash_password
from lavajato.utils.activity_helpers import emit_activity
from lavajato.constants.activity_codes import ActivityCode
from lavajato.core.exceptions import AppException
from lavajato.constants.error_codes import ErrorCode
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_ROLES = {role.value for role in UserRole}


def _validate_role(role: str) -> str:
    role = role.lower()
    if role not in ALLOWED_ROLES:
        raise AppException(
            400,
            "Invalid role",
            ErrorCode.USER_ROLE_INVALID,
            {"allowed": sorted(ALLOWED_ROLES)},
        )
    return role


async def _get_member(db: AsyncSession, user_id: int, car_wash_id: int) -> User:
    member = await db.scalar(
        select(User).where(User.id == user_id, User.car_wash_id == car_wash_id)
    )
    if not member:
        raise AppException(404, "Team member not found", ErrorCode.USER_NOT_FOUND)
    return member


# =========================
# LIST
# =========================
async def list_team(db: AsyncSession, admin: User) -> list[TeamMemberOut]:
    result = await db.execute(
        select(User)
        .where(User.car_wash_id == admin.car_wash_id)
        .order_by(User.name, User.id)
    )
    return [TeamMemberOut.model_validate(u) for u in result.scalars().all()]


# =========================
# CREATE
# =========================
async def create_team_member(db: AsyncSession, payload: TeamMemberCreate, admin: User):
    role = _validate_role(payload.role)
    email = payload.email.lower()

    exists = await db.scalar(select(User.id).where(User.username == email))
    if exists:
        raise AppException(409, "User already exists", ErrorCode.USER_EMAIL_EXISTS)

    member = User(
        car_wash_id=admin.car_wash_id,
        username=email,
        name=payload.name,
        password_hash=hash_password(payload.password),
        role=role,
        is_active=True,
        token_version=0,
    )

    db.add(member)
    await db.flush()

    await emit_activity(
        db,
        actor=admin,
        code=ActivityCode.CREATE_TEAM_MEMBER,
        target_email=member.username,
        target_role=role.replace("_", " "),
    )

    await db.commit()
    await db.refresh(member)

    logger.info("Team member created", extra={"user_id": member.id, "role": role})
    return TeamMemberOut.model_validate(member)


# =========================
# UPDATE
# =========================
async def update_team_member(
    db: AsyncSession,
    user_id: int,
    payload: TeamMemberUpdate,
    admin: User,
):
    member = await _get_member(db, user_id, admin.car_wash_id)

    if member.version != payload.version:
        raise AppException(
            409,
            "Team member was modified by another user",
            ErrorCode.CONFLICT,
            {"current_version": member.version},
        )

    if member.id == admin.id and (
        payload.is_active is False
        or (payload.role and payload.role.lower() != member.role)
    ):
        raise AppException(
            400,
            "You cannot change your own role or deactivate yourself",
            ErrorCode.VALIDATION_ERROR,
        )

    changes = []

    if payload.name is not None and payload.name != member.name:
        member.name = payload.name
        changes.append("name")

    if payload.role is not None:
        role = _validate_role(payload.role)
        if role != member.role:
            member.role = role
            changes.append(f"role={role}")

    if payload.is_active is not None and payload.is_active != member.is_active:
        member.is_active = payload.is_active
        changes.append("activated" if payload.is_active else "deactivated")

    if not changes:
        return TeamMemberOut.model_validate(member)

    # role or access changes end every open session of the member
    if member.id != admin.id:
        member.token_version += 1
    member.version += 1

    await emit_activity(
        db,
        actor=admin,
        code=ActivityCode.UPDATE_TEAM_MEMBER,
        target_email=member.username,
        changes=", ".join(changes),
    )

    await db.commit()
    await db.refresh(member)

    logger.info("Team member updated", extra={"user_id": member.id, "changes": changes})
    return TeamMemberOut.model_validate(member)
