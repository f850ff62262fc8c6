from fastapi import Depends, HTTPException, Header, status, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from lavajato.core.db import get_db
from lavajato.core.logging import car_wash_id_var
from lavajato.core.security import decode_access_token
from lavajato.models.users.user_models import User
from lavajato.utils.logger import get_logger

logger = get_logger("auth.guard")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def bearer_token(authorization: str) -> str:
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        logger.warning("Missing bearer token")
        raise _unauthorized("Invalid authorization header")
    return token.strip()


async def get_current_user(
    request: Request,
    authorization: str = Header(...),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the staff member behind the bearer token and pin their car wash to the request."""
    claims = decode_access_token(bearer_token(authorization))

    user = await db.scalar(
        select(User).where(User.username == claims.get("sub"))
    )

    if not user:
        logger.warning("Token user not found", extra={"username": claims.get("sub")})
        raise _unauthorized("User not found")

    if not user.is_active or not user.car_wash.is_active:
        logger.warning("Inactive user access blocked", extra={"user_id": user.id})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")

    # logout and role changes bump token_version; a token from another tenant never matches
    if (
        user.token_version != claims.get("token_version")
        or user.car_wash_id != claims.get("car_wash_id")
    ):
        logger.warning("Stale token rejected", extra={"user_id": user.id})
        raise _unauthorized("Session expired")

    request.state.user = user
    car_wash_id_var.set(str(user.car_wash_id))
    return user
