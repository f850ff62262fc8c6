from datetime import datetime, timezone

from sqlalchemy import select, update, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from lavajato.models.tenants.car_wash_models import CarWash
from lavajato.models.users.user_models import User, RefreshToken
from lavajato.models.enums.user_role import UserRole
from lavajato.schemas.auth.auth_schemas import RegisterRequest
from lavajato.core.security import hash_password, verify_password, access_token_for, new_refresh_token
from lavajato.core.exceptions import AppException
from lavajato.constants.error_codes import ErrorCode
from lavajato.utils.activity_helpers import emit_activity
from lavajato.constants.activity_codes import ActivityCode
from lavajato.utils.logger import get_logger

logger = get_logger("auth.service")


def _new_refresh_token(user_id: int) -> RefreshToken:
    token, expires_at = new_refresh_token()
    return RefreshToken(user_id=user_id, token=token, expires_at=expires_at)


def _token_payload(user: User, refresh: RefreshToken) -> dict:
    return {
        "auth": {
            "access_token": access_token_for(user),
            "refresh_token": refresh.token,
            "token_type": "bearer",
        },
        "user": {
            "id": user.id,
            "username": user.username,
            "name": user.name,
            "role": user.role,
            "car_wash_id": user.car_wash_id,
        },
    }


# =====================================================
# REGISTER (new car wash + its first admin)
# =====================================================
async def register_car_wash(db: AsyncSession, payload: RegisterRequest):
    email = payload.email.lower()
    logger.info("Registering car wash", extra={"slug": payload.slug, "email": email})

    if await db.scalar(select(CarWash.id).where(CarWash.slug == payload.slug)):
        raise AppException(409, "Car wash slug already in use", ErrorCode.CAR_WASH_SLUG_EXISTS)

    if await db.scalar(select(User.id).where(User.username == email)):
        raise AppException(409, "Email already registered", ErrorCode.USER_EMAIL_EXISTS)

    car_wash = CarWash(
        name=payload.car_wash_name,
        slug=payload.slug,
        phone=payload.phone,
        city=payload.city,
        state=payload.state.upper() if payload.state else None,
    )
    db.add(car_wash)
    await db.flush()

    user = User(
        car_wash_id=car_wash.id,
        username=email,
        name=payload.name,
        password_hash=hash_password(payload.password),
        role=UserRole.ADMIN.value,
        is_active=True,
        token_version=0,
        last_login=datetime.now(timezone.utc),
    )
    db.add(user)
    await db.flush()

    refresh = _new_refresh_token(user.id)
    db.add(refresh)

    await emit_activity(
        db,
        actor=user,
        code=ActivityCode.REGISTER_CAR_WASH,
        target_name=car_wash.name,
    )

    await db.commit()

    logger.info(
        "Car wash registered",
        extra={"car_wash_id": car_wash.id, "user_id": user.id},
    )
    return _token_payload(user, refresh)


# =====================================================
# LOGIN
# =====================================================
async def login_user(db: AsyncSession, email: str, password: str):
    email = email.lower()
    logger.info("Authenticating user", extra={"email": email})

    result = await db.execute(
        select(User).where(User.username == email)
    )
    user = result.scalars().first()

    if not user or not verify_password(password, user.password_hash):
        logger.warning("Invalid credentials", extra={"email": email})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    if not user.is_active or not user.car_wash.is_active:
        logger.warning("Inactive user login blocked", extra={"email": email})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    user.last_login = datetime.now(timezone.utc)

    refresh = _new_refresh_token(user.id)
    db.add(refresh)

    await emit_activity(db, actor=user, code=ActivityCode.LOGIN)

    await db.commit()

    logger.info("Login successful", extra={"user_id": user.id})
    return _token_payload(user, refresh)


# =====================================================
# REFRESH
# =====================================================
async def refresh_tokens(db: AsyncSession, refresh_token_value: str):
    logger.info("Refreshing token")

    result = await db.execute(
        select(RefreshToken).where(
            RefreshToken.token == refresh_token_value,
            RefreshToken.revoked.is_(False),
            RefreshToken.expires_at > datetime.now(timezone.utc),
        )
    )
    token = result.scalars().first()

    if not token:
        logger.warning("Invalid refresh token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    user = await db.get(User, token.user_id)
    if not user or not user.is_active:
        logger.warning("Refresh blocked for inactive user", extra={"user_id": token.user_id})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User invalid or inactive",
        )

    # rotate: a refresh token is single use
    token.revoked = True
    new_refresh = _new_refresh_token(user.id)
    db.add(new_refresh)

    await db.commit()

    logger.info("Token refreshed", extra={"user_id": user.id})

    return {
        "access_token": access_token_for(user),
        "refresh_token": new_refresh.token,
        "token_type": "bearer",
        "role": user.role,
    }


# =====================================================
# LOGOUT
# =====================================================
async def logout_user(db: AsyncSession, user: User):
    logger.info("Logging out user", extra={"user_id": user.id})

    # invalidates every access token already issued
    user.token_version += 1

    await db.execute(
        update(RefreshToken)
        .where(RefreshToken.user_id == user.id)
        .values(revoked=True)
    )

    await emit_activity(db, actor=user, code=ActivityCode.LOGOUT)

    await db.commit()

    logger.info("Logout successful", extra={"user_id": user.id})


# =====================================================
# MAINTENANCE
# =====================================================
async def purge_refresh_tokens(db: AsyncSession) -> int:
    """Delete refresh tokens that are revoked or past their expiry."""
    result = await db.execute(
        delete(RefreshToken).where(
            or_(
                RefreshToken.revoked.is_(True),
                RefreshToken.expires_at <= datetime.now(timezone.utc),
            )
        )
    )
    await db.commit()
    return result.rowcount or 0
