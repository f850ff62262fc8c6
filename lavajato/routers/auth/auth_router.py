from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.db import get_db
from lavajato.schemas.auth.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    MeOut,
)
from lavajato.services.auth.auth_service import (
    register_car_wash,
    login_user,
    refresh_tokens,
    logout_user,
)
from lavajato.utils.get_user import get_current_user
from lavajato.utils.response import success_response
from lavajato.utils.logger import get_logger

logger = get_logger("auth.router")

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=201)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Register attempt", extra={"slug": payload.slug, "email": payload.email})

    tokens = await register_car_wash(db, payload)

    return success_response("Car wash registered", tokens)


@router.post("/login")
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Login attempt", extra={"email": payload.email})

    tokens = await login_user(db, payload.email, payload.password)

    return success_response("Login successful", tokens)


@router.post("/refresh")
async def refresh(
    payload: RefreshRequest,
    db: AsyncSession = Depends(get_db),
):
    logger.info("Token refresh attempt")

    tokens = await refresh_tokens(db, payload.refresh_token)

    return success_response("Token refreshed", tokens)


@router.post("/logout")
async def logout(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    logger.info(
        "Logout request",
        extra={"user_id": current_user.id, "email": current_user.username},
    )

    await logout_user(db, current_user)

    return success_response("Logged out successfully")


@router.get("/me")
async def me(current_user=Depends(get_current_user)):
    return success_response("Current user", MeOut.model_validate(current_user))
