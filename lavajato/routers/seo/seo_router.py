# lavajato/routers/seo/seo_router.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.config import SEO_CACHE_TTL_DAYS
from lavajato.core.db import get_db
from lavajato.core.exceptions import AppException
from lavajato.constants.error_codes import ErrorCode
from lavajato.core.llm import get_llm
from lavajato.schemas.seo.seo_schemas import (
    CityContext,
    ContentType,
    SeoContentRequest,
    SeoContentOut,
)
from lavajato.services.seo.seo_service import get_content, generate_content
from lavajato.utils.check_roles import require_permission
from lavajato.utils.response import APIResponse, success_response
from lavajato.utils.logger import get_logger

router = APIRouter(prefix="/seo", tags=["SEO Content"])
logger = get_logger(__name__)


@router.get("/content", response_model=APIResponse[SeoContentOut])
async def get_content_api(
    topic: str = Query(..., min_length=2),
    content_type: ContentType = Query(...),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None, min_length=2, max_length=2),
    region: Optional[str] = Query(None),
    base_description: str = Query(""),
    db: AsyncSession = Depends(get_db),
):
    if bool(city) != bool(state):
        raise AppException(
            400,
            "city and state must be given together",
            ErrorCode.SEO_CONTENT_INVALID,
        )

    payload = SeoContentRequest(
        topic=topic,
        content_type=content_type,
        city=CityContext(name=city, state=state, region=region) if city else None,
        base_description=base_description,
    )
    content = await get_content(db, payload)
    return success_response("SEO content fetched", content)


@router.post("/content", response_model=APIResponse[SeoContentOut])
async def generate_content_api(
    payload: SeoContentRequest,
    db: AsyncSession = Depends(get_db),
    llm=Depends(get_llm),
    user=Depends(require_permission("SEO_MANAGE")),
):
    logger.info(
        "Generate SEO content",
        extra={
            "topic": payload.topic,
            "content_type": payload.content_type,
            "force_regenerate": payload.force_regenerate,
        },
    )
    content = await generate_content(db, payload, llm, ttl_days=SEO_CACHE_TTL_DAYS)
    return success_response("SEO content generated", content)
