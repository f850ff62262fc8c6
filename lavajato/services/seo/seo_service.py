# lavajato/services/seo/seo_service.py

import json
import re
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

from openai import OpenAIError
from sqlalchemy import select, delete, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lavajato.core.llm import LLMClient, LLMResponseError
from lavajato.models.seo.seo_cache_models import SeoContentCache
from lavajato.schemas.seo.seo_schemas import SeoContentRequest, SeoContentOut
from lavajato.services.seo.seo_fallback import build_fallback_content, region_for
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_KEYS = ("answer_snippet", "introduction")

SYSTEM_PROMPT = (
    "Você é um especialista em SEO e copywriting para o mercado brasileiro de lava jatos. "
    "Responda sempre com um único objeto JSON válido, em português brasileiro."
)

TOPIC_HINTS = {
    "tabela-precos": "Inclua uma tabela de preços realista por tipo de serviço e porte de veículo.",
    "como-abrir": "Cubra investimento inicial, documentação, ponto comercial e prazo de retorno.",
    "licenca-ambiental": "Explique licenciamento ambiental, caixa separadora de água e óleo e órgãos responsáveis.",
    "fidelizar": "Traga estratégias de fidelização: cartão fidelidade, pós-venda por WhatsApp e planos mensais.",
    "equipamentos": "Liste os equipamentos essenciais com faixa de preço e vida útil.",
}


def build_cache_key(payload: SeoContentRequest) -> str:
    parts = [
        payload.topic,
        payload.content_type,
        payload.city.name if payload.city else "brasil",
        payload.city.state if payload.city else "",
    ]
    return re.sub(r"\s+", "-", "-".join(parts).lower())


def build_user_prompt(payload: SeoContentRequest) -> str:
    lines = [
        f"TEMA: {payload.topic}",
        f"TIPO DE CONTEÚDO: {payload.content_type}",
        f"PALAVRAS-CHAVE: {', '.join(payload.keywords) or payload.topic.replace('-', ' ')}",
        f"DESCRIÇÃO BASE: {payload.base_description}",
        "",
        "Retorne um JSON com as chaves: answer_snippet (máx 150 caracteres), "
        "statistic {value, source, context}, expert_view {insight, methodology, experience}, "
        "introduction, sections [{title, content, items, highlight}], "
        "reference_table {title, columns, rows, footnote}, "
        "faq [{question, answer, short_answer}], semantic_entities, meta_title, meta_description.",
    ]

    for key, hint in TOPIC_HINTS.items():
        if key in payload.topic:
            lines += ["", hint]
            break

    if payload.city:
        population = (
            f", ~{payload.city.population // 1000} mil habitantes"
            if payload.city.population
            else ""
        )
        lines += [
            "",
            "CONTEXTO LOCAL:",
            f"{payload.city.name} ({payload.city.state.upper()}), região {region_for(payload)}{population}.",
            "Mencione a cidade naturalmente, sem repetição excessiva.",
        ]

    return "\n".join(lines)


def validate_generated(content: dict) -> dict:
    for key in REQUIRED_KEYS:
        value = content.get(key)
        if not isinstance(value, str) or not value.strip():
            raise LLMResponseError(f"Generated content is missing '{key}'")
    return content


def _out(entry: SeoContentCache, *, from_cache: bool) -> SeoContentOut:
    content = entry.content
    if isinstance(content, str):
        content = json.loads(content)
    return SeoContentOut(
        cache_key=entry.cache_key,
        content=content,
        from_cache=from_cache,
        generated_by_ai=entry.generated_by_ai,
        ai_model=entry.ai_model,
        expires_at=entry.expires_at,
    )


async def _get_fresh_entry(db: AsyncSession, cache_key: str) -> Optional[SeoContentCache]:
    now = datetime.now(timezone.utc)
    return await db.scalar(
        select(SeoContentCache).where(
            SeoContentCache.cache_key == cache_key,
            or_(
                SeoContentCache.expires_at.is_(None),
                SeoContentCache.expires_at > now,
            ),
        )
    )


# =====================================================
# READ (never calls the model)
# =====================================================
async def get_content(db: AsyncSession, payload: SeoContentRequest) -> SeoContentOut:
    cache_key = build_cache_key(payload)
    entry = await _get_fresh_entry(db, cache_key)

    if entry:
        return _out(entry, from_cache=True)

    logger.info("SEO cache miss, serving fallback", extra={"cache_key": cache_key})
    return SeoContentOut(
        cache_key=cache_key,
        content=build_fallback_content(payload),
        from_cache=False,
        generated_by_ai=False,
    )


# =====================================================
# GENERATE + UPSERT
# =====================================================
async def generate_content(
    db: AsyncSession,
    payload: SeoContentRequest,
    llm: Optional[LLMClient],
    *,
    ttl_days: int = 30,
) -> SeoContentOut:
    cache_key = build_cache_key(payload)

    if not payload.force_regenerate:
        entry = await _get_fresh_entry(db, cache_key)
        if entry:
            return _out(entry, from_cache=True)

    content = None
    ai_model = None
    started = time.perf_counter()

    if llm is None:
        logger.warning("No LLM client configured, using fallback content", extra={"cache_key": cache_key})
    else:
        try:
            content = validate_generated(
                await llm.generate_json(SYSTEM_PROMPT, build_user_prompt(payload))
            )
            ai_model = llm.model
        except (OpenAIError, LLMResponseError) as e:
            logger.warning(
                "SEO generation failed, using fallback content",
                extra={"cache_key": cache_key, "error": str(e)},
            )

    generation_ms = int((time.perf_counter() - started) * 1000)
    generated_by_ai = content is not None
    if content is None:
        content = build_fallback_content(payload)

    values = {
        "topic": payload.topic,
        "content_type": payload.content_type,
        "content": content,
        "generated_by_ai": generated_by_ai,
        "ai_model": ai_model,
        "generation_ms": generation_ms if generated_by_ai else None,
        "expires_at": datetime.now(timezone.utc) + timedelta(days=ttl_days),
    }

    entry = await upsert_entry(db, cache_key, values)

    logger.info(
        "SEO content stored",
        extra={
            "cache_key": cache_key,
            "generated_by_ai": generated_by_ai,
            "generation_ms": generation_ms,
        },
    )
    return _out(entry, from_cache=False)


async def upsert_entry(db: AsyncSession, cache_key: str, values: dict) -> SeoContentCache:
    entry = await db.scalar(
        select(SeoContentCache).where(SeoContentCache.cache_key == cache_key)
    )

    if entry is None:
        entry = SeoContentCache(cache_key=cache_key, **values)
        db.add(entry)
        try:
            await db.commit()
        except IntegrityError:
            # another worker inserted the same key first
            await db.rollback()
            entry = await db.scalar(
                select(SeoContentCache).where(SeoContentCache.cache_key == cache_key)
            )
            for field, value in values.items():
                setattr(entry, field, value)
            await db.commit()
    else:
        for field, value in values.items():
            setattr(entry, field, value)
        await db.commit()

    await db.refresh(entry)
    return entry


# =====================================================
# MAINTENANCE
# =====================================================
async def purge_expired_content(db: AsyncSession) -> int:
    result = await db.execute(
        delete(SeoContentCache).where(
            SeoContentCache.expires_at.is_not(None),
            SeoContentCache.expires_at <= datetime.now(timezone.utc),
        )
    )
    await db.commit()
    return result.rowcount or 0
