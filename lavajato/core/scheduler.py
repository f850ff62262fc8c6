from apscheduler.schedulers.asyncio import AsyncIOScheduler

from lavajato.core.db import Database
from lavajato.services.auth.auth_service import purge_refresh_tokens
from lavajato.services.seo.seo_service import purge_expired_content
from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


def build_scheduler(database: Database) -> AsyncIOScheduler:
    scheduler = AsyncIOScheduler()

    @scheduler.scheduled_job("cron", hour=3, minute=0)  # daily at 03:00
    async def purge_seo_cache_job():
        async with database.session() as db:
            removed = await purge_expired_content(db)
        logger.info("Expired SEO content purged", extra={"removed": removed})

    @scheduler.scheduled_job("cron", hour=3, minute=15)  # daily at 03:15
    async def purge_refresh_tokens_job():
        async with database.session() as db:
            removed = await purge_refresh_tokens(db)
        logger.info("Stale refresh tokens purged", extra={"removed": removed})

    return scheduler
