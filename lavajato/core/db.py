# lavajato/core/db.py

import ssl
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from lavajato.utils.logger import get_logger

logger = get_logger(__name__)

# =====================================================
# BASE
# =====================================================
Base = declarative_base()


# =====================================================
# DATABASE (owned by the application lifespan)
# =====================================================
class Database:
    """Async engine + session factory with an explicit start/stop lifecycle."""

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        ssl_verify: bool = True,
        echo_pool: bool = False,
    ):
        self.url = url
        self.is_sqlite = url.startswith("sqlite")

        connect_args = {}
        pool_args = {}

        if self.is_sqlite:
            connect_args = {"check_same_thread": False}
        else:
            ssl_ctx = ssl.create_default_context()
            if not ssl_verify:
                ssl_ctx.check_hostname = False
                ssl_ctx.verify_mode = ssl.CERT_NONE

            connect_args = {
                "ssl": ssl_ctx,
                # Disable prepared statements (asyncpg behind pgbouncer)
                "statement_cache_size": 0,
                "prepared_statement_cache_size": 0,
            }
            pool_args = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_timeout": pool_timeout,
                "pool_pre_ping": True,
            }

        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=False,                # NEVER enable in prod
            echo_pool=echo_pool,
            connect_args=connect_args,
            **pool_args,
        )

        if self.is_sqlite:
            @event.listens_for(self.engine.sync_engine, "connect")
            def enable_sqlite_foreign_keys(dbapi_connection, _):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def create_all(self):
        # make sure every model is registered on Base.metadata
        import lavajato.models  # noqa

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        await self.engine.dispose()
        logger.info("Database engine disposed")


# =====================================================
# DEPENDENCY
# =====================================================
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
