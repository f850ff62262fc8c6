# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import IntegrityError

from lavajato.routers import (
    auth_router,
    team_router,
    activity_router,
    customer_router,
    vehicle_router,
    wash_service_router,
    product_router,
    appointment_router,
    order_router,
    dashboard_router,
    seo_router,
)

from lavajato.core.config import (
    APP_ENV,
    IS_PRODUCTION,
    APP_VERSION,
    CORS_ORIGINS,
    ENABLE_SCHEDULER,
    DATABASE_URL,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    OPENAI_API_KEY,
    OPENAI_MODEL,
    OPENAI_TIMEOUT_SECONDS,
    OPENAI_MAX_RETRIES,
)
from lavajato.core.db import Database
from lavajato.core.llm import LLMClient
from lavajato.core.scheduler import build_scheduler
from lavajato.core.exceptions import AppException
from lavajato.core.logging import setup_logging
from lavajato.middleware.request_logging import request_logging_middleware
from lavajato.core.error_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    integrity_error_handler,
    unhandled_exception_handler,
)

APP_NAME = "Lava Jato – Operations API"

# ------------------------------------------------------------------------------
# LOGGING
# ------------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# LIFESPAN
# ------------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting application")

    database = Database(
        DATABASE_URL,
        pool_size=DB_POOL_SIZE,
        max_overflow=DB_MAX_OVERFLOW,
        pool_timeout=DB_POOL_TIMEOUT,
        ssl_verify=DB_SSL_VERIFY,
        echo_pool=DB_ECHO_POOL,
    )
    app.state.database = database

    # ✅ DB init ONLY in development
    if APP_ENV == "development":
        await database.create_all()
        logger.info("📦 Database models initialized (development)")
    else:
        logger.info("📦 %s mode: create_all() skipped", APP_ENV)

    if OPENAI_API_KEY:
        app.state.llm = LLMClient(
            OPENAI_API_KEY,
            model=OPENAI_MODEL,
            timeout=OPENAI_TIMEOUT_SECONDS,
            max_retries=OPENAI_MAX_RETRIES,
        )
        logger.info("🤖 LLM client ready", extra={"model": OPENAI_MODEL})
    else:
        app.state.llm = None
        logger.info("🤖 OPENAI_API_KEY not set: SEO content uses fallback copy")

    # ⚠️ Scheduler control
    scheduler = build_scheduler(database)
    if not IS_PRODUCTION or ENABLE_SCHEDULER:
        scheduler.start()
        logger.info("🕒 Scheduler started (%s)", APP_ENV)
    else:
        logger.info("🕒 Scheduler disabled (production)")

    yield

    logger.info("🛑 Shutting down application")
    if scheduler.running:
        scheduler.shutdown()
    if app.state.llm is not None:
        await app.state.llm.close()
    await database.dispose()

# ------------------------------------------------------------------------------
# APP INIT
# ------------------------------------------------------------------------------
app = FastAPI(
    title=APP_NAME,
    description="Backend API for car wash service orders, scheduling and inventory",
    version=APP_VERSION,
    docs_url="/docs" if not IS_PRODUCTION else None,
    redoc_url=None,
    lifespan=lifespan,
)

# ------------------------------------------------------------------------------
# EXCEPTION HANDLERS
# ------------------------------------------------------------------------------
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# ------------------------------------------------------------------------------
# MIDDLEWARE
# ------------------------------------------------------------------------------
app.middleware("http")(request_logging_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------------------
# HEALTH CHECK
# ------------------------------------------------------------------------------
@app.get("/", tags=["Health"])
async def health_check():
    return {
        "status": "ok",
        "service": "lavajato-api",
        "environment": APP_ENV,
        "version": APP_VERSION,
    }

# ------------------------------------------------------------------------------
# ROUTERS
# ------------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(team_router)
app.include_router(activity_router)
app.include_router(customer_router)
app.include_router(vehicle_router)
app.include_router(wash_service_router)
app.include_router(product_router)
app.include_router(appointment_router)
app.include_router(order_router)
app.include_router(dashboard_router)
app.include_router(seo_router)
