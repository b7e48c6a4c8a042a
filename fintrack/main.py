from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fintrack import __version__
from fintrack.core.config import get_settings
from fintrack.core.logging import configure_logging, request_id_middleware
from fintrack.db.init import create_tables, sanitize_db_url
from fintrack.db.base import get_database_url
from fintrack.sms.config import SmsConfig
from fintrack.sms.processor import SmsProcessor
from fintrack.sms.router import router as sms_router
from fintrack.sms.router import set_processor

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.ENV)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    logger.info(f"Starting {settings.APP_NAME} (env: {settings.ENV})")
    logger.info(f"Database: {sanitize_db_url(get_database_url())}")

    await create_tables()

    sms_config = SmsConfig.from_settings(settings)
    set_processor(SmsProcessor(sms_config))
    logger.info(
        f"✓ SMS processor initialized (max message length: "
        f"{sms_config.extractor.max_message_length})"
    )

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    set_processor(None)


app = FastAPI(title=settings.APP_NAME, version=__version__, lifespan=lifespan)
app.middleware("http")(request_id_middleware)
app.include_router(sms_router)


@app.get("/")
def health_check():
    logger.debug("Health check endpoint called")
    return {"status": "ok"}


@app.get("/healthz")
def healthz():
    logger.debug(f"Healthz endpoint called (env: {settings.ENV})")
    return {"status": "healthy", "env": settings.ENV}
