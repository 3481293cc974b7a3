"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hostlookup.api.healthcheck import router as healthcheck_router
from hostlookup.api.routes import router
from hostlookup.core.config import get_settings
from hostlookup.utils.decorators import init_sentry

# Configure logging for the application
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logging.getLogger("hostlookup").setLevel(get_settings().log_level.upper())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan handler."""
    sentry_enabled = init_sentry()
    settings = get_settings()

    logger.info("hostlookup starting...")
    logger.info(
        "Nameservers: %s",
        "system" if settings.use_system_config else " ".join(settings.nameservers_list),
    )
    logger.info("Sentry: %s", "enabled" if sentry_enabled else "disabled")

    yield

    logger.info("hostlookup shutting down...")


app = FastAPI(
    title="hostlookup",
    description="DNS lookup service",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)
app.include_router(healthcheck_router)
