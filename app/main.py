# =============================================================================
# FastAPI Application — Entry Point
# =============================================================================
#
# Run locally:
#   uvicorn app.main:app --reload
#
# The presentation layer talks to these routes; everything behind them is
# in-memory per process.
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api import analysis, chat
from app.config import settings
from app.models.responses import HealthResponse
from app.services.gateway import get_agent_gateway

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    yield
    await get_agent_gateway().aclose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(analysis.router)
app.include_router(chat.router)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health() -> HealthResponse:
    return HealthResponse(version=settings.app_version, service=settings.app_name)
