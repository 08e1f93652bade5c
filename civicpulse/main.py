"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from civicpulse import __version__
from civicpulse.config import configure_logging
from civicpulse.routers import api, session
from civicpulse.services.result_cache import get_result_cache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()
    stats = get_result_cache().stats()
    logger.info(
        "Result cache ready: %d analyses, %d scripts",
        stats["analysisCount"],
        stats["scriptCount"],
    )
    yield


app = FastAPI(
    title="CivicPulse",
    description="Match California bills to your policy positions and call your legislators about them",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(api.router)
app.include_router(session.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
