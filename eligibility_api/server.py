"""
FastAPI application for the eligibility lookup server.

Run with: uvicorn eligibility_api.server:app --host 127.0.0.1 --port 8080
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .config import get_settings
from .logging import setup_logging
from .routers import eligible, health
from .storage_factory import close_storage, get_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Configures logging, creates the pooled engine on startup and disposes it on shutdown.
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    get_engine(settings)
    logger.info("Eligibility server started")
    yield
    close_storage()


app = FastAPI(
    title="Eligibility Lookup API",
    description="A read-only API returning claim eligibility and merkle proofs by identity.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(eligible.router)
app.include_router(health.router)
