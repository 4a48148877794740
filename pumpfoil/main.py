"""
Pumpfoil API

FastAPI application for pump-foil run detection and session statistics.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pumpfoil import __version__
from pumpfoil.config import settings
from pumpfoil.api.v1.router import api_router


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    config = settings.detection_config()
    logger.info("Starting Pumpfoil API...")
    logger.info(
        f"Default detection: threshold={config.min_speed_threshold} km/h, "
        f"min_run={config.min_run_duration}s, min_stop={config.min_stop_duration}s, "
        f"window={config.speed_smoothing_window}"
    )

    yield

    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="Pumpfoil API",
    description="Pumping run detection and session statistics",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
