"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from land_measure.config import settings
from land_measure.api.rate_limit import limiter
from land_measure.api.v1.routers import measurements
from land_measure.infrastructure.measurement_store import build_store
from land_measure.middleware.error_handler import ErrorHandlerMiddleware

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Connects the measurement store on startup and releases it on shutdown.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Geodesy config: earth_radius_m={settings.earth_radius_m}, "
                f"history_limit={settings.history_limit}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    store = build_store(settings)
    await store.connect()
    app.state.measurement_store = store
    logger.info(f"Measurement store ready: {settings.store_backend}")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await store.close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Land Measurement API

    Trace a closed region as longitude/latitude pairs and get back its surface
    area and boundary length on a spherical Earth. Every result is stored and
    the most recent ones can be recalled.

    ## Features

    - **Spherical Area**: Enclosed area via the spherical shoelace sum, in hectares
    - **Perimeter**: Sum of haversine great-circle edge lengths, in meters
    - **History**: The 10 most recent measurements, newest first
    - **Pluggable Storage**: In-memory or SQL-backed measurement store
    - **Rate Limiting**: Protects the API from abuse
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add global error handling middleware (must sit inside CORS)
app.add_middleware(ErrorHandlerMiddleware)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(measurements.router, prefix="/api")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
