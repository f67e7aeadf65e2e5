"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ecostats.config import settings
from ecostats.api.rate_limit import limiter
from ecostats.middleware.error_handler import ErrorHandlerMiddleware
from ecostats.api.v1.routers import plots, projects, species_area, canopy

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

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Analysis config: default_curve_model={settings.default_curve_model}, "
                f"include_zero_counts={settings.include_zero_counts}, "
                f"canopy_confidence_level={settings.canopy_confidence_level}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    yield

    # Shutdown
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Biodiversity & Spatial Analysis API for Vegetation Surveys

    This API derives ecological statistics from field plot records supplied
    by the survey application. It stores nothing: every call is a pure
    computation over the records in the request.

    ## Features

    - **Abundance Tables**: Collapse observation records into species counts
    - **Diversity Indices**: Shannon-Wiener, Simpson, richness, Pielou evenness,
      Menhinick and Margalef indices per plot or across a project
    - **Species-Area Curves**: Cumulative richness over nested plots with
      power-law or logarithmic fits and R²
    - **Canopy Coverage**: Mean coverage from center and quadrant photos with
      standard error and confidence bounds
    - **Rate Limiting**: Protects the API from abuse

    ## Errors

    - `400`: Invalid input (negative counts, fractions outside [0, 1],
      non-positive areas) - correct the input and retry
    - `422`: Too little data to fit a model - add more plots or samples
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(plots.router, prefix="/api/v1")
app.include_router(projects.router, prefix="/api/v1")
app.include_router(species_area.router, prefix="/api/v1")
app.include_router(canopy.router, prefix="/api/v1")


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
