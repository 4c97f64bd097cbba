"""
SafeWalk Routing API - FastAPI Main Application

A RESTful API that picks the fastest or safest of several candidate routes
using historical incident data supplied with each request.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import uvicorn

from api.routes.routing import router as routing_router
from api.schemas.routing import ErrorResponse
from api.services.routing_service import SafeRoutingService, get_routing_service, routing_service
from safewalk_routing import __version__
from safewalk_routing.exceptions import (
    InvalidInputError,
    MissingDestinationError,
    NoRouteAvailableError
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events.
    """
    # Startup
    logger.info("Starting SafeWalk Routing API...")

    health = routing_service.get_health_status()
    if health.history_available:
        logger.info(f"✓ Routing service ready ({health.history_entries} saved routes)")
    else:
        logger.warning("⚠ Routing service running in degraded mode - route history unavailable")

    yield

    # Shutdown
    logger.info("Shutting down SafeWalk Routing API...")


# Create FastAPI application
app = FastAPI(
    title="SafeWalk Routing API",
    description="""
    **Pick safer routes using historical incident data**

    The caller fetches alternative routes from a routing engine and incidents
    from an open-data source, then asks this API to choose between them.

    ## Features

    - **Fastest Routes**: shortest of the candidates
    - **Safest Routes**: lowest proximity-weighted incident risk
    - **Score Breakdown**: every term of each candidate's risk score
    - **GeoJSON Output**: standard geographic data format
    - **Route History**: the 10 most recent distinct searches

    ## Quick Start

    1. Check service health: `GET /api/routing/health`
    2. Select a route: `POST /api/routing/select`
    3. Draw the returned GeoJSON in any mapping application
    """,
    version=__version__,
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT",
    },
    lifespan=lifespan
)

# Add CORS middleware for web applications
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, error: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message, details=details).model_dump()
    )


# Custom exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors with detailed information.
    """
    logger.warning(f"Validation error for {request.url}: {exc}")
    return _error_response(422, "validation_error", "Request validation failed",
                           jsonable_errors(exc))


@app.exception_handler(MissingDestinationError)
async def missing_destination_handler(request: Request, exc: MissingDestinationError):
    """
    Geocoding found nothing for the start or the destination.
    """
    logger.info(f"Missing destination for {request.url}: {exc}")
    return _error_response(404, "missing_destination", str(exc))


@app.exception_handler(NoRouteAvailableError)
async def no_route_handler(request: Request, exc: NoRouteAvailableError):
    """
    The routing engine returned no candidates.
    """
    logger.info(f"No route available for {request.url}: {exc}")
    return _error_response(404, "no_route_available", str(exc))


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    """
    Malformed candidate or incident data.
    """
    logger.warning(f"Invalid input for {request.url}: {exc}")
    return _error_response(400, "invalid_input", str(exc))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected errors gracefully.
    """
    logger.error(f"Unexpected error for {request.url}: {exc}")
    return _error_response(500, "internal_server_error", "An unexpected error occurred")


def jsonable_errors(exc: RequestValidationError):
    """Validation errors without non-serializable context objects."""
    return [
        {key: value for key, value in error.items() if key in ("loc", "msg", "type")}
        for error in exc.errors()
    ]


# Include routers
app.include_router(routing_router)


@app.get("/", tags=["general"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "api": "SafeWalk Routing API",
        "version": __version__,
        "status": "operational",
        "documentation": "/docs",
        "health_check": "/api/routing/health"
    }


@app.get("/health", tags=["general"])
async def api_health(service: SafeRoutingService = Depends(get_routing_service)):
    """
    Simple health check endpoint.
    """
    service_health = service.get_health_status()
    return {
        "api_status": "healthy",
        "service_status": service_health.status
    }


# Development server configuration
if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
