"""
FastAPI application entry point.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from incident_hub.api.deps import container
from incident_hub.api.v1 import analytics, comments, health, incidents, team_members
from incident_hub.core.config import settings
from incident_hub.core.constants import API_PREFIX
from incident_hub.core.exceptions import IncidentHubError
from incident_hub.core.logging import LogContext, get_logger, setup_logging
from incident_hub.core.security import generate_request_id

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(
        "Starting Incident Hub",
        app_name=settings.app_name,
        env=settings.app_env,
        data_store=settings.data_store_backend,
    )

    container.initialize()
    logger.info("Service container initialized")

    yield

    logger.info("Shutting down Incident Hub")
    await container.close()


# Create FastAPI application
app = FastAPI(
    title="Incident Hub API",
    description="IT incident tracking with cached AI root-cause analysis",
    version="1.0.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.security.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Tag each request with an ID and log its outcome."""
    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    started = time.perf_counter()
    with LogContext(request_id=request_id):
        response = await call_next(request)
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
    response.headers["X-Request-ID"] = request_id
    return response


# Exception handlers
@app.exception_handler(IncidentHubError)
async def incident_hub_error_handler(
    request: Request,
    exc: IncidentHubError,
) -> JSONResponse:
    """Handle custom application errors."""
    logger.error(
        "Application error",
        error_code=exc.code,
        error_message=exc.message,
        details=exc.details,
        path=request.url.path,
    )
    headers = None
    retry_after = exc.context.get("retry_after_seconds")
    if retry_after:
        headers = {"Retry-After": str(retry_after)}
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies in the common error format."""
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.warning("Request validation failed", path=request.url.path, details=details)
    return JSONResponse(
        status_code=400,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Invalid request",
            "details": details,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected errors."""
    logger.exception(
        "Unexpected error",
        error=str(exc),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "details": None,
        },
    )


# Include routers
app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(incidents.router, prefix=API_PREFIX, tags=["Incidents"])
app.include_router(team_members.router, prefix=API_PREFIX, tags=["Team Members"])
app.include_router(comments.router, prefix=API_PREFIX, tags=["Comments"])
app.include_router(analytics.router, prefix=API_PREFIX, tags=["Analytics"])


# Root endpoint
@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "prefix": API_PREFIX,
        "docs": "/docs" if settings.debug else "Disabled in production",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "incident_hub.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
