"""
Insurance Intake FastAPI Application

Main entry point for the insurance intake API: application CRUD plus the
captcha-gated demo login.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Common library imports
from common.utils import success_response

# App-specific imports
from app.config import settings

# Import routers
from app.routers import applications_router, auth_router

# Import service initialization
from app.dependencies import (
    build_application_store,
    get_application_store,
    init_all_services,
    reset_services,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Opens the configured application store, initializes services, and
    closes the store on shutdown.
    """
    # Startup
    settings.validate_required()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = build_application_store(settings)
    await store.open()
    init_all_services(settings, store)
    logger.info(f"Insurance intake API started ({settings.ENVIRONMENT}, {store.name} storage)")

    yield

    # Shutdown
    await store.close()
    reset_services()
    logger.info("Insurance intake API shut down")


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="Insurance Intake API",
    description="Insurance application intake with a captcha-gated login",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# Include Routers (all under /api prefix)
# =============================================================================
API_PREFIX = "/api"

app.include_router(auth_router, prefix=API_PREFIX, tags=["Authentication"])
app.include_router(applications_router, prefix=API_PREFIX, tags=["Insurance Applications"])


# =============================================================================
# Exception Handlers
# =============================================================================
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Flatten HTTP errors to a JSON body with at least a message."""
    content = exc.detail if isinstance(exc.detail, dict) else {"message": str(exc.detail)}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report schema violations as 400 with one entry per field."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error["loc"] if part != "body"]
        errors.append({"field": ".".join(location), "message": error["msg"]})

    logger.info(f"Validation error on {request.url.path}: {[e['field'] for e in errors]}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "errors": errors},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Log unexpected errors and report them opaquely."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and the active storage backend.
    """
    return success_response({
        "status": "ok",
        "version": "1.0.0",
        "storage": get_application_store().name,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
