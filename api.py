"""
Academic Portfolio FastAPI Application

Main entry point for the portfolio API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Common library imports
from common.database import MongoDB
from common.utils import APIException, error_response, success_response

# App-specific imports
from portfolio import __version__
from portfolio.config import settings

# Import routers
from portfolio.routers import (
    users_router,
    research_achievement_router,
    projects_router,
    certificates_router,
)

# Import service initialization
from portfolio.dependencies import init_all_services

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Database Instance
# =============================================================================
main_db = MongoDB()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Validates configuration, connects to MongoDB and initializes services.
    """
    logger.info("Starting Portfolio API...")
    settings.validate_required()

    if not settings.media_configured():
        logger.warning("Media service credentials missing; uploads will fail")

    await main_db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
    )

    init_all_services(db=main_db.db, settings=settings)
    logger.info("All services initialized successfully")

    yield

    logger.info("Shutting down Portfolio API...")
    await main_db.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="Academic Portfolio API",
    description="Content API for a single-owner academic portfolio site",
    version=__version__,
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
# Error Handlers
# =============================================================================
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message, code=exc.code, errors=exc.errors),
        headers=exc.headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        message = exc.detail.get("message", "Request failed")
        code = exc.detail.get("code")
    else:
        message = str(exc.detail)
        code = None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message, code=code),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        f"{'.'.join(str(p) for p in err.get('loc', [])[1:]) or 'body'}: {err.get('msg')}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=error_response(", ".join(errors), code="VALIDATION_ERROR", errors=errors),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=error_response("Internal server error", code="INTERNAL_ERROR"),
    )


# =============================================================================
# Include Routers (all under /api prefix)
# =============================================================================
API_PREFIX = "/api"

app.include_router(users_router, prefix=API_PREFIX, tags=["Users"])
app.include_router(research_achievement_router, prefix=API_PREFIX, tags=["Research & Achievements"])
app.include_router(projects_router, prefix=API_PREFIX, tags=["Projects"])
app.include_router(certificates_router, prefix=API_PREFIX, tags=["Certificates"])


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and database connection.
    """
    return success_response({
        "status": "ok",
        "version": __version__,
        "database": main_db.is_connected,
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
