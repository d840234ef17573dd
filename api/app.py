# api/app.py
"""
FastAPI application factory
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.v1.router import api_router
from core.config import get_settings
from core.exceptions import AgriPulseError, ExternalAPIError

logger = logging.getLogger(__name__)

def create_app(lifespan=None) -> FastAPI:
    """Create FastAPI application"""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=(
            "Today's flood risk, harvest window, crop-stage actions and smart "
            "alerts for a farmer's location"
        ),
        debug=settings.debug,
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.exception_handler(AgriPulseError)
    async def agripulse_error_handler(request: Request, exc: AgriPulseError):
        # Upstream provider failures are a bad gateway, anything else is ours
        status_code = 502 if isinstance(exc, ExternalAPIError) else 500
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status_code,
            content={"success": False, "error": type(exc).__name__, "detail": str(exc)}
        )

    # Include routers
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "service": settings.api_title,
            "version": settings.api_version,
            "status": "healthy",
            "docs": "/docs",
            "advisory": "/api/advisory/?location=<village or district>"
        }

    return app
