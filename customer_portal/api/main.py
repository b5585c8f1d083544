"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from customer_portal.api.dependencies import get_request_id
from customer_portal.api.middleware import RequestIDMiddleware, MetricsMiddleware
from customer_portal.api.v1 import movements, profile, purchases
from customer_portal.api.v1.schemas import HealthResponse
from customer_portal.domain.exceptions import StoreError
from customer_portal.infrastructure.observability.logging import setup_logging
from customer_portal.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Customer Portal API",
        description="Purchases, account movements and personal data backed by JSON files",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["Location", "X-Request-ID"],
        )

    # Unreadable or corrupted backing files fail the request, never the process
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logging.error(f"Store error: {exc}", extra={"request_id": get_request_id(request)})
        return JSONResponse(status_code=500, content={"detail": "Storage unavailable"})

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse)
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(purchases.router, prefix="/v1", tags=["purchases"])
    app.include_router(movements.router, prefix="/v1", tags=["movements"])
    app.include_router(profile.router, prefix="/v1", tags=["profile"])

    return app


app = create_app()
