"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from wealth_core.api.middleware import RequestIDMiddleware, MetricsMiddleware
from wealth_core.api.v1 import settlement, deposits, trends
from wealth_core.infrastructure.observability.logging import setup_logging
from wealth_core.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Wealth Core",
        description="Trip settlement, deposit projection and monthly trend computations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(settlement.router, prefix="/v1", tags=["settlements"])
    app.include_router(deposits.router, prefix="/v1", tags=["deposits"])
    app.include_router(trends.router, prefix="/v1", tags=["trends"])

    return app


app = create_app()
