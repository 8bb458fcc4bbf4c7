"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from liquidity_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from liquidity_gateway.api.v1 import briefing, chat, statements
from liquidity_gateway.infrastructure.observability.logging import setup_logging
from liquidity_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Liquidity Gateway",
        description="Statement ingestion, 7-day liquidity forecast and question routing",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(statements.router, prefix="/v1", tags=["statements"])
    app.include_router(briefing.router, prefix="/v1", tags=["briefing"])
    app.include_router(chat.router, prefix="/v1", tags=["chat"])

    return app


app = create_app()
