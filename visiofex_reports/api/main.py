"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from visiofex_reports.api.middleware import RequestIDMiddleware, MetricsMiddleware
from visiofex_reports.api.v1 import reports
from visiofex_reports.infrastructure.observability.logging import setup_logging
from visiofex_reports.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="VisioFex Reports",
        description="Daily transaction summaries from the VisioFex payment API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": settings.service_name,
            "api_key_configured": bool(settings.api_key),
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(reports.router, prefix="/v1", tags=["reports"])

    return app


app = create_app()
