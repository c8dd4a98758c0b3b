"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from radicados_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from radicados_gateway.api.dependencies import build_document_store, build_holiday_source, get_policy, get_today
from radicados_gateway.api.v1 import alerts, calendar, radicados, summary
from radicados_gateway.domain.calendar import BusinessCalendar
from radicados_gateway.infrastructure.database.session import session_scope
from radicados_gateway.infrastructure.observability.logging import setup_logging
from radicados_gateway.services.alerts import AlertRefresher, refresh_alerts
from radicados_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


async def run_scheduled_refresh():
    """One refresh pass with its own session and calendar"""
    with session_scope() as db:
        store = build_document_store(db)
        business_calendar = BusinessCalendar(build_holiday_source(db))
        return await refresh_alerts(store, business_calendar, get_today(), get_policy(), trigger="scheduler")


def create_app(refresh_interval_seconds: int | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    interval = settings.alert_refresh_interval_seconds if refresh_interval_seconds is None else refresh_interval_seconds

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        refresher = AlertRefresher(run_scheduled_refresh, interval) if interval > 0 else None
        app.state.alert_refresher = refresher
        if refresher:
            refresher.start()
        try:
            yield
        finally:
            if refresher:
                await refresher.stop()

    app = FastAPI(
        title="Radicados Gateway",
        description="Radicados tracking with business-day response deadlines and alerts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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
    app.include_router(radicados.router, prefix="/v1", tags=["radicados"])
    app.include_router(alerts.router, prefix="/v1", tags=["alerts"])
    app.include_router(calendar.router, prefix="/v1", tags=["calendar"])
    app.include_router(summary.router, prefix="/v1", tags=["summary"])

    return app


app = create_app()
