"""FastAPI application entry-point for the log alert service.

Configures logging, CORS, rate limiting and error handlers, and mounts the
route modules under ``/api/v1``.
Run with:  uvicorn logalert.api.main:app --host 0.0.0.0 --port 8080
or:        python -m logalert
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from logalert.api.errors import register_exception_handlers
from logalert.api.routes import alerts, health
from logalert.core.config import Settings, get_settings
from logalert.core.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "Alert", "description": "Log alert rules backed by Zabbix items"},
    {"name": "Monitor", "description": "Health check endpoints"},
]


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        settings: Explicit settings; when given they replace ``get_settings``
            for every dependency of this app.
    """
    explicit = settings is not None
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.debug)
        logger.info(
            "Log alert service started on %s (zabbix=%s, elasticsearch=%s)",
            settings.listen_address,
            settings.zabbix.url,
            settings.elasticsearch.url,
        )
        yield

    app = FastAPI(
        title=settings.project_name,
        version="1.0.0",
        description=(
            "Declare log-based alerts (index pattern, query string, delay, "
            "threshold) and materialize them as Zabbix items and triggers "
            "that poll Elasticsearch."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=openapi_tags,
        license_info={
            "name": "Apache 2.0",
            "url": "http://www.apache.org/licenses/LICENSE-2.0.html",
        },
    )
    if explicit:
        app.dependency_overrides[get_settings] = lambda: settings

    # Rate limiting
    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # CORS
    allowed_origins = ["http://localhost:3000", "http://localhost:8080"]
    allowed_origins.extend(settings.cors_origins)
    if settings.debug:
        allowed_origins = ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(alerts.router, prefix="/api/v1")
    # Health check sits under /api/v1 too but carries no auth dependency
    app.include_router(health.router, prefix="/api/v1")
    return app


app = create_app()
