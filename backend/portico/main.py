"""Portico API — FastAPI application factory and entry point.

Invariants:
    - Routes registered from the containers config, then defaults (RoutesServiceProvider)
    - Registration completes inside create_app(), before any request is served;
      a ConfigurationError escapes create_app() and the process fails to start
    - Global error handlers map PorticoError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Throttle window headers copied onto every throttled response

Design Decisions:
    - Factory over module-level wiring: tests build apps from their own settings
    - Lifespan over @app.on_event: FastAPI recommended pattern
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portico.api.error_handlers import register_error_handlers
from portico.config import Settings, get_settings
from portico.infrastructure.observability import setup_logging
from portico.infrastructure.throttle import install_rate_limit_headers
from portico.services.containers_config import load_containers_config
from portico.services.routes_provider import RoutesServiceProvider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    logger.info(f"{app.title} API started")
    yield
    logger.info(f"{app.title} API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title=settings.app_name, version=settings.app_version, lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_rate_limit_headers(app)
    register_error_handlers(app)

    provider = RoutesServiceProvider(
        app, settings, load_containers_config(settings.containers_config_file),
    )
    provider.register_routes()
    app.state.routes_provider = provider
    return app
