"""Routes Service Provider — one-shot registration of container and default routes.

Invariants:
    - Linear lifecycle: IDLE -> ENUMERATE_MODULES -> (REGISTER_API, REGISTER_WEB)* ->
      REGISTER_DEFAULTS -> READY; any error -> FAILED and the error propagates
    - Containers config is queried once, containers processed in config order
    - Defaults are registered after every container
    - Nothing is mounted on the FastAPI app unless registration reaches READY
    - register_routes() runs once per provider; a second call raises RouteRegistrationError

Design Decisions:
    - Fail-fast, no retries: the filesystem is not expected to change mid-startup,
      and a half-registered route table must never serve traffic
"""

import importlib
import logging
from pathlib import Path

from fastapi import FastAPI

from portico.config import Settings
from portico.core.domain_types import RegistrationState
from portico.core.errors import ConfigurationError, PorticoError, RouteRegistrationError
from portico.core.route_protocols import RouteGroupContext
from portico.services.containers_config import ContainersConfig
from portico.services.middleware_registry import MiddlewareRegistry
from portico.services.register_container_routes import (
    register_container_api_routes, register_container_web_routes,
)
from portico.services.register_default_routes import (
    register_default_api_routes, register_default_web_routes,
)
from portico.services.route_group import ApiRouter, WebRouter

logger = logging.getLogger(__name__)


def resolve_app_root(settings: Settings, namespace_root: str) -> Path:
    """APP_ROOT when set, else the directory of the root namespace package."""
    if settings.app_root:
        return Path(settings.app_root)
    try:
        package = importlib.import_module(namespace_root)
    except ModuleNotFoundError as e:
        raise ConfigurationError(
            f"Containers namespace {namespace_root!r} is not an importable package "
            "and APP_ROOT is not set",
        ) from e
    if getattr(package, "__file__", None):
        return Path(package.__file__).resolve().parent
    return Path(next(iter(package.__path__))).resolve()


class RoutesServiceProvider:
    """Registers every container's routes, then the defaults, on one FastAPI app."""

    def __init__(
        self,
        app: FastAPI,
        settings: Settings,
        containers: ContainersConfig,
        middleware: MiddlewareRegistry | None = None,
    ):
        self.app = app
        self.settings = settings
        self.containers = containers
        self.middleware = middleware or MiddlewareRegistry()
        self.route_groups: list[RouteGroupContext] = []
        self.api_router = ApiRouter(self.middleware, self.route_groups, settings.api_prefix)
        self.web_router = WebRouter(self.middleware, self.route_groups)
        self.state = RegistrationState.IDLE

    def register_routes(self) -> None:
        if self.state != RegistrationState.IDLE:
            raise RouteRegistrationError(
                f"Routes already registered (state: {self.state.value})",
            )
        container = None
        try:
            self.state = RegistrationState.ENUMERATE_MODULES
            names = self.containers.get_containers_names()
            namespace_root = self.containers.get_containers_namespace()
            app_root = resolve_app_root(self.settings, namespace_root)
            limit = self.settings.api_limit
            expires = self.settings.api_limit_expires

            for container in names:
                self.state = RegistrationState.REGISTER_API
                register_container_api_routes(
                    self.api_router, container, namespace_root,
                    self.containers.get_containers_api_routes(container),
                    app_root=app_root, limit=limit, expires=expires,
                )
                self.state = RegistrationState.REGISTER_WEB
                register_container_web_routes(
                    self.web_router, container, namespace_root,
                    self.containers.get_containers_web_routes(container),
                    app_root=app_root,
                )
            container = None

            self.state = RegistrationState.REGISTER_DEFAULTS
            register_default_api_routes(self.api_router, limit=limit, expires=expires)
            register_default_web_routes(self.web_router)

            self.api_router.mount(self.app)
            self.web_router.mount(self.app)
        except PorticoError as e:
            failed_in = self.state
            self.state = RegistrationState.FAILED
            if container is not None and e.context.container is None:
                e.context.container = container
            logger.critical(
                f"Route registration failed during {failed_in.value}: {e.message}",
                extra={
                    "container": e.context.container,
                    "route_file": e.context.route_file,
                    "error_code": e.code,
                    "state": failed_in.value,
                },
            )
            raise
        except Exception:
            self.state = RegistrationState.FAILED
            logger.critical("Route registration failed", exc_info=True)
            raise

        self.state = RegistrationState.READY
        logger.info(
            f"Registered {len(self.route_groups)} route groups "
            f"for {len(names)} containers",
            extra={
                "state": self.state.value,
                "group_count": len(self.route_groups),
            },
        )
