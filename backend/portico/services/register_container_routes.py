"""Container Route Registrars — wire each container's API and web route files.

Invariants:
    - API file with versionNumber N lands in version group "vN", nested group namespace
      {root}.containers.{container}.controllers.api, middleware api.throttle
    - Web file lands in a group with namespace {root}.containers.{container}.controllers.web
      and no middleware
    - limit / expires are forwarded exactly as read from the environment
    - Every file is resolved (exists on disk) before it is imported; the first
      failure propagates and stops registration
"""

import logging
from pathlib import Path

from portico.core.domain_types import ContainerName, RouteKind, THROTTLE_MIDDLEWARE
from portico.core.errors import ConfigurationError
from portico.core.route_naming import (
    container_routes_dir, controllers_namespace, route_module_name, version_label,
)
from portico.services.containers_config import ApiRouteFile, WebRouteFile
from portico.services.load_route_handler import load_route_handler
from portico.services.resolve_route_file import resolve_route_file
from portico.services.route_group import ApiRouter, WebRouter

logger = logging.getLogger(__name__)


def register_container_api_routes(
    api_router: ApiRouter,
    container: ContainerName,
    namespace_root: str,
    descriptors: list[ApiRouteFile],
    *,
    app_root: Path,
    limit: str | None,
    expires: str | None,
) -> None:
    routes_dir = container_routes_dir(app_root, container)
    for descriptor in descriptors:
        try:
            label = version_label(descriptor.version_number)
        except ConfigurationError as e:
            e.context.container = container
            raise
        path = resolve_route_file(routes_dir, RouteKind.API.value, descriptor.file_name)
        handler = load_route_handler(
            route_module_name(namespace_root, container, RouteKind.API, descriptor.file_name),
            str(path),
        )
        group = api_router.version(label).group(
            namespace=controllers_namespace(namespace_root, container, RouteKind.API),
            middleware=[THROTTLE_MIDDLEWARE],
            limit=limit,
            expires=expires,
        )
        group.load(handler, source=str(path))


def register_container_web_routes(
    web_router: WebRouter,
    container: ContainerName,
    namespace_root: str,
    descriptors: list[WebRouteFile],
    *,
    app_root: Path,
) -> None:
    routes_dir = container_routes_dir(app_root, container)
    for descriptor in descriptors:
        path = resolve_route_file(routes_dir, RouteKind.WEB.value, descriptor.file_name)
        handler = load_route_handler(
            route_module_name(namespace_root, container, RouteKind.WEB, descriptor.file_name),
            str(path),
        )
        group = web_router.group(
            namespace=controllers_namespace(namespace_root, container, RouteKind.WEB),
        )
        group.load(handler, source=str(path))
