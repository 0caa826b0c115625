"""Default Route Registrars — fallback API (v1) and web routes shipped with Portico.

Visiting the root of the API or the web surface always resolves to something.
Registered after every container, so container routes claim a path first.
"""

from pathlib import Path

from portico.core.domain_types import DEFAULT_API_VERSION, THROTTLE_MIDDLEWARE
from portico.core.route_naming import version_label
from portico.services.load_route_handler import load_route_handler
from portico.services.resolve_route_file import resolve_route_file
from portico.services.route_group import ApiRouter, WebRouter

ENGINE_ROUTES_DIR = Path(__file__).resolve().parent.parent / "engine"
ENGINE_ROUTES_PACKAGE = "portico.engine.routes"
DEFAULT_API_ROUTES = "default_api"
DEFAULT_WEB_ROUTES = "default_web"


def register_default_api_routes(
    api_router: ApiRouter, *, limit: str | None, expires: str | None,
) -> None:
    path = resolve_route_file(ENGINE_ROUTES_DIR, "routes", DEFAULT_API_ROUTES)
    handler = load_route_handler(f"{ENGINE_ROUTES_PACKAGE}.{DEFAULT_API_ROUTES}", str(path))
    group = api_router.version(version_label(DEFAULT_API_VERSION)).group(
        middleware=[THROTTLE_MIDDLEWARE], limit=limit, expires=expires,
    )
    group.load(handler, source=str(path))


def register_default_web_routes(web_router: WebRouter) -> None:
    path = resolve_route_file(ENGINE_ROUTES_DIR, "routes", DEFAULT_WEB_ROUTES)
    handler = load_route_handler(f"{ENGINE_ROUTES_PACKAGE}.{DEFAULT_WEB_ROUTES}", str(path))
    web_router.group().load(handler, source=str(path))
