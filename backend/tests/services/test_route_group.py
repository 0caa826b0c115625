"""Route Groups — nesting, loading, mounting and the recorded route table.

Tests cover:
    - Nested groups inherit namespace / limits, middleware accumulates without duplicates
    - load() attaches routes under the version prefix; groups load once
    - version() reuses the same root group per label
    - Unknown middleware and root-group loads are rejected
    - A nested group overriding the limit enforces its own window
"""

import pytest
from fastapi import FastAPI

from portico.api.error_handlers import register_error_handlers
from portico.core.errors import ConfigurationError, RouteRegistrationError
from portico.infrastructure.throttle import install_rate_limit_headers
from portico.services.middleware_registry import MiddlewareRegistry
from portico.services.route_group import ApiRouter, WebRouter


def _paths(app: FastAPI) -> set[str]:
    return {route.path for route in app.routes}


@pytest.fixture
def table():
    return []


@pytest.fixture
def api_router(table):
    return ApiRouter(MiddlewareRegistry(), table, api_prefix="api")


@pytest.fixture
def web_router(table):
    return WebRouter(MiddlewareRegistry(), table)


async def _ok():
    return {"ok": True}


def test_version_group_is_reused(api_router):
    assert api_router.version("v1") is api_router.version("v1")
    assert api_router.version("v2") is not api_router.version("v1")
    assert api_router.versions == ["v1", "v2"]


def test_nested_group_inherits_and_accumulates(api_router):
    outer = api_router.version("v1").group(
        namespace="app.x", middleware=["api.throttle"], limit="10", expires="5",
    )
    inner = outer.group(middleware=["api.throttle"], prefix="/inner")
    assert inner.context.namespace == "app.x"
    assert inner.context.middleware == ("api.throttle",)
    assert (inner.context.limit, inner.context.expires) == ("10", "5")
    assert inner.context.version == "v1"
    assert inner.context.prefix == "/api/v1/inner"


def test_nested_group_overrides(api_router):
    outer = api_router.version("v1").group(namespace="app.x", limit="10")
    inner = outer.group(namespace="app.y", limit="3")
    assert inner.context.namespace == "app.y"
    assert inner.context.limit == "3"


def test_load_mounts_routes_under_version_prefix(api_router, table):
    group = api_router.version("v2").group(namespace="app.users")
    group.load(lambda g: g.get("/users", _ok), source="users.py")
    app = FastAPI()
    api_router.mount(app)
    assert "/api/v2/users" in _paths(app)
    assert table[0].source == "users.py"
    assert table[0].namespace == "app.users"


def test_web_groups_have_no_prefix(web_router):
    web_router.group(namespace="app.web").load(lambda g: g.get("/about", _ok))
    app = FastAPI()
    web_router.mount(app)
    assert "/about" in _paths(app)


def test_all_http_verbs(web_router):
    def routes(g):
        g.get("/r", _ok)
        g.post("/r", _ok)
        g.put("/r", _ok)
        g.patch("/r", _ok)
        g.delete("/r", _ok)

    web_router.group().load(routes)
    app = FastAPI()
    web_router.mount(app)
    methods = set()
    for route in app.routes:
        if route.path == "/r":
            methods |= route.methods
    assert methods == {"GET", "POST", "PUT", "PATCH", "DELETE"}


def test_group_loads_once(web_router):
    group = web_router.group()
    group.load(lambda g: None)
    with pytest.raises(RouteRegistrationError):
        group.load(lambda g: None)


def test_root_group_cannot_be_loaded(api_router):
    with pytest.raises(RouteRegistrationError):
        api_router.version("v1").load(lambda g: None)


def test_unknown_middleware_rejected(web_router):
    with pytest.raises(ConfigurationError, match="Unknown route middleware"):
        web_router.group(middleware=["auth.session"])


def test_custom_middleware_can_be_registered(table):
    registry = MiddlewareRegistry()
    seen = []

    def factory(context):
        seen.append(context.namespace)
        return None

    registry.register("web.audit", factory)
    WebRouter(registry, table).group(namespace="app.w", middleware=["web.audit"])
    assert seen == ["app.w"]


def test_string_endpoint_resolved_in_namespace(app_package, web_router):
    app_package.add_controller("pages", "web", "home", """
        async def index():
            return {"page": "home"}
    """)
    namespace = f"{app_package.name}.containers.pages.controllers.web"
    web_router.group(namespace=namespace).load(lambda g: g.get("/home", "home:index"))
    app = FastAPI()
    web_router.mount(app)
    assert "/home" in _paths(app)


def test_handler_error_leaves_group_unmounted(web_router, table):
    def bad(g):
        g.get("/x", "missing:thing")

    with pytest.raises(ConfigurationError):
        web_router.group().load(bad)
    assert table == []


async def test_nested_limit_override_is_enforced(api_router, make_client):
    outer = api_router.version("v1").group(
        namespace="app.x", middleware=["api.throttle"], limit="100",
    )
    inner = outer.group(limit="1", prefix="/strict")
    inner.load(lambda g: g.get("/ping", _ok))
    outer.load(lambda g: g.get("/ping", _ok))
    app = FastAPI()
    install_rate_limit_headers(app)
    register_error_handlers(app)
    api_router.mount(app)

    async with make_client(app) as client:
        strict = [await client.get("/api/v1/strict/ping") for _ in range(3)]
        relaxed = [await client.get("/api/v1/ping") for _ in range(3)]

    assert [r.status_code for r in strict] == [200, 429, 429]
    assert strict[0].headers["X-RateLimit-Limit"] == "1"
    assert [r.status_code for r in relaxed] == [200, 200, 200]
    assert relaxed[0].headers["X-RateLimit-Limit"] == "100"


def test_nested_group_without_override_shares_parent_throttle(api_router):
    outer = api_router.version("v1").group(
        namespace="app.x", middleware=["api.throttle"], limit="10",
    )
    inner = outer.group(prefix="/inner")
    assert inner.dependencies == outer.dependencies
    assert len(inner.dependencies) == 1
