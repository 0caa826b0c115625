"""Route Groups — the RouteGroupBuilder implementation over FastAPI APIRouter.

Invariants:
    - A nested group inherits namespace, limit and expires unless it sets its own;
      middleware accumulates (parent first, no duplicates)
    - Middleware runs as route dependencies; a group overriding limit or expires
      gets fresh middleware instances instead of its parent's
    - load() runs the handler, then attaches the group's router to its parent;
      a group is loaded at most once
    - Root groups (web root, one per API version) are attached by mount(), after
      every group has been loaded, because include_router copies routes eagerly
    - Every loaded group's context is recorded in the shared route table, in load order
"""

import logging
from dataclasses import replace
from typing import Any

from fastapi import APIRouter, FastAPI

from portico.core.domain_types import Namespace, VersionLabel
from portico.core.errors import ErrorContext, RouteRegistrationError
from portico.core.route_naming import version_prefix
from portico.core.route_protocols import Endpoint, RouteGroupContext, RouteHandler
from portico.services.load_route_handler import resolve_controller
from portico.services.middleware_registry import MiddlewareRegistry

logger = logging.getLogger(__name__)


class RouteGroup:
    """One group of routes sharing namespace, middleware and limits."""

    def __init__(
        self,
        router: APIRouter,
        context: RouteGroupContext,
        middleware: MiddlewareRegistry,
        route_table: list[RouteGroupContext],
        parent: "RouteGroup | None" = None,
        dependencies: dict[str, Any] | None = None,
    ):
        self.router = router
        self._context = context
        self._middleware = middleware
        self._route_table = route_table
        self._parent = parent
        self._dependencies = dependencies or {}
        self._loaded = False

    @property
    def context(self) -> RouteGroupContext:
        return self._context

    @property
    def dependencies(self) -> list:
        """Middleware dependencies attached to every route of this group."""
        return [dep for dep in self._dependencies.values() if dep is not None]

    def group(
        self,
        *,
        namespace: str | None = None,
        middleware: tuple[str, ...] | list[str] = (),
        limit: str | None = None,
        expires: str | None = None,
        prefix: str = "",
    ) -> "RouteGroup":
        parent = self._context
        added = [m for m in dict.fromkeys(middleware) if m not in parent.middleware]
        context = RouteGroupContext(
            namespace=Namespace(namespace) if namespace else parent.namespace,
            middleware=parent.middleware + tuple(added),
            limit=limit if limit is not None else parent.limit,
            expires=expires if expires is not None else parent.expires,
            version=parent.version,
            prefix=parent.prefix + prefix,
        )
        limits_changed = (context.limit, context.expires) != (parent.limit, parent.expires)
        inherited = {} if limits_changed else self._dependencies
        dependencies = {
            name: inherited[name] if name in inherited
            else self._middleware.dependency_for(name, context)
            for name in context.middleware
        }
        return RouteGroup(
            APIRouter(prefix=prefix), context, self._middleware, self._route_table,
            parent=self, dependencies=dependencies,
        )

    def load(self, handler: RouteHandler, source: str | None = None) -> None:
        if self._parent is None:
            raise RouteRegistrationError(
                "Root route groups are mounted on the application, not loaded",
            )
        if self._loaded:
            raise RouteRegistrationError(
                "Route group already loaded",
                ErrorContext(route_file=source, version=self._context.version),
            )
        if source is not None:
            self._context = replace(self._context, source=source)
        handler(self)
        self._parent.router.include_router(self.router)
        self._loaded = True
        self._route_table.append(self._context)
        logger.info(
            f"Loaded route group {self._context.namespace or '(default)'}",
            extra={
                "namespace": self._context.namespace,
                "version": self._context.version,
                "route_file": source,
                "route_count": len(self.router.routes),
            },
        )

    def add_route(
        self, path: str, endpoint: Endpoint, methods: list[str], **kwargs: Any,
    ) -> None:
        if isinstance(endpoint, str):
            endpoint = resolve_controller(
                self._context.namespace, endpoint, self._context.source,
            )
        dependencies = self.dependencies + list(kwargs.pop("dependencies", None) or [])
        self.router.add_api_route(
            path, endpoint, methods=methods, dependencies=dependencies, **kwargs,
        )

    def get(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None:
        self.add_route(path, endpoint, ["GET"], **kwargs)

    def post(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None:
        self.add_route(path, endpoint, ["POST"], **kwargs)

    def put(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None:
        self.add_route(path, endpoint, ["PUT"], **kwargs)

    def patch(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None:
        self.add_route(path, endpoint, ["PATCH"], **kwargs)

    def delete(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None:
        self.add_route(path, endpoint, ["DELETE"], **kwargs)


class WebRouter:
    """Root of the web surface: groups without URL prefix."""

    def __init__(self, middleware: MiddlewareRegistry, route_table: list[RouteGroupContext]):
        self.root = RouteGroup(
            APIRouter(), RouteGroupContext(), middleware, route_table,
        )

    def group(self, **attributes: Any) -> RouteGroup:
        return self.root.group(**attributes)

    def mount(self, app: FastAPI) -> None:
        app.include_router(self.root.router)


class ApiRouter:
    """Root of the API surface: one root group per version label, reused across calls."""

    def __init__(
        self,
        middleware: MiddlewareRegistry,
        route_table: list[RouteGroupContext],
        api_prefix: str = "api",
    ):
        self.api_prefix = api_prefix
        self._middleware = middleware
        self._route_table = route_table
        self._versions: dict[VersionLabel, RouteGroup] = {}

    @property
    def versions(self) -> list[VersionLabel]:
        return list(self._versions)

    def version(self, label: VersionLabel) -> RouteGroup:
        if label not in self._versions:
            prefix = version_prefix(self.api_prefix, label)
            self._versions[label] = RouteGroup(
                APIRouter(prefix=prefix),
                RouteGroupContext(version=label, prefix=prefix),
                self._middleware,
                self._route_table,
            )
        return self._versions[label]

    def mount(self, app: FastAPI) -> None:
        for group in self._versions.values():
            app.include_router(group.router)
