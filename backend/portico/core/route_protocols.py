"""Boundary Protocols — contracts between route files and the routing shell.

Invariants:
    - Route files only see RouteGroupBuilder, never FastAPI routers directly
    - RouteGroupContext is immutable and exists for one registration call
    - limit / expires are carried as given (raw environment strings or None)

Design Decisions:
    - Protocol over ABC: structural subtyping, route files can be tested with fakes
"""

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from portico.core.domain_types import Namespace, VersionLabel


@dataclass(frozen=True)
class RouteGroupContext:
    """Grouping parameters of one route group."""
    namespace: Namespace | None = None
    middleware: tuple[str, ...] = ()
    limit: str | None = None
    expires: str | None = None
    version: VersionLabel | None = None
    prefix: str = ""
    source: str | None = None


Endpoint = Callable[..., Any] | str


class RouteGroupBuilder(Protocol):
    """What a route file's register_routes(group) can do with its group."""

    @property
    def context(self) -> RouteGroupContext: ...

    def group(
        self,
        *,
        namespace: str | None = None,
        middleware: tuple[str, ...] | list[str] = (),
        limit: str | None = None,
        expires: str | None = None,
        prefix: str = "",
    ) -> "RouteGroupBuilder": ...

    def load(self, handler: "RouteHandler", source: str | None = None) -> None: ...

    def add_route(
        self, path: str, endpoint: Endpoint, methods: list[str], **kwargs: Any,
    ) -> None: ...

    def get(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None: ...
    def post(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None: ...
    def put(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None: ...
    def patch(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None: ...
    def delete(self, path: str, endpoint: Endpoint, **kwargs: Any) -> None: ...


RouteHandler = Callable[[RouteGroupBuilder], None]
