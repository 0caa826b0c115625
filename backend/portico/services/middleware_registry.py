"""Middleware Registry — named group middleware turned into FastAPI dependencies.

Invariants:
    - "api.throttle" is always registered
    - Unknown middleware names raise ConfigurationError when the group is opened
    - A factory may return None (middleware configured off for this group)

Design Decisions:
    - Group middleware as route-level dependencies attached by RouteGroup.add_route:
      a nested group reuses its parent's instances unless it overrides limit/expires
    - Throttle scope is (version, group prefix, namespace): each version group of a
      container counts separately
"""

from typing import Any, Callable

from fastapi import Depends
from limits.strategies import FixedWindowRateLimiter

from portico.core.domain_types import THROTTLE_MIDDLEWARE
from portico.core.errors import ConfigurationError, ErrorContext
from portico.core.route_protocols import RouteGroupContext
from portico.infrastructure.throttle import build_throttle, new_rate_limiter

MiddlewareFactory = Callable[[RouteGroupContext], Callable[..., Any] | None]


class MiddlewareRegistry:
    """Per-application table of group middleware factories."""

    def __init__(self, limiter: FixedWindowRateLimiter | None = None):
        self.limiter = limiter or new_rate_limiter()
        self._factories: dict[str, MiddlewareFactory] = {
            THROTTLE_MIDDLEWARE: self._throttle,
        }

    def register(self, name: str, factory: MiddlewareFactory) -> None:
        self._factories[name] = factory

    def names(self) -> list[str]:
        return sorted(self._factories)

    def dependency_for(self, name: str, context: RouteGroupContext) -> Any:
        """The Depends() for one middleware, or None when it is configured off."""
        factory = self._factories.get(name)
        if factory is None:
            raise ConfigurationError(
                f"Unknown route middleware {name!r} "
                f"(known: {', '.join(self.names())})",
                ErrorContext(route_file=context.source, version=context.version),
            )
        dependency = factory(context)
        return Depends(dependency) if dependency is not None else None

    def _throttle(self, context: RouteGroupContext):
        scope = (
            f"{context.version or 'web'}:{context.prefix or '/'}:{context.namespace or '-'}"
        )
        return build_throttle(context.limit, context.expires, scope, self.limiter)
