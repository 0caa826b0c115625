"""API Throttle — fixed-window rate limiting for throttled route groups.

Invariants:
    - One window of `limit` requests per `expires` minutes, per (group scope, client host)
    - Empty/missing/zero limit disables the group throttle; missing expires means 60 minutes
    - Unparseable or negative limit/expires count as 0: logged once per group, throttle off
    - Throttled responses carry X-RateLimit-Limit / -Remaining / -Reset headers,
      whatever Response type the endpoint returns (429 responses included)

Design Decisions:
    - limits library (the engine under slowapi) used directly: group-level dependency,
      no per-endpoint decorator or `request` parameter needed in controllers
    - Window stats travel on request.state and an HTTP middleware writes the headers,
      because headers set on an injected Response are dropped when the endpoint
      returns its own Response
    - Storage is owned by the caller (one MemoryStorage per application instance)
"""

import logging
import time

from fastapi import FastAPI, Request
from limits import RateLimitItemPerMinute
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

from portico.core.errors import RateLimitExceededError

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_MINUTES = 60
RATE_LIMIT_STATE = "rate_limit_headers"


def new_rate_limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(MemoryStorage())


def _parse_count(raw: str | int | None, name: str) -> int | None:
    """None when unset; 0 (with a warning) when the value is not a usable count."""
    if raw is None:
        return None
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = int(text)
        except ValueError:
            logger.warning(f"Throttle {name} {raw!r} is not a whole number, using 0")
            return 0
    if value < 0:
        logger.warning(f"Throttle {name} {raw!r} is negative, using 0")
        return 0
    return value


class Throttle:
    """FastAPI dependency enforcing one throttle window."""

    def __init__(
        self, limit: int, expires: int, scope: str, limiter: FixedWindowRateLimiter,
    ):
        self.limit = limit
        self.expires = expires
        self.scope = scope
        self._limiter = limiter
        self._item = RateLimitItemPerMinute(limit, expires)

    async def __call__(self, request: Request) -> None:
        client = request.client.host if request.client else "anonymous"
        allowed = self._limiter.hit(self._item, self.scope, client)
        stats = self._limiter.get_window_stats(self._item, self.scope, client)
        setattr(request.state, RATE_LIMIT_STATE, {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(stats.remaining),
            "X-RateLimit-Reset": str(int(stats.reset_time)),
        })
        if not allowed:
            retry_after_ms = max(0, int((stats.reset_time - time.time()) * 1000))
            logger.warning(
                f"Throttle exceeded for {client} on {self.scope}",
                extra={"namespace": self.scope, "error_code": "RATE_LIMIT_EXCEEDED"},
            )
            raise RateLimitExceededError(self.limit, retry_after_ms)


def build_throttle(
    limit: str | int | None,
    expires: str | int | None,
    scope: str,
    limiter: FixedWindowRateLimiter,
) -> Throttle | None:
    """Interpret the raw limit/expires of a group. None when throttling is off."""
    count = _parse_count(limit, "limit")
    if not count:
        return None
    minutes = _parse_count(expires, "expires")
    if minutes is None:
        minutes = DEFAULT_EXPIRES_MINUTES
    if minutes == 0:
        return None
    return Throttle(count, minutes, scope, limiter)


def install_rate_limit_headers(app: FastAPI) -> None:
    """Copy the throttle window stats of a request onto its final response."""

    @app.middleware("http")
    async def rate_limit_headers(request: Request, call_next):
        response = await call_next(request)
        headers = getattr(request.state, RATE_LIMIT_STATE, None)
        if headers:
            response.headers.update(headers)
        return response
