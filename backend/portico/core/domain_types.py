"""Domain Types — rich types that replace bare primitives in route registration.

Invariants:
    - ContainerName, Namespace, VersionLabel wrap str — never mixed up in signatures
    - Registration is linear: IDLE -> ENUMERATE_MODULES -> (REGISTER_API, REGISTER_WEB)* ->
      REGISTER_DEFAULTS -> READY; any failure lands in FAILED
    - Route kinds map 1:1 to the routes/<kind>/ and controllers/<kind>/ subpackages
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ContainerName = NewType("ContainerName", str)
Namespace = NewType("Namespace", str)        # dotted import path
VersionLabel = NewType("VersionLabel", str)  # "v1", "v2", ...


# ─── Constants ───────────────────────────────────────────────────

THROTTLE_MIDDLEWARE = "api.throttle"
DEFAULT_API_VERSION = 1
ROUTE_HANDLER_ATTR = "register_routes"


# ─── Enums ───────────────────────────────────────────────────────

class RouteKind(str, Enum):
    """Surface a route file belongs to. Value is the subpackage name."""
    API = "api"
    WEB = "web"


class RegistrationState(str, Enum):
    """Lifecycle of a RoutesServiceProvider."""
    IDLE = "idle"
    ENUMERATE_MODULES = "enumerate_modules"
    REGISTER_API = "register_api"
    REGISTER_WEB = "register_web"
    REGISTER_DEFAULTS = "register_defaults"
    READY = "ready"
    FAILED = "failed"
