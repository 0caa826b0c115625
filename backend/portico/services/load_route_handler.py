"""Route Handler Loader — imports route modules and controller references.

Invariants:
    - Route modules are imported by dotted name, never executed from a raw path
    - The target module missing from the import system is a ConfigurationError;
      import errors raised from inside the module propagate unchanged
    - A route module without a callable register_routes is a ConfigurationError
    - A route module must be imported from the file that was resolved on disk
    - Controller references are "module:attribute", relative to a group namespace
"""

import importlib
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from portico.core.domain_types import ROUTE_HANDLER_ATTR
from portico.core.errors import ConfigurationError, ErrorContext
from portico.core.route_protocols import RouteHandler


def _import_module(module_name: str, route_file: str | None) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if e.name != module_name and not module_name.startswith(f"{e.name}."):
            raise
        raise ConfigurationError(
            f"Module {module_name} cannot be imported: {e}",
            ErrorContext(route_file=route_file),
        ) from e


def load_route_handler(module_name: str, route_file: str | None = None) -> RouteHandler:
    """Import a route module and return its register_routes.

    When `route_file` is given, the imported module must come from that file;
    a different module shadowing it on sys.path is a ConfigurationError.
    """
    module = _import_module(module_name, route_file)
    if route_file is not None:
        loaded_from = getattr(module, "__file__", None)
        if loaded_from is None or Path(loaded_from).resolve() != Path(route_file).resolve():
            raise ConfigurationError(
                f"Route module {module_name} was imported from {loaded_from}, "
                f"not from the resolved route file {route_file}",
                ErrorContext(route_file=route_file),
            )
    handler = getattr(module, ROUTE_HANDLER_ATTR, None)
    if not callable(handler):
        raise ConfigurationError(
            f"Route module {module_name} does not define {ROUTE_HANDLER_ATTR}(group)",
            ErrorContext(route_file=route_file),
        )
    return handler


def resolve_controller(
    namespace: str | None, reference: str, route_file: str | None = None,
) -> Callable[..., Any]:
    """Turn 'users:list_users' into the callable namespace.users.list_users."""
    module_part, sep, attr = reference.partition(":")
    if not sep or not module_part or not attr:
        raise ConfigurationError(
            f"Controller reference {reference!r} must look like 'module:function'",
            ErrorContext(route_file=route_file),
        )
    if not namespace:
        raise ConfigurationError(
            f"Controller reference {reference!r} used in a group without a namespace",
            ErrorContext(route_file=route_file),
        )
    module_name = f"{namespace}.{module_part}"
    target = getattr(_import_module(module_name, route_file), attr, None)
    if not callable(target):
        raise ConfigurationError(
            f"Controller {module_name}:{attr} does not exist or is not callable",
            ErrorContext(route_file=route_file),
        )
    return target
