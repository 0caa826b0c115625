"""Route Naming — pure functions that build version labels, namespaces and module paths.

Invariants:
    - version_label(n) == "v" + str(n) for every int n >= 1
    - Namespaces follow {root}.containers.{container}.controllers.{kind}
    - Route modules follow {root}.containers.{container}.routes.{kind}.{file_name}
    - No IO: existence checks live in services/resolve_route_file.py
"""

from pathlib import Path

from portico.core.domain_types import ContainerName, Namespace, RouteKind, VersionLabel
from portico.core.errors import ConfigurationError, ErrorContext


def version_label(version_number: int) -> VersionLabel:
    """Build the API version label. Zero, negative and non-int versions are config errors."""
    if isinstance(version_number, bool) or not isinstance(version_number, int) or version_number < 1:
        raise ConfigurationError(
            f"Invalid API route versionNumber {version_number!r}: must be an integer >= 1",
            ErrorContext(debug_info={"version_number": version_number}),
        )
    return VersionLabel(f"v{version_number}")


def controllers_namespace(
    root: str, container: ContainerName, kind: RouteKind,
) -> Namespace:
    return Namespace(f"{root}.containers.{container}.controllers.{kind.value}")


def route_module_name(
    root: str, container: ContainerName, kind: RouteKind, file_name: str,
) -> str:
    return f"{root}.containers.{container}.routes.{kind.value}.{file_name}"


def container_routes_dir(app_root: Path, container: ContainerName) -> Path:
    """Directory holding the api/ and web/ route packages of a container."""
    return Path(app_root) / "containers" / container / "routes"


def version_prefix(api_prefix: str, label: VersionLabel) -> str:
    """URL prefix of a version group: '/api/v1', or '/v1' with an empty api prefix."""
    parts = [p for p in (api_prefix.strip("/"), label) if p]
    return "/" + "/".join(parts)
