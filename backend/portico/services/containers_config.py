"""Containers Config — the registered containers and the route files they declare.

Invariants:
    - Container order is the order of the "register" mapping in the config file
    - Route file keys accept camelCase (fileName, versionNumber) and snake_case
    - A container without a "routes" entry declares no routes (empty lists)
    - Unreadable or malformed config raises ConfigurationError, never a raw ValidationError

Design Decisions:
    - Queried once per startup by RoutesServiceProvider; nothing cached across startups
    - versionNumber kept as declared; bounds are checked when the version label is built
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from portico.core.domain_types import ContainerName
from portico.core.errors import ConfigurationError, ErrorContext

logger = logging.getLogger(__name__)


class ApiRouteFile(BaseModel):
    """One API route file of a container."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_name: str = Field(alias="fileName", min_length=1)
    version_number: int = Field(alias="versionNumber", strict=True)


class WebRouteFile(BaseModel):
    """One web route file of a container."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_name: str = Field(alias="fileName", min_length=1)


class ContainerRoutes(BaseModel):
    model_config = ConfigDict(frozen=True)

    api: list[ApiRouteFile] = []
    web: list[WebRouteFile] = []


class ContainerEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    routes: ContainerRoutes = ContainerRoutes()


class ContainersConfig(BaseModel):
    """Root namespace plus the registered containers."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    namespace: str = Field(min_length=1)
    containers: dict[str, ContainerEntry] = Field(default_factory=dict, alias="register")

    def get_containers_names(self) -> list[ContainerName]:
        return [ContainerName(name) for name in self.containers]

    def get_containers_namespace(self) -> str:
        return self.namespace

    def get_containers_api_routes(self, name: str) -> list[ApiRouteFile]:
        entry = self.containers.get(name)
        return list(entry.routes.api) if entry else []

    def get_containers_web_routes(self, name: str) -> list[WebRouteFile]:
        entry = self.containers.get(name)
        return list(entry.routes.web) if entry else []


def load_containers_config(path: str | Path) -> ContainersConfig:
    """Read and validate a containers config JSON file."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Containers config file {path} cannot be read: {e.strerror or e}",
            ErrorContext(debug_info={"path": str(path)}),
        ) from e
    try:
        config = ContainersConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Containers config file {path} is invalid: {e.error_count()} error(s)",
            ErrorContext(debug_info={"path": str(path), "errors": e.errors(include_url=False)}),
        ) from e
    logger.info(
        f"Loaded containers config {path} ({len(config.containers)} containers)",
        extra={"namespace": config.namespace},
    )
    return config
