"""Route File Resolver — maps a declared route file to its path and checks it exists.

Invariants:
    - Path is {module_path}/{subdir}/{file_name}.py, built by concatenation only
    - Existence re-checked on every call (nothing cached across startups)
    - A missing file raises ConfigurationError naming the path
"""

from pathlib import Path

from portico.core.errors import ConfigurationError, ErrorContext

ROUTE_FILE_SUFFIX = ".py"


def resolve_route_file(module_path: str | Path, subdir: str, file_name: str) -> Path:
    path = Path(module_path) / subdir / f"{file_name}{ROUTE_FILE_SUFFIX}"
    if not path.is_file():
        raise ConfigurationError(
            "You probably have defined some routes files in the containers config "
            f"that do not exist in your container routes directory: {path}",
            ErrorContext(route_file=str(path)),
        )
    return path
