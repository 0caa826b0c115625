"""Root conftest — shared test configuration and throwaway application packages.

Invariants:
    - Each `app_package` gets a unique top-level package name under tmp_path,
      so imported route modules never leak between tests
    - Settings are built explicitly per test; env only provides quiet logging defaults
"""

import json
import os
import sys
import textwrap
from pathlib import Path
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from portico.config import Settings

os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "text")


API_ROUTES = '''
async def ping():
    return {{"container": "{container}", "file": "{file_name}"}}


def register_routes(group):
    group.get("/{container}/{file_name}", ping)
'''

WEB_ROUTES = '''
from fastapi.responses import HTMLResponse


async def page():
    return HTMLResponse("<p>{container}/{file_name}</p>")


def register_routes(group):
    group.get("/{container}/{file_name}", page)
'''


class AppPackage:
    """A containers tree written to disk and importable as `name`."""

    def __init__(self, name: str, root: Path, config_dir: Path):
        self.name = name
        self.root = root
        self._config_dir = config_dir

    def add_container(self, container: str) -> Path:
        base = self.root / "containers" / container
        for sub in ("", "controllers", "controllers/api", "controllers/web",
                    "routes", "routes/api", "routes/web"):
            pkg = base / sub
            pkg.mkdir(parents=True, exist_ok=True)
            (pkg / "__init__.py").touch()
        (self.root / "containers" / "__init__.py").touch()
        return base

    def add_route_file(
        self, container: str, kind: str, file_name: str, source: str | None = None,
    ) -> Path:
        self.add_container(container)
        if source is None:
            template = API_ROUTES if kind == "api" else WEB_ROUTES
            source = template.format(container=container, file_name=file_name)
        path = self.root / "containers" / container / "routes" / kind / f"{file_name}.py"
        path.write_text(textwrap.dedent(source))
        return path

    def add_controller(self, container: str, kind: str, module: str, source: str) -> Path:
        self.add_container(container)
        path = self.root / "containers" / container / "controllers" / kind / f"{module}.py"
        path.write_text(textwrap.dedent(source))
        return path

    def write_config(self, register: dict, namespace: str | None = None) -> Path:
        path = self._config_dir / f"{self.name}.json"
        path.write_text(json.dumps({"namespace": namespace or self.name, "register": register}))
        return path

    def settings(self, register: dict, **overrides) -> Settings:
        values = {
            "containers_config_file": str(self.write_config(register)),
            "log_level": "WARNING",
            "log_format": "text",
        }
        values.update(overrides)
        return Settings(**values)


@pytest.fixture
def app_package(tmp_path, monkeypatch):
    name = f"sampleapp_{uuid4().hex[:8]}"
    root = tmp_path / "src" / name
    root.mkdir(parents=True)
    (root / "__init__.py").touch()
    monkeypatch.syspath_prepend(str(tmp_path / "src"))
    yield AppPackage(name, root, tmp_path)
    for module in [m for m in sys.modules if m == name or m.startswith(f"{name}.")]:
        del sys.modules[module]


@pytest.fixture
def make_client():
    """Build an httpx client bound to a FastAPI app."""
    def _make(app):
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    return _make
