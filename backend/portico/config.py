"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - API_LIMIT / API_LIMIT_EXPIRES are kept as raw strings (the throttle parses them)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: .env file support and type coercion
    - Defaults provided for all settings: the bundled containers config works out-of-the-box
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_CONTAINERS_CONFIG = Path(__file__).parent / "containers.json"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    app_name: str = "Portico"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Containers
    containers_config_file: str = str(BUNDLED_CONTAINERS_CONFIG)
    # None: directory of the root namespace package
    app_root: str | None = None

    # API
    api_prefix: str = "api"
    api_limit: str | None = None
    api_limit_expires: str | None = None
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("api_prefix", mode="before")
    @classmethod
    def strip_prefix_slashes(cls, v: str) -> str:
        """'/api/' and 'api' both mean the same prefix."""
        if isinstance(v, str):
            return v.strip("/")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
