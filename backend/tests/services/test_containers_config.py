"""Containers Config — loading, ordering and per-container route lookups.

Tests cover:
    - Bundled config declares the authentication container
    - camelCase and snake_case keys, config order preserved
    - Unknown containers and containers without routes declare nothing
    - Missing / malformed files are configuration errors
"""

import json

import pytest

from portico.config import BUNDLED_CONTAINERS_CONFIG
from portico.core.errors import ConfigurationError
from portico.services.containers_config import ContainersConfig, load_containers_config


def _write(tmp_path, payload) -> str:
    path = tmp_path / "containers.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    return str(path)


def test_bundled_config_declares_authentication():
    config = load_containers_config(BUNDLED_CONTAINERS_CONFIG)
    assert config.get_containers_names() == ["authentication"]
    assert config.get_containers_namespace() == "portico"
    [api] = config.get_containers_api_routes("authentication")
    assert (api.file_name, api.version_number) == ("authentication", 1)
    [web] = config.get_containers_web_routes("authentication")
    assert web.file_name == "authentication"


def test_container_order_is_config_order(tmp_path):
    config = load_containers_config(_write(tmp_path, {
        "namespace": "app",
        "register": {"zeta": {}, "alpha": {}, "mid": {}},
    }))
    assert config.get_containers_names() == ["zeta", "alpha", "mid"]


def test_snake_case_keys_accepted():
    config = ContainersConfig.model_validate({
        "namespace": "app",
        "register": {"users": {"routes": {
            "api": [{"file_name": "users", "version_number": 2}],
        }}},
    })
    assert config.get_containers_api_routes("users")[0].version_number == 2


def test_container_without_routes_declares_nothing(tmp_path):
    config = load_containers_config(_write(tmp_path, {
        "namespace": "app", "register": {"empty": {}},
    }))
    assert config.get_containers_api_routes("empty") == []
    assert config.get_containers_web_routes("empty") == []


def test_unknown_container_declares_nothing():
    config = ContainersConfig(namespace="app")
    assert config.get_containers_api_routes("ghost") == []
    assert config.get_containers_names() == []


def test_zero_version_loads_and_is_rejected_later(tmp_path):
    config = load_containers_config(_write(tmp_path, {
        "namespace": "app",
        "register": {"u": {"routes": {"api": [{"fileName": "u", "versionNumber": 0}]}}},
    }))
    assert config.get_containers_api_routes("u")[0].version_number == 0


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError, match="cannot be read"):
        load_containers_config(tmp_path / "nope.json")


def test_malformed_json(tmp_path):
    with pytest.raises(ConfigurationError, match="is invalid"):
        load_containers_config(_write(tmp_path, "{not json"))


def test_string_version_number_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        load_containers_config(_write(tmp_path, {
            "namespace": "app",
            "register": {"u": {"routes": {"api": [{"fileName": "u", "versionNumber": "1"}]}}},
        }))


def test_missing_namespace_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        load_containers_config(_write(tmp_path, {"register": {}}))
