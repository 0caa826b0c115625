"""Domain Types — verifies enum values and constants route registration depends on."""

from portico.core.domain_types import (
    DEFAULT_API_VERSION, THROTTLE_MIDDLEWARE, RegistrationState, RouteKind,
)


def test_route_kind_values_are_subpackage_names():
    assert RouteKind.API.value == "api"
    assert RouteKind.WEB.value == "web"
    assert len(RouteKind) == 2


def test_registration_state_has_failed_and_ready():
    assert {s.value for s in RegistrationState} == {
        "idle", "enumerate_modules", "register_api", "register_web",
        "register_defaults", "ready", "failed",
    }


def test_constants():
    assert THROTTLE_MIDDLEWARE == "api.throttle"
    assert DEFAULT_API_VERSION == 1
