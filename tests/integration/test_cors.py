"""Integration tests covering CORS behaviour for API endpoints."""

import pytest
from flask.testing import FlaskClient

from nairatax.backend.app import create_app
from nairatax.backend.app.services.registry import build_services
from nairatax.backend.app.services.storage import InMemoryKeyValueStore

ALLOWED_ORIGIN = "https://allowed.test"
DISALLOWED_ORIGIN = "https://blocked.test"


@pytest.fixture()
def cors_client(monkeypatch: pytest.MonkeyPatch) -> FlaskClient:
    """Return a client configured with a known CORS allow-list."""

    monkeypatch.setenv("NAIRATAX_ALLOWED_ORIGINS", ALLOWED_ORIGIN)

    app = create_app(build_services(InMemoryKeyValueStore()))
    app.config.update(TESTING=True)

    with app.test_client() as client:
        yield client


def test_allowed_origin_receives_cors_headers(cors_client: FlaskClient) -> None:
    response = cors_client.get("/api/v1/config", headers={"Origin": ALLOWED_ORIGIN})

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == ALLOWED_ORIGIN


def test_preflight_allows_calculation_posts(cors_client: FlaskClient) -> None:
    response = cors_client.options(
        "/api/v1/calculations",
        headers={
            "Origin": ALLOWED_ORIGIN,
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert "POST" in response.headers.get("Access-Control-Allow-Methods", "")


def test_disallowed_origin_does_not_receive_cors_headers(cors_client: FlaskClient) -> None:
    response = cors_client.get("/api/v1/config", headers={"Origin": DISALLOWED_ORIGIN})

    assert response.status_code == 200
    assert "Access-Control-Allow-Origin" not in response.headers
