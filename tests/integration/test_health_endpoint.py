"""Integration tests for the health endpoint."""

from http import HTTPStatus

from flask.testing import FlaskClient

from nairatax.backend.config.engine_config import load_engine_configuration
from nairatax.backend.version import get_project_version


def test_health_reports_version_and_currency(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    assert response.mimetype == "application/json"
    assert response.get_json() == {
        "status": "ok",
        "version": get_project_version(),
        "default_currency": load_engine_configuration().default_currency,
    }


def test_health_matches_config_metadata(client: FlaskClient) -> None:
    health = client.get("/health").get_json()
    config = client.get("/api/v1/config").get_json()

    assert config["version"] == health["version"]
    assert config["default_currency"] == health["default_currency"] == "NGN"
