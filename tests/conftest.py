"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from nairatax.backend.app import create_app  # noqa: E402
from nairatax.backend.app.services.registry import (  # noqa: E402
    ServiceRegistry,
    build_services,
)
from nairatax.backend.app.services.storage import InMemoryKeyValueStore  # noqa: E402


@pytest.fixture()
def services() -> ServiceRegistry:
    """Return services backed by a fresh in-memory store."""

    return build_services(InMemoryKeyValueStore())


@pytest.fixture()
def app(services: ServiceRegistry) -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app(services)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
