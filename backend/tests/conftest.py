from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from backend.app import create_app


@pytest.fixture()
def app():
    return create_app({"TESTING": True, "LOG_LEVEL": "WARNING"})


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
