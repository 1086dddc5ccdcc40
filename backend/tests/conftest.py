from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from backend.app import create_app
from backend.settings import Settings


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app(Settings(log_level="WARNING"))
    with app.test_client() as test_client:
        yield test_client
