"""Shared test configuration and fixtures."""

import pytest

from api.router import limiter
from main import app
from samples import STRONG_CV


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "api: exercises the HTTP layer through TestClient"
    )


@pytest.fixture(autouse=True)
def _reset_app_state():
    """Fresh rate-limit windows and no leftover dependency overrides."""
    limiter.reset()
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()
    limiter.reset()


@pytest.fixture
def strong_cv():
    return STRONG_CV
