"""Shared pytest fixtures.

pytest-asyncio runs in auto mode (see pyproject.toml): every async test
gets its own event loop.
"""

import os
from unittest.mock import MagicMock

import pytest
from prometheus_client import CollectorRegistry

from admin_authz.core.config import get_settings
from admin_authz.domain.authorization import AUTH_MODEL
from tests.utils.fake_authorization_store import FakeAuthorizationStore


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double satisfying LoggerProtocol."""
    return MagicMock()


@pytest.fixture
def registry() -> CollectorRegistry:
    """Fresh Prometheus registry so metric values never leak between tests."""
    return CollectorRegistry()


@pytest.fixture
def fake_store() -> FakeAuthorizationStore:
    """In-memory store holding the packaged authorization model."""
    return FakeAuthorizationStore(model=AUTH_MODEL)


@pytest.fixture
def clean_settings():
    """Clear cached settings before and after a test that patches the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def openfga_env() -> dict[str, str]:
    """Environment of a service with authorization disabled."""
    return {
        key: value
        for key, value in os.environ.items()
        if not key.startswith(("OPENFGA_", "AUTHORIZATION_"))
    } | {"ENVIRONMENT": "testing"}
