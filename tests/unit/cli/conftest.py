"""Fixtures shared by the CLI tests."""

from contextlib import contextmanager
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from hr_portal.models.auth import AuthSession
from hr_portal.models.people import Role, User


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def api_client():
    """An ApiClient stand-in carrying an employee session."""
    client = MagicMock()
    client.session = AuthSession(
        user=User(user_id="E-17", user_name="Asha Rao", role=Role.EMPLOYEE),
        access_token="token",
    )
    return client


@pytest.fixture
def fake_session(api_client):
    """Replacement for ``authenticated_client`` yielding ``api_client``."""

    @contextmanager
    def _session():
        yield api_client

    return _session
