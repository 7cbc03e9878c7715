"""
Global pytest configuration and fixtures.
"""
import datetime as dt
from typing import Any, Dict, Optional
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from hr_portal.config import HrPortalConfig, reload_config
from hr_portal.config.logging_config import reset_logging
from hr_portal.models.envelope import WebResponse
from hr_portal.models.timesheet import TimesheetRecord
from hr_portal.register.week import WeekWindow


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'HR_API_BASE_URL': 'https://hr.test/web/api/v1',
        'HR_API_TIMEOUT': '5',
        'HR_LOGIN_KEY': 'jane@example.com',
        'HR_LOGIN_PASSWORD': 'secret-password',
        'ENVIRONMENT': 'testing',
        'DEBUG': 'true',
        'LOG_LEVEL': 'DEBUG'
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key in ('HR_ACCESS_TOKEN', 'HR_REFRESH_TOKEN'):
        monkeypatch.delenv(key, raising=False)
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import hr_portal.config.settings
    hr_portal.config.settings._config = None

    yield test_env_vars

    # Clean up
    hr_portal.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> HrPortalConfig:
    """Test configuration instance."""
    return reload_config(env_file="/nonexistent/.env")


@pytest.fixture
def week() -> WeekWindow:
    """The week Mon 2024-01-01 .. Sun 2024-01-07."""
    return WeekWindow(start=dt.date(2024, 1, 1))


@pytest.fixture
def make_record():
    """Factory for persisted timesheet entries."""

    def _make(
        timesheet_id: Optional[str],
        work_date: str,
        hours: float,
        task: str = "Build",
        status: str = "Draft",
    ) -> TimesheetRecord:
        return TimesheetRecord.model_validate({
            'timesheetId': timesheet_id,
            'workDate': work_date,
            'workedHours': hours,
            'taskName': task,
            'status': status,
        })

    return _make


def ok(response: Any = None, message: str = "OK") -> WebResponse:
    """A successful envelope."""
    return WebResponse(flag=True, message=message, status=200, response=response)


def failed(message: str = "Failed", status: int = 400) -> WebResponse:
    """A failed envelope."""
    return WebResponse.failure(message, status=status)


@pytest.fixture
def envelopes():
    """Envelope builders: ``envelopes.ok(...)`` and ``envelopes.failed(...)``."""
    return SimpleNamespace(ok=ok, failed=failed)


@pytest.fixture
def services() -> Dict[str, MagicMock]:
    """Mocked timesheet, holiday and leave services with empty defaults."""
    timesheet_service = MagicMock()
    timesheet_service.list_timesheets.return_value = []
    holiday_service = MagicMock()
    holiday_service.list_calendars.return_value = []
    leave_service = MagicMock()
    leave_service.approved_leave_days.return_value = []
    return {
        'timesheet_service': timesheet_service,
        'holiday_service': holiday_service,
        'leave_service': leave_service,
    }


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by ``configure_logging``."""
    yield
    reset_logging()


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "api: mark test as exercising the HTTP client layer"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        # Add unit marker for tests in tests/unit/
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Add integration marker for tests in tests/integration/
        elif "tests/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        # Add api marker for tests of the HTTP client layer
        if "api" in item.name.lower():
            item.add_marker(pytest.mark.api)
