"""Session and register helpers shared by CLI commands."""

import datetime as dt
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import click
from pydantic import ValidationError

from hr_portal.cli.error_handlers import ConfigurationError
from hr_portal.config.settings import get_config
from hr_portal.register.register import TimesheetRegister
from hr_portal.register.week import WeekWindow
from hr_portal.services.api_client import ApiClient
from hr_portal.services.auth_service import AuthService, open_session
from hr_portal.services.holiday_service import HolidayService
from hr_portal.services.leave_service import LeaveService
from hr_portal.services.timesheet_service import TimesheetService

logger = logging.getLogger(__name__)

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def debug_enabled() -> bool:
    """Whether the root command was invoked with ``--debug``."""
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return False
    return bool(ctx.find_root().params.get("debug"))


def as_date(value: Optional[dt.datetime]) -> dt.date:
    """Turn a ``--date`` option value into a date (default: today)."""
    return value.date() if value is not None else dt.date.today()


@contextmanager
def authenticated_client() -> Iterator[ApiClient]:
    """Open a session from configuration and log out afterwards.

    Raises:
        ConfigurationError: If the configuration is invalid or has no
            credentials
    """
    try:
        config = get_config()
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            recovery_hint="Check the HR_* variables in your .env file",
        ) from e

    try:
        client = open_session(config)
    except ValueError as e:
        raise ConfigurationError(
            str(e), recovery_hint="Add credentials to the .env file"
        ) from e

    try:
        yield client
    finally:
        AuthService.logout(client)


def employee_id_of(client: ApiClient) -> str:
    session = client.session
    if session is None or not session.user.user_id:
        raise ConfigurationError(
            "The logged-in user has no employee id",
            recovery_hint="Log in with an employee account",
        )
    return session.user.user_id


def build_register(client: ApiClient, day: dt.date) -> TimesheetRegister:
    """A register on the week containing ``day``, loaded from the backend."""
    register = TimesheetRegister(
        timesheet_service=TimesheetService(client),
        holiday_service=HolidayService(client),
        leave_service=LeaveService(client),
        employee_id=employee_id_of(client),
        week=WeekWindow.containing(day),
    )
    register.load()
    return register
