"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click

from hr_portal.cli.utils.formatters import format_error, format_warning
from hr_portal.services.api_client import ApiError


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Error related to configuration issues."""

    pass


class APIError(CLIError):
    """A backend call failed."""

    pass


class DataValidationError(CLIError):
    """The week (or the command input) breaks a business rule."""

    pass


class ProcessingError(CLIError):
    """A register operation did not complete."""

    pass


_EXIT_CODES = (
    (ConfigurationError, "Configuration Error", 1),
    (APIError, "API Error", 2),
    (DataValidationError, "Data Validation Error", 3),
    (ProcessingError, "Processing Error", 4),
)

_HTTP_ERRORS = {
    401: (
        "Authentication Failed",
        "Check HR_ACCESS_TOKEN, or HR_LOGIN_KEY and HR_LOGIN_PASSWORD, in the .env file",
        5,
    ),
    403: (
        "Permission Denied",
        "Your role may not be allowed to use this endpoint",
        6,
    ),
    404: (
        "Resource Not Found",
        "Verify the id you passed and HR_API_BASE_URL",
        7,
    ),
    429: (
        "Rate Limit Exceeded",
        "Wait a few minutes before retrying",
        8,
    ),
}


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
        debug: Whether to show full stack trace

    Returns:
        Exit code (1-9 for known error types, 130 for cancellation, 255 otherwise)
    """
    for error_type, title, exit_code in _EXIT_CODES:
        if isinstance(error, error_type):
            click.echo(format_error(f"{title}: {error.message}"))
            if error.recovery_hint:
                click.echo(format_warning(f"Hint: {error.recovery_hint}"))
            return exit_code

    if isinstance(error, ApiError):
        known = _HTTP_ERRORS.get(error.status)
        if known is not None:
            title, hint, exit_code = known
            click.echo(format_error(f"{title}: {error.message}"))
            click.echo(format_warning(f"Hint: {hint}"))
            return exit_code

        status = f" (HTTP {error.status})" if error.status else ""
        click.echo(format_error(f"Backend Error{status}: {error.message}"))
        return 9

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return 130  # Standard exit code for SIGINT

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
    click.echo(str(error))

    if debug:
        click.echo("\nFull stack trace:")
        click.echo(
            "".join(traceback.format_exception(type(error), error, error.__traceback__))
        )
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"))

    return 255


def with_error_handling(debug: bool = False):
    """
    Context manager adding standardized error handling to CLI commands.

    Example:
        @click.command()
        def my_command():
            with with_error_handling(debug_enabled()):
                ...
    """

    class ErrorHandler:
        """Context manager for error handling."""

        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            # Let click's own exit/usage exceptions through untouched
            if isinstance(exc_val, Exception) and not isinstance(
                exc_val, click.ClickException
            ):
                exit_code = handle_cli_error(exc_val, self.show_debug)
                sys.exit(exit_code)
            return False

    return ErrorHandler(debug)
