"""
Unit tests for CLI error handling.
"""

import click
import pytest

from hr_portal.cli.error_handlers import (
    APIError,
    ConfigurationError,
    DataValidationError,
    ProcessingError,
    handle_cli_error,
    with_error_handling,
)
from hr_portal.services.api_client import ApiError


class TestHandleCliError:
    """Test suite for handle_cli_error."""

    @pytest.mark.parametrize(
        "error, exit_code, title",
        [
            (ConfigurationError("no token"), 1, "Configuration Error"),
            (APIError("backend said no"), 2, "API Error"),
            (DataValidationError("2 violation(s)"), 3, "Data Validation Error"),
            (ProcessingError("not saved"), 4, "Processing Error"),
        ],
    )
    def test_cli_errors(self, capsys, error, exit_code, title):
        assert handle_cli_error(error) == exit_code

        output = capsys.readouterr().out
        assert f"{title}: {error.message}" in output

    def test_recovery_hint_is_shown(self, capsys):
        handle_cli_error(ConfigurationError("no token", recovery_hint="Edit .env"))

        assert "Hint: Edit .env" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "status, exit_code, title",
        [
            (401, 5, "Authentication Failed"),
            (403, 6, "Permission Denied"),
            (404, 7, "Resource Not Found"),
            (429, 8, "Rate Limit Exceeded"),
        ],
    )
    def test_known_http_statuses(self, capsys, status, exit_code, title):
        assert handle_cli_error(ApiError("refused", status=status)) == exit_code

        output = capsys.readouterr().out
        assert f"{title}: refused" in output
        assert "Hint:" in output

    def test_other_backend_errors(self, capsys):
        assert handle_cli_error(ApiError("Server error (HTTP 502)", status=502)) == 9
        assert handle_cli_error(ApiError("Network timeout")) == 9

        output = capsys.readouterr().out
        assert "Backend Error (HTTP 502)" in output
        assert "Backend Error: Network timeout" in output

    def test_abort(self, capsys):
        assert handle_cli_error(click.Abort()) == 130
        assert "Operation cancelled by user" in capsys.readouterr().out

    def test_unexpected_error(self, capsys):
        assert handle_cli_error(KeyError("row")) == 255

        output = capsys.readouterr().out
        assert "Unexpected Error: KeyError" in output
        assert "--debug" in output

    def test_unexpected_error_with_debug(self, capsys):
        try:
            raise RuntimeError("kaput")
        except RuntimeError as e:
            handle_cli_error(e, debug=True)

        output = capsys.readouterr().out
        assert "Full stack trace" in output
        assert "RuntimeError: kaput" in output


class TestWithErrorHandling:
    def test_exits_with_mapped_code(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            with with_error_handling():
                raise DataValidationError("bad week")

        assert exc_info.value.code == 3

    def test_click_exceptions_pass_through(self):
        with pytest.raises(click.UsageError):
            with with_error_handling():
                raise click.UsageError("missing option")

    def test_no_error(self):
        with with_error_handling():
            value = 1

        assert value == 1
