"""
Unit tests for the manager review commands.
"""

from unittest.mock import patch

import pytest

from hr_portal.cli.commands.review import review
from hr_portal.models.people import Employee


@pytest.fixture
def manager(fake_session):
    """Mocked ManagerService behind a patched session."""
    with patch("hr_portal.cli.commands.review.authenticated_client", fake_session), patch(
        "hr_portal.cli.commands.review.ManagerService"
    ) as mock_service:
        yield mock_service.return_value


@pytest.fixture
def team_week(make_record):
    return [
        make_record("ts-1", "2024-01-01", 8, status="Submitted"),
        make_record("ts-2", "2024-01-02", 6, status="Submitted"),
        make_record("ts-3", "2024-01-02", 2, task="Support", status="Submitted"),
        make_record("ts-9", "2024-01-09", 8, status="Draft"),
    ]


class TestTeam:
    def test_lists_team(self, runner, manager):
        manager.list_team.return_value = [
            Employee(employee_id="E-2", first_name="Ravi", last_name="K", designation="Dev"),
        ]

        result = runner.invoke(review, ["team"])

        assert result.exit_code == 0
        assert "Ravi K" in result.output
        assert "Dev" in result.output

    def test_empty_team(self, runner, manager):
        manager.list_team.return_value = []

        result = runner.invoke(review, ["team"])

        assert "No employees found" in result.output


class TestShow:
    def test_shows_matrix_for_the_week(self, runner, manager, team_week):
        manager.employee_timesheets.return_value = team_week

        result = runner.invoke(review, ["show", "--employee-id", "E-2", "--date", "2024-01-03"])

        assert result.exit_code == 0, result.output
        manager.employee_timesheets.assert_called_once_with("E-2")
        assert "Employee E-2, week 01 Jan 2024 - 07 Jan 2024" in result.output
        assert "Support" in result.output
        assert "Status: Submitted" in result.output

    def test_empty_week(self, runner, manager, team_week):
        manager.employee_timesheets.return_value = team_week

        result = runner.invoke(review, ["show", "--employee-id", "E-2", "--date", "2024-02-01"])

        assert "No timesheets found for this week" in result.output


class TestDecide:
    """Test suite for approve and reject."""

    def test_approve_with_yes(self, runner, manager, team_week, envelopes):
        manager.employee_timesheets.return_value = team_week
        manager.approve.return_value = envelopes.ok(message="Timesheets approved")

        result = runner.invoke(
            review, ["approve", "--employee-id", "E-2", "--date", "2024-01-03", "--yes"]
        )

        assert result.exit_code == 0, result.output
        manager.approve.assert_called_once_with(["ts-1", "ts-2", "ts-3"])
        assert "Timesheets approved" in result.output

    def test_reject_asks_for_confirmation(self, runner, manager, team_week, envelopes):
        manager.employee_timesheets.return_value = team_week
        manager.reject.return_value = envelopes.ok(message="Timesheets rejected")

        result = runner.invoke(
            review, ["reject", "--employee-id", "E-2", "--date", "2024-01-03"], input="y\n"
        )

        assert result.exit_code == 0, result.output
        assert "Are you sure you want to REJECT the selected timesheets?" in result.output
        manager.reject.assert_called_once_with(["ts-1", "ts-2", "ts-3"])
        manager.approve.assert_not_called()

    def test_declined(self, runner, manager, team_week):
        manager.employee_timesheets.return_value = team_week

        result = runner.invoke(
            review, ["approve", "--employee-id", "E-2", "--date", "2024-01-03"], input="n\n"
        )

        assert result.exit_code == 130
        manager.approve.assert_not_called()

    def test_nothing_to_decide(self, runner, manager):
        manager.employee_timesheets.return_value = []

        result = runner.invoke(
            review, ["approve", "--employee-id", "E-2", "--date", "2024-01-03", "--yes"]
        )

        assert result.exit_code == 0
        assert "No timesheets found for this week" in result.output
        manager.approve.assert_not_called()

    def test_backend_refusal(self, runner, manager, team_week, envelopes):
        manager.employee_timesheets.return_value = team_week
        manager.approve.return_value = envelopes.failed("Not your report", status=403)

        result = runner.invoke(
            review, ["approve", "--employee-id", "E-2", "--date", "2024-01-03", "--yes"]
        )

        assert result.exit_code == 2
        assert "Not your report" in result.output

    def test_employee_id_is_required(self, runner):
        result = runner.invoke(review, ["approve", "--yes"])

        assert result.exit_code == 2
