"""Manager timesheet review commands."""

import datetime as dt
from typing import Optional

import click

from hr_portal.cli.error_handlers import APIError, with_error_handling
from hr_portal.cli.utils.formatters import (
    format_dataframe,
    format_info,
    format_success,
    format_table,
)
from hr_portal.cli.utils.session import DATE_TYPE, as_date, authenticated_client, debug_enabled
from hr_portal.register.week import WeekWindow
from hr_portal.services.api_client import ApiClient
from hr_portal.services.manager_service import ManagerService, WeekReview, build_review

EMPLOYEE_ID_HELP = "Team member whose week to review"
DATE_OPTION_HELP = "Any date in the week (YYYY-MM-DD, default: today)"


def load_review(client: ApiClient, employee_id: str, week: WeekWindow) -> WeekReview:
    records = ManagerService(client).employee_timesheets(employee_id)
    return build_review(records, week)


def render_review(review: WeekReview, employee_id: str, week: WeekWindow) -> None:
    click.echo()
    click.echo(f"Employee {employee_id}, week {week}")
    if not review.entries:
        click.echo(format_info("No timesheets found for this week"))
        return

    headers = ["Task"] + [f"{day:%a %d %b}" for day in week.dates]
    click.echo(format_dataframe(review.matrix, headers=headers))
    click.echo(f"Status: {', '.join(review.statuses)}")


@click.group(name="review")
def review():
    """Review a team member's week (managers)."""


@review.command(name="team")
def team():
    """List the employees reporting to you."""
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            members = ManagerService(client).list_team()

        if not members:
            click.echo(format_info("No employees found"))
            return
        rows = [
            [member.employee_id or "-", member.full_name, member.designation or "-"]
            for member in members
        ]
        click.echo(format_table(["ID", "Name", "Designation"], rows))


@review.command(name="show")
@click.option("--employee-id", required=True, help=EMPLOYEE_ID_HELP)
@click.option("--date", "date_", type=DATE_TYPE, default=None, help=DATE_OPTION_HELP)
def show(employee_id: str, date_: Optional[dt.datetime]):
    """Show one employee's hours for a week."""
    with with_error_handling(debug_enabled()):
        week = WeekWindow.containing(as_date(date_))
        with authenticated_client() as client:
            week_review = load_review(client, employee_id, week)
        render_review(week_review, employee_id, week)


def _decide(action: str, employee_id: str, date_: Optional[dt.datetime], yes: bool) -> None:
    week = WeekWindow.containing(as_date(date_))
    with authenticated_client() as client:
        week_review = load_review(client, employee_id, week)
        render_review(week_review, employee_id, week)
        if not week_review.entries:
            return

        if not yes:
            click.confirm(
                f"Are you sure you want to {action} the selected timesheets?", abort=True
            )

        service = ManagerService(client)
        if action == "APPROVE":
            envelope = service.approve(week_review.timesheet_ids)
        else:
            envelope = service.reject(week_review.timesheet_ids)

    if not envelope.flag:
        raise APIError(envelope.message)
    click.echo(format_success(envelope.message))


@review.command(name="approve")
@click.option("--employee-id", required=True, help=EMPLOYEE_ID_HELP)
@click.option("--date", "date_", type=DATE_TYPE, default=None, help=DATE_OPTION_HELP)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def approve(employee_id: str, date_: Optional[dt.datetime], yes: bool):
    """Approve every entry of one employee's week."""
    with with_error_handling(debug_enabled()):
        _decide("APPROVE", employee_id, date_, yes)


@review.command(name="reject")
@click.option("--employee-id", required=True, help=EMPLOYEE_ID_HELP)
@click.option("--date", "date_", type=DATE_TYPE, default=None, help=DATE_OPTION_HELP)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def reject(employee_id: str, date_: Optional[dt.datetime], yes: bool):
    """Reject every entry of one employee's week."""
    with with_error_handling(debug_enabled()):
        _decide("REJECT", employee_id, date_, yes)
