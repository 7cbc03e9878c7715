"""Leave summary commands."""

from typing import Optional

import click

from hr_portal.cli.error_handlers import with_error_handling
from hr_portal.cli.utils.formatters import format_hours, format_info, format_table
from hr_portal.cli.utils.session import authenticated_client, debug_enabled, employee_id_of
from hr_portal.models.leave import LeaveStatus
from hr_portal.services.leave_service import LeaveService


@click.group(name="leaves")
def leaves():
    """View your leave requests."""


@leaves.command(name="list")
@click.option("--year", type=int, default=None, help="Only requests in this year")
@click.option(
    "--status",
    type=click.Choice([status.value for status in LeaveStatus], case_sensitive=False),
    default=None,
    help="Only requests with this status (default: all)",
)
def list_leaves(year: Optional[int], status: Optional[str]):
    """List the logged-in employee's leave requests."""
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            requests = LeaveService(client).leave_summary(
                employee_id_of(client),
                status=status.upper() if status else None,
                year=year,
            )

        if not requests:
            click.echo(format_info("No leave requests found"))
            return

        rows = [
            [
                str(request.from_date or "-"),
                str(request.to_date or "-"),
                request.leave_category_type or "-",
                format_hours(request.leave_duration) if request.leave_duration is not None else "-",
                request.status or "-",
                request.subject,
            ]
            for request in requests
        ]
        click.echo(format_table(["From", "To", "Category", "Days", "Status", "Subject"], rows))
