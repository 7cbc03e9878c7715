"""Holiday calendar commands."""

from typing import Optional

import click

from hr_portal.cli.utils.formatters import format_info, format_table
from hr_portal.cli.utils.session import authenticated_client, debug_enabled
from hr_portal.cli.error_handlers import with_error_handling
from hr_portal.services.holiday_service import HolidayService


@click.group(name="holidays")
def holidays():
    """Browse the holiday calendar."""


@holidays.command(name="list")
@click.option("--year", type=int, default=None, help="Only holidays in this year")
@click.option("--region", default=None, help="Only holidays for this region (case-insensitive)")
@click.option("--all", "show_all", is_flag=True, help="Include inactive holidays")
def list_holidays(year: Optional[int], region: Optional[str], show_all: bool):
    """List holidays, oldest first.

    Example:
        hr-portal holidays list --year 2024 --region Bavaria
    """
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            entries = HolidayService(client).list_calendars()

        if not show_all:
            entries = [entry for entry in entries if entry.holiday_active]
        if year is not None:
            entries = [entry for entry in entries if entry.holiday_date.year == year]
        if region:
            wanted = region.strip().lower()
            entries = [
                entry for entry in entries if entry.location_region.strip().lower() == wanted
            ]

        if not entries:
            click.echo(format_info("No holidays found"))
            return

        entries.sort(key=lambda entry: entry.holiday_date)
        rows = [
            [
                entry.holiday_date.isoformat(),
                f"{entry.holiday_date:%a}",
                entry.holiday_name,
                entry.holiday_type,
                entry.location_region or "-",
                "yes" if entry.holiday_active else "no",
            ]
            for entry in entries
        ]
        click.echo(
            format_table(["Date", "Day", "Name", "Type", "Region", "Active"], rows)
        )
        click.echo(f"\n{len(entries)} holiday(s)")
