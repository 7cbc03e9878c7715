"""Payroll commands."""

import click

from hr_portal.cli.error_handlers import APIError, with_error_handling
from hr_portal.cli.utils.formatters import format_success
from hr_portal.cli.utils.session import authenticated_client, debug_enabled
from hr_portal.services.salary_service import SalaryService


@click.group(name="salary")
def salary():
    """Payroll operations (admin)."""


@salary.command(name="generate")
@click.option("--year", type=click.IntRange(min=1), required=True, help="Payroll year")
@click.option("--month", type=click.IntRange(1, 12), required=True, help="Payroll month (1-12)")
def generate(year: int, month: int):
    """Generate salaries for a month.

    Example:
        hr-portal salary generate --year 2024 --month 3
    """
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            envelope = SalaryService(client).generate_salary(year, month)

        if not envelope.flag:
            raise APIError(envelope.message or "Failed to generate salary")
        click.echo(format_success(envelope.message))
