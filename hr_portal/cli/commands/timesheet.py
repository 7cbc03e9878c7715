"""Timesheet register commands."""

import datetime as dt
import math
from typing import List, Optional, Tuple

import click

from hr_portal.cli.error_handlers import (
    DataValidationError,
    ProcessingError,
    with_error_handling,
)
from hr_portal.cli.utils.formatters import (
    echo_messages,
    format_dataframe,
    format_error,
    format_info,
    format_success,
    format_warning,
)
from hr_portal.cli.utils.session import (
    DATE_TYPE,
    as_date,
    authenticated_client,
    build_register,
    debug_enabled,
)
from hr_portal.register.register import MessageLevel, TimesheetRegister
from hr_portal.register.week import WeekWindow

DATE_OPTION_HELP = "Any date in the week (YYYY-MM-DD, default: today)"


def parse_hours(ctx, param, values) -> List[Tuple[dt.date, float]]:
    """Parse repeated ``YYYY-MM-DD=HOURS`` option values."""
    parsed = []
    for value in values:
        day_text, sep, hours_text = value.partition("=")
        if not sep:
            raise click.BadParameter(f"'{value}' is not in YYYY-MM-DD=HOURS form")
        try:
            day = dt.date.fromisoformat(day_text.strip())
            hours = float(hours_text)
        except ValueError as e:
            raise click.BadParameter(f"'{value}': {e}") from e
        if not math.isfinite(hours):
            raise click.BadParameter(f"'{value}': hours must be a finite number")
        parsed.append((day, hours))
    return parsed


def render_week(register: TimesheetRegister) -> None:
    """Print the grid with day status, totals and lock state."""
    week = register.week
    headers = ["Task"] + [f"{day:%a %d %b}" for day in week.dates] + ["Total"]

    click.echo()
    click.echo(f"Week {week}  [{register.state.value}]")
    click.echo(format_dataframe(register.grid.to_dataframe(), headers=headers))

    flagged = [
        f"{day:%a %d %b}: {register.day_status(day)}"
        for day in week.dates
        if register.day_status(day) and register.day_status(day) != "Weekend"
    ]
    if flagged:
        click.echo(format_info("Days off: " + "; ".join(flagged)))


def _has_errors(register: TimesheetRegister) -> bool:
    return any(message.level == MessageLevel.ERROR for message in register.messages)


def _require_loaded(register: TimesheetRegister) -> None:
    """Refuse to work on a week whose entries could not be fetched."""
    if not register.loaded:
        raise ProcessingError(
            f"Week {register.week} could not be loaded; nothing was changed",
            recovery_hint="Try again once the HR backend is reachable",
        )


@click.group(name="timesheet")
def timesheet():
    """View, edit and submit your weekly timesheet."""


@timesheet.command(name="show")
@click.option("--date", "date_", type=DATE_TYPE, default=None, help=DATE_OPTION_HELP)
def show(date_: Optional[dt.datetime]):
    """Show the week's grid.

    Example:
        hr-portal timesheet show --date 2024-01-03
    """
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            register = build_register(client, as_date(date_))
            echo_messages(register.drain_messages())
            render_week(register)


@timesheet.command(name="log")
@click.option("--task", "task_name", required=True, help="Task name (row) to log hours on")
@click.option(
    "--hours",
    "hours",
    multiple=True,
    required=True,
    callback=parse_hours,
    help="Hours for one day as YYYY-MM-DD=HOURS (repeatable)",
)
@click.option("--date", "date_", type=DATE_TYPE, default=None, help=DATE_OPTION_HELP)
def log_hours(task_name: str, hours: List[Tuple[dt.date, float]], date_: Optional[dt.datetime]):
    """Set hours on a task row and save.

    Example:
        hr-portal timesheet log --task Build --hours 2024-01-01=8 --hours 2024-01-02=7.5
    """
    with with_error_handling(debug_enabled()):
        anchor = as_date(date_) if date_ is not None else hours[0][0]
        week = WeekWindow.containing(anchor)
        outside = [day for day, _ in hours if not week.contains(day)]
        if outside:
            raise DataValidationError(
                f"{', '.join(str(day) for day in outside)} not in the week {week}",
                recovery_hint="Log one week at a time",
            )

        with authenticated_client() as client:
            register = build_register(client, anchor)
            echo_messages(register.drain_messages())
            _require_loaded(register)

            if register.locked:
                click.echo(format_info("Timesheet is locked"))
                return

            row_index = register.find_row(task_name)
            if row_index is None:
                blank = [i for i, row in enumerate(register.rows) if not row.task_name.strip()]
                if blank:
                    row_index = blank[0]
                else:
                    register.add_row()
                    row_index = len(register.rows) - 1
                register.set_task_name(row_index, task_name)

            for day, value in hours:
                register.set_hours(row_index, day, value)

            result = register.save()
            echo_messages(register.drain_messages())
            if not result.ok:
                raise ProcessingError("Hours were not saved")
            if result.stale_ids:
                click.echo(
                    format_warning(
                        f"{len(result.stale_ids)} zeroed persisted cell(s) keep their saved hours; "
                        "delete the task row to remove them"
                    )
                )
            render_week(register)


@timesheet.command(name="validate")
@click.option("--date", "date_", type=DATE_TYPE, default=None, help=DATE_OPTION_HELP)
def validate(date_: Optional[dt.datetime]):
    """Check the week against the submission rules.

    Exits with code 3 when the week has violations.
    """
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            register = build_register(client, as_date(date_))
            echo_messages(register.drain_messages())
            _require_loaded(register)
            report = register.validate()

        for message in report.error_messages():
            click.echo(format_error(message))
        for message in report.warning_messages():
            click.echo(format_warning(message))

        if not report.is_valid():
            raise DataValidationError(
                f"Week {register.week} has {report.error_count} violation(s)"
            )
        click.echo(format_success(f"Week {register.week} is ready to submit"))


@timesheet.command(name="submit")
@click.option("--date", "date_", type=DATE_TYPE, default=None, help=DATE_OPTION_HELP)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def submit(date_: Optional[dt.datetime], yes: bool):
    """Validate, save and submit the week for approval."""
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            register = build_register(client, as_date(date_))
            echo_messages(register.drain_messages())
            _require_loaded(register)

            if not yes and not register.locked:
                click.confirm(
                    f"Submit the week {register.week} for approval?", abort=True
                )

            submitted = register.submit()
            failed = _has_errors(register)
            echo_messages(register.drain_messages())

        if not submitted and failed:
            raise ProcessingError(
                "Week was not submitted",
                recovery_hint="Fix the problems above and submit again",
            )


@timesheet.command(name="delete-task")
@click.option("--task", "task_name", required=True, help="Task name of the row to delete")
@click.option("--date", "date_", type=DATE_TYPE, default=None, help=DATE_OPTION_HELP)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def delete_task(task_name: str, date_: Optional[dt.datetime], yes: bool):
    """Delete a task row and its saved entries for the week."""
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            register = build_register(client, as_date(date_))
            echo_messages(register.drain_messages())
            _require_loaded(register)

            row_index = register.find_row(task_name)
            if row_index is None:
                raise DataValidationError(f"No task named '{task_name}' in week {register.week}")

            if not yes and not register.locked:
                click.confirm(f"Delete '{task_name}' and its entries?", abort=True)

            deleted = register.delete_row(row_index)
            failed = _has_errors(register)
            echo_messages(register.drain_messages())

        if not deleted and failed:
            raise ProcessingError("Task row was not deleted")
