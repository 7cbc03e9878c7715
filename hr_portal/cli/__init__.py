"""HR portal CLI.

Command-line front end for the HR portal backend: the weekly timesheet
register, holiday and leave lookups, notifications, payroll and the
manager's timesheet review.
"""

import click

from hr_portal import __version__
from hr_portal.cli.commands import (
    holidays,
    leaves,
    notifications,
    review,
    salary,
    timesheet,
)
from hr_portal.config.logging_config import LoggingConfig, configure_logging
from hr_portal.utils.logging_utils import LogContext, generate_correlation_id


@click.group(help="HR Portal CLI - weekly timesheets, leave, holidays and approvals")
@click.option("--debug", is_flag=True, help="Verbose logging and full stack traces")
@click.version_option(version=__version__)
def cli(debug: bool):
    """HR Portal CLI main entry point."""
    logging_config = LoggingConfig.from_env()
    if debug:
        logging_config.log_level = "DEBUG"
    configure_logging(logging_config)


# Register commands
cli.add_command(timesheet)
cli.add_command(holidays)
cli.add_command(leaves)
cli.add_command(notifications)
cli.add_command(salary)
cli.add_command(review)


def main():
    """Main entry point for the CLI."""
    with LogContext(correlation_id=generate_correlation_id()):
        cli()


if __name__ == "__main__":
    main()
