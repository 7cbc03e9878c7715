"""Notification inbox commands."""

import click

from hr_portal.cli.error_handlers import APIError, with_error_handling
from hr_portal.cli.utils.formatters import format_info, format_success, format_table
from hr_portal.cli.utils.session import authenticated_client, debug_enabled
from hr_portal.models.envelope import WebResponse
from hr_portal.services.notification_service import NotificationService


def _report(envelope: WebResponse) -> None:
    if not envelope.flag:
        raise APIError(envelope.message)
    click.echo(format_success(envelope.message))


@click.group(name="notifications")
def notifications():
    """Read and clear your notifications."""


@notifications.command(name="list")
@click.option("--unread", is_flag=True, help="Only unread notifications")
def list_notifications(unread: bool):
    """List notifications."""
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            items = NotificationService(client).list_notifications()

        if unread:
            items = [item for item in items if not item.read]
        if not items:
            click.echo(format_info("No notifications"))
            return

        rows = [
            [item.notification_id, " " if item.read else "*", item.created_at or "-", item.message]
            for item in items
        ]
        click.echo(format_table(["ID", "New", "Created", "Message"], rows))


@notifications.command(name="read")
@click.argument("notification_id")
def read(notification_id: str):
    """Mark a notification as read."""
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            envelope = NotificationService(client).mark_as_read(notification_id)
        _report(envelope)


@notifications.command(name="clear")
@click.argument("notification_id")
def clear(notification_id: str):
    """Delete one notification."""
    with with_error_handling(debug_enabled()):
        with authenticated_client() as client:
            envelope = NotificationService(client).clear(notification_id)
        _report(envelope)


@notifications.command(name="clear-all")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def clear_all(yes: bool):
    """Delete every notification."""
    with with_error_handling(debug_enabled()):
        if not yes:
            click.confirm("Clear all notifications?", abort=True)
        with authenticated_client() as client:
            envelope = NotificationService(client).clear_all()
        _report(envelope)
