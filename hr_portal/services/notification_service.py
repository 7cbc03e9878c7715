"""Notification inbox service."""

import logging
from typing import Any, List

from hr_portal.models.base import parse_many
from hr_portal.models.envelope import WebResponse, page_items
from hr_portal.models.people import Notification
from hr_portal.services.api_client import ApiClient

logger = logging.getLogger(__name__)


class NotificationService:
    """Reads and clears the logged-in user's notifications."""

    LIST_PATH = "/notification/getAllNotifications"
    READ_PATH = "/notification/read"
    CLEAR_PATH = "/notification/clear"
    CLEAR_ALL_PATH = "/notification/clearAll"

    def __init__(self, client: ApiClient):
        self.client = client

    def list_notifications(self) -> List[Notification]:
        envelope = self.client.query(
            self.LIST_PATH, default_message="Failed to fetch notifications"
        )
        return parse_many(Notification, page_items(envelope.response))

    def mark_as_read(self, notification_id: str) -> WebResponse[Any]:
        if not notification_id:
            return WebResponse.failure("Notification id is required", status=400)
        return self.client.mutate(
            "PATCH",
            self.READ_PATH,
            params={"notificationId": notification_id},
            success_message="Notification marked as read",
            failure_message="Failed to mark notification as read",
        )

    def clear(self, notification_id: str) -> WebResponse[Any]:
        if not notification_id:
            return WebResponse.failure("Notification id is required", status=400)
        return self.client.mutate(
            "DELETE",
            self.CLEAR_PATH,
            params={"notificationId": notification_id},
            success_message="Notification cleared",
            failure_message="Failed to clear notification",
        )

    def clear_all(self) -> WebResponse[Any]:
        return self.client.mutate(
            "DELETE",
            self.CLEAR_ALL_PATH,
            success_message="All notifications cleared",
            failure_message="Failed to clear notifications",
        )
