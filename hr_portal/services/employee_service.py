"""Employee and client record services."""

import logging
from typing import Any, List, Optional

from hr_portal.models.base import parse_many
from hr_portal.models.envelope import WebResponse, page_items
from hr_portal.models.people import Client, ClientModel, Employee, EmployeeUpdate
from hr_portal.services.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)


class EmployeeService:
    """Employee profile and administration endpoints."""

    PROFILE_PATH = "/employee/view/profile"
    LIST_PATH = "/admin/view/employees"
    DETAIL_PATH = "/admin/view/employee/{employee_id}"
    UPDATE_PATH = "/admin/employee/update/{employee_id}"
    DOCUMENT_DELETE_PATH = "/admin/employee/{employee_id}/document/{document_id}"
    EQUIPMENT_DELETE_PATH = "/admin/equipment/delete/{equipment_id}"

    def __init__(self, client: ApiClient):
        self.client = client

    def get_profile(self) -> Employee:
        """The employee record of the logged-in user."""
        envelope = self.client.query(
            self.PROFILE_PATH, default_message="Failed to fetch profile"
        )
        return Employee.model_validate(envelope.response)

    def get_employee(self, employee_id: str) -> Employee:
        if not employee_id:
            raise ApiError("Employee id is required", status=400)
        envelope = self.client.query(
            self.DETAIL_PATH.format(employee_id=employee_id),
            default_message="Failed to fetch employee",
        )
        return Employee.model_validate(envelope.response)

    def list_employees(
        self, page: Optional[int] = None, size: Optional[int] = None
    ) -> List[Employee]:
        params = {"page": page, "size": size}
        params = {key: value for key, value in params.items() if value is not None}
        envelope = self.client.query(
            self.LIST_PATH, params=params, default_message="Failed to fetch employees"
        )
        return parse_many(Employee, page_items(envelope.response))

    def update_employee(self, employee_id: str, update: EmployeeUpdate) -> WebResponse[Any]:
        """Send a partial update; fields left as None are not sent."""
        if not employee_id:
            return WebResponse.failure("Employee id is required", status=400)

        payload = update.to_payload()
        if not payload:
            return WebResponse.failure("No employee fields to update", status=400)

        return self.client.mutate(
            "PUT",
            self.UPDATE_PATH.format(employee_id=employee_id),
            json=payload,
            success_message="Employee updated successfully",
            failure_message="Failed to update employee",
        )

    def delete_document(self, employee_id: str, document_id: str) -> WebResponse[Any]:
        if not employee_id or not document_id:
            return WebResponse.failure("Employee id and document id are required", status=400)
        return self.client.mutate(
            "DELETE",
            self.DOCUMENT_DELETE_PATH.format(
                employee_id=employee_id, document_id=document_id
            ),
            success_message="Document deleted successfully",
            failure_message="Failed to delete document",
        )

    def delete_equipment(self, equipment_id: str) -> WebResponse[Any]:
        if not equipment_id:
            return WebResponse.failure("Equipment id is required", status=400)
        return self.client.mutate(
            "DELETE",
            self.EQUIPMENT_DELETE_PATH.format(equipment_id=equipment_id),
            success_message="Equipment deleted successfully",
            failure_message="Failed to delete equipment",
        )


class ClientService:
    """Client company endpoints."""

    LIST_PATH = "/admin/view/clients"
    DETAIL_PATH = "/admin/view/client/{client_id}"
    REGISTER_PATH = "/admin/client/register"

    def __init__(self, client: ApiClient):
        self.client = client

    def list_clients(self) -> List[Client]:
        envelope = self.client.query(
            self.LIST_PATH, default_message="Failed to fetch clients"
        )
        return parse_many(Client, page_items(envelope.response))

    def get_client(self, client_id: str) -> Client:
        if not client_id:
            raise ApiError("Client id is required", status=400)
        envelope = self.client.query(
            self.DETAIL_PATH.format(client_id=client_id),
            default_message="Failed to fetch client",
        )
        return Client.model_validate(envelope.response)

    def create_client(self, model: ClientModel) -> WebResponse[Any]:
        logger.info(f"Registering client {model.company_name}")
        return self.client.mutate(
            "POST",
            self.REGISTER_PATH,
            json=model.to_payload(),
            success_message="Client created successfully",
            failure_message="Failed to create client",
        )
