"""Employee, client and user models."""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from hr_portal.models.base import BaseDataModel, coerce_date


class Role(str, Enum):
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"
    CLIENT = "CLIENT"
    MANAGER = "MANAGER"


class User(BaseDataModel):
    """The logged-in principal.

    For admins ``user_id`` is the user id; for employees it is the employee id
    (that is what every employee-scoped endpoint expects).
    """

    user_id: str
    user_name: str = ""
    email: Optional[str] = None
    role: Optional[Role] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Address(BaseDataModel):
    address_id: Optional[str] = None
    house_no: str = ""
    street_name: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    pincode: str = ""
    address_type: str = ""


class Client(BaseDataModel):
    """A client company employees are billed to."""

    client_id: str
    company_name: str = ""
    contact_number: str = ""
    email: str = ""
    gst: str = ""
    currency: str = ""
    status: str = ""
    address_model: Optional[Address] = None


class ClientModel(BaseDataModel):
    """Create payload for a client."""

    company_name: str = Field(..., min_length=1)
    contact_number: str
    email: str = Field(..., min_length=3)
    gst: str = ""
    currency: str = "INR"
    pan_number: str = ""
    address_model: Address


class Employee(BaseDataModel):
    """Employee record as returned by the employee endpoints.

    Only the fields this client reads are modelled; documents, equipment and
    bank details stay on the backend.
    """

    employee_id: str
    first_name: str = ""
    last_name: str = ""
    company_email: str = ""
    personal_email: str = ""
    contact_number: str = ""
    designation: Optional[str] = None
    date_of_joining: Optional[dt.date] = None
    date_of_birth: Optional[dt.date] = None
    currency: str = ""
    rate_card: Optional[float] = None
    available_leaves: Optional[float] = None
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    reporting_manager_id: Optional[str] = None
    status: str = ""

    @field_validator("date_of_joining", "date_of_birth", mode="before")
    @classmethod
    def _trim_date(cls, v):
        return coerce_date(v)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class EmployeeUpdate(BaseDataModel):
    """Partial update payload for an employee; unset fields are not sent."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    personal_email: Optional[str] = None
    contact_number: Optional[str] = None
    alternate_contact_number: Optional[str] = None
    designation: Optional[str] = None
    client_id: Optional[str] = None
    reporting_manager_id: Optional[str] = None
    rate_card: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = None


class Notification(BaseDataModel):
    notification_id: str
    message: str = ""
    read: bool = Field(default=False, validation_alias=AliasChoices("read", "isRead"))
    created_at: Optional[str] = None
