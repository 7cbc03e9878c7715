"""Response envelope shared by every backend endpoint."""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import Field, model_validator

from hr_portal.models.base import BaseDataModel

T = TypeVar("T")

_ENVELOPE_DEFAULTS = ("flag", "message", "status", "totalRecords")


class WebResponse(BaseDataModel, Generic[T]):
    """The ``{flag, message, status, response, totalRecords, otherInfo}`` envelope.

    ``flag`` is authoritative: callers treat ``flag=False`` as failure
    regardless of the HTTP status. Missing or null header fields fall back to
    their defaults so a sparse body still parses.
    """

    flag: bool = False
    message: str = ""
    status: int = 0
    response: Optional[T] = None
    total_records: int = 0
    other_info: Optional[Dict[str, Any]] = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (key in _ENVELOPE_DEFAULTS and value is None)
            }
        return data

    @classmethod
    def failure(cls, message: str, status: int = 500) -> "WebResponse[Any]":
        """Build a failed envelope without a backend round trip."""
        return cls(flag=False, message=message, status=status)


def page_items(response: Any) -> List[Any]:
    """Return the items of a list response.

    Paged endpoints wrap items as ``{"content": [...]}``; others return a
    bare list. Anything else yields an empty list.
    """
    if isinstance(response, dict):
        response = response.get("content")
    return response if isinstance(response, list) else []
