"""Base model for all backend view models.

The backend speaks camelCase JSON and routinely omits fields. Every model
therefore reads camelCase aliases, accepts snake_case names in Python code,
and ignores fields it does not know about.
"""

import logging
from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

M = TypeVar("M", bound="BaseDataModel")


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration and helper methods for:
    - Parsing camelCase backend DTOs into snake_case attributes
    - Serialization back to camelCase request payloads
    - Validation on assignment

    Example:
        >>> class Person(BaseDataModel):
        ...     first_name: str
        >>> Person.model_validate({"firstName": "Asha"}).first_name
        'Asha'
        >>> Person(first_name="Asha").to_payload()
        {'firstName': 'Asha'}
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        # Backend DTOs carry many fields this client does not model
        extra="ignore",
        frozen=False,
        # Numeric ids from the backend are kept as strings
        coerce_numbers_to_str=True,
    )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready camelCase dict, dropping unset optionals."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


def coerce_date(value: Any) -> Any:
    """Trim an ISO datetime string (``2024-01-01T00:00:00Z``) to its date part.

    Used as a ``mode="before"`` validator; anything that is not a string is
    passed through for pydantic to handle.
    """
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        return value.split("T", 1)[0]
    return value


def blank_to_none(value: Any) -> Any:
    """Map empty identifiers (``""``) to ``None``."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def parse_many(model: Type[M], items: Iterable[Any]) -> List[M]:
    """Validate each raw DTO into ``model``, skipping malformed items.

    A single bad record must not hide the rest of a listing, so invalid items
    are logged and dropped.
    """
    parsed: List[M] = []
    for index, item in enumerate(items or []):
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                f"Skipping invalid {model.__name__} at index {index}: "
                f"{e.error_count()} error(s)"
            )
    return parsed
