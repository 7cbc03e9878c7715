"""Salary generation service."""

import logging
from typing import Any

from hr_portal.models.envelope import WebResponse
from hr_portal.services.api_client import ApiClient
from hr_portal.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)


class SalaryService:
    """Triggers the backend's monthly salary run."""

    GENERATE_PATH = "/salary/generate"

    def __init__(self, client: ApiClient):
        self.client = client

    @log_function_call(include_args=True, level="INFO")
    def generate_salary(self, year: int, month: int) -> WebResponse[Any]:
        """Generate salaries for ``year``-``month``.

        Args:
            year: Four-digit year
            month: Month number, 1-12

        Raises:
            ValueError: If month is out of range
        """
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        if year < 1:
            raise ValueError(f"Invalid year: {year}")

        return self.client.mutate(
            "POST",
            self.GENERATE_PATH,
            json={"month": f"{year:04d}-{month:02d}"},
            success_message="Salary generated successfully",
            failure_message="Failed to generate salary",
        )
