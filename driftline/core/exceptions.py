"""Shared exceptions module."""

from typing import Any, Dict


class DriftlineException(Exception):
    """Base exception for the Driftline client."""

    pass


class CollectorResponseError(DriftlineException):
    """Exception raised when the collector answers with a non-2xx status."""

    def __init__(self, status_code: int, detail: Dict[str, Any]):
        """Create a new CollectorResponseError instance.

        Args:
        ----
            status_code (int): HTTP status returned by the collector.
            detail (dict): Parsed JSON error body, or an ``Unknown error`` placeholder.

        """
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"collector returned {status_code}: {detail}")
