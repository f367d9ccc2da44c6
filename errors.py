from typing import Any, Optional


class DashboardError(Exception):
    """Base exception for the dashboard."""


class ValidationError(DashboardError, ValueError):
    """Raised when an input record or argument is invalid.

    ``index`` and ``record`` point at the offending input when the error
    comes from a collection.
    """

    def __init__(self, message: str, index: Optional[int] = None, record: Any = None):
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)
        self.index = index
        self.record = record


class DataSourceError(DashboardError):
    """Raised when a data source fetch fails."""

    def __init__(self, message: str, platform: Optional[str] = None):
        super().__init__(message)
        self.platform = platform
