"""Custom service layer errors."""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base error for service-layer failures."""


class ValidationError(ServiceError):
    """Raised when a business rule validation fails."""


class NotFoundError(ServiceError):
    """Raised when an entity is not found."""


class FetchError(ServiceError):
    """A read against the data store failed.

    Fetch errors are returned as values by the query client rather than
    raised, so callers can tell them apart from an empty result.
    """

    def __init__(
        self,
        table: str,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(f"{table}: {message}")
        self.table = table
        self.message = message
        self.cause = cause
