"""Error hierarchy for listing and disk usage operations.

Every failure surfaced by a listing backend, the address resolver, or the
aggregation walk is a ``StorageError`` subclass. Errors carry the offending
location and a free-form context mapping for diagnostics; the root address
being processed is attached with ``annotate`` once the error reaches the
operation that owns that root.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base exception for all storage enumeration errors."""

    kind: str = "storage error"

    def __init__(
        self,
        message: str,
        location: str | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny] # diagnostic context
    ) -> None:
        """Initialize StorageError.

        Args:
            message: Error message
            location: Location that caused the error
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.message: str = message
        self.location: str | None = location
        self.target: str | None = None
        self.context: dict[str, Any] = dict(context or {})  # pyright: ignore[reportExplicitAny] # diagnostic context
        if location is not None:
            self.context.setdefault("location", location)

    def annotate(self, target: str) -> StorageError:
        """Record the root address whose processing raised this error.

        An already annotated error keeps its first target.

        Args:
            target: Root address of the listing or aggregation

        Returns:
            The same error instance, for ``raise err.annotate(...)``
        """
        if self.target is None:
            self.target = target
            self.context["target"] = target
        return self

    def __str__(self) -> str:
        if self.location:
            return f"{self.message} ({self.location})"
        return self.message


class NotFoundError(StorageError):
    """Raised when a location does not exist."""

    kind = "not found"


class PermissionDeniedError(StorageError):
    """Raised when access to a location is refused."""

    kind = "permission denied"


class TransientTransportError(StorageError):
    """Raised for I/O or transport failures that may succeed on retry."""

    kind = "transport failure"


class MalformedResponseError(StorageError):
    """Raised when a backend produces an item that violates the listing contract."""

    kind = "malformed response"


class InvalidAddressError(StorageError):
    """Raised when an address cannot be resolved to a listing client."""

    kind = "invalid address"


def from_os_error(exc: OSError, location: str) -> StorageError:
    """Translate an ``OSError`` raised by a local backend into a ``StorageError``.

    Args:
        exc: Original operating system error
        location: Location being accessed when the error occurred

    Returns:
        Matching StorageError subclass instance (not raised)
    """
    reason = exc.strerror or str(exc)
    context: dict[str, Any] = {"errno": exc.errno}  # pyright: ignore[reportExplicitAny]
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return NotFoundError(f"Location not found: {reason}", location, context)
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(f"Access denied: {reason}", location, context)

    logger.debug("Unclassified OS error mapped to transport failure", extra={"errno": exc.errno})
    return TransientTransportError(f"I/O failure: {reason}", location, context)
