"""Type definitions and protocols for storage-usage.

This package provides:
- Data models (immutable dataclasses)
- Protocol definitions (structural subtyping interfaces)
"""

from storage_usage.types.models import (
    SEPARATOR,
    AggregateResult,
    AggregateStatus,
    Depth,
    Entry,
    EntryKind,
    ListingItem,
    ListOrder,
)
from storage_usage.types.protocols import (
    ClientResolver,
    ListingClient,
    Message,
    MessageSink,
)

__all__ = [
    # Data models
    "SEPARATOR",
    "AggregateResult",
    "AggregateStatus",
    "Depth",
    "Entry",
    "EntryKind",
    "ListingItem",
    "ListOrder",
    # Protocols
    "ClientResolver",
    "ListingClient",
    "Message",
    "MessageSink",
]
