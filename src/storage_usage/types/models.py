"""Data models for storage-usage.

This module defines the immutable dataclasses passed between the listing
backends, the enumerator, the aggregator and the output layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storage_usage.core.errors import StorageError

SEPARATOR = "/"


class EntryKind(str, Enum):
    """Enumeration for entry types."""

    FILE = "file"
    DIRECTORY = "directory"


class ListOrder(str, Enum):
    """Advisory ordering hint passed to listing backends."""

    LEXICAL = "lexical"
    DIR_FIRST = "dir_first"


class AggregateStatus(str, Enum):
    """Outcome of a subtree aggregation."""

    SUCCESS = "success"


@dataclass(slots=True, frozen=True)
class Entry:
    """One file or directory produced by an enumeration.

    ``location`` is always normalized: ``/`` separators only, and directories
    end with exactly one trailing separator.
    """

    location: str
    name: str
    kind: EntryKind
    size: int = 0
    last_modified: datetime | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(slots=True, frozen=True)
class ListingItem:
    """Element of an enumeration sequence: an entry or the terminal error."""

    entry: Entry | None = None
    error: StorageError | None = None

    @classmethod
    def of(cls, entry: Entry) -> ListingItem:
        return cls(entry=entry)

    @classmethod
    def failed(cls, error: StorageError) -> ListingItem:
        return cls(error=error)


@dataclass(slots=True, frozen=True)
class Depth:
    """How many directory levels produce a printed summary.

    ``limit is None`` means unlimited. Counting never depends on the depth,
    only printing does.
    """

    limit: int | None = None

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 0:
            msg = f"depth limit must be non-negative, got: {self.limit}"
            raise ValueError(msg)

    @classmethod
    def unlimited(cls) -> Depth:
        return cls(None)

    @classmethod
    def limited(cls, levels: int) -> Depth:
        return cls(levels)

    @classmethod
    def from_int(cls, value: int) -> Depth:
        """Parse the signed form where any negative value means unlimited."""
        if value < 0:
            return cls.unlimited()
        return cls.limited(value)

    @property
    def is_unlimited(self) -> bool:
        return self.limit is None

    def descend(self) -> Depth:
        """Depth for the next level down; only a positive limit decrements."""
        if self.limit is None or self.limit == 0:
            return self
        return Depth(self.limit - 1)

    def __str__(self) -> str:
        return "unlimited" if self.limit is None else str(self.limit)


@dataclass(slots=True, frozen=True)
class AggregateResult:
    """Disk usage of one subtree, as handed to the output layer."""

    prefix: str
    total_size: int
    status: AggregateStatus = AggregateStatus.SUCCESS
