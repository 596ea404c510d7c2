"""Protocol definitions for component interfaces.

This module defines structural subtyping protocols for the collaborators the
core depends on: listing backends, the address resolver, and the output sink.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from storage_usage.types.models import ListingItem, ListOrder

if TYPE_CHECKING:
    from storage_usage.output.theme import Theme


@runtime_checkable
class ListingClient(Protocol):
    """Protocol for a live listing handle bound to one location."""

    @property
    def location(self) -> str:
        """Normalized address of the location this client lists."""
        ...

    def list(
        self,
        *,
        recursive: bool,
        include_incomplete: bool,
        order: ListOrder,
    ) -> Iterator[ListingItem]:
        """Enumerate the location.

        Args:
            recursive: Flatten the whole subtree instead of direct children only
            include_incomplete: Include in-progress items
            order: Advisory ordering hint

        Returns:
            Lazy sequence of entries, optionally ending with one error item
        """
        ...


class ClientResolver(Protocol):
    """Protocol turning a user-supplied address into a listing client."""

    def resolve(self, address: str) -> ListingClient:
        """Resolve an address.

        Args:
            address: User-supplied address, possibly alias-prefixed

        Returns:
            Listing client for the address

        Raises:
            StorageError: If the address cannot be resolved
        """
        ...


class Message(Protocol):
    """Protocol for printable output records."""

    def to_json(self) -> str:
        """Indented structured encoding for scripting consumers."""
        ...

    def to_string(self, theme: Theme) -> str:
        """Human-readable line, colorized through the theme."""
        ...


class MessageSink(Protocol):
    """Protocol for the component that renders output records."""

    def print_message(self, message: Message) -> None: ...
