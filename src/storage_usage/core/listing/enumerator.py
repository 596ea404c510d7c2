"""Enumerator enforcing the listing contract over a backend client.

Backends are free to raise instead of yielding error items, to keep going
after an error, or to emit locations with mixed separators. The enumerator
turns whatever a client produces into a well-formed sequence:

- lazily pulled, one item at a time;
- locations normalized, directories ending with exactly one separator;
- at most one error item, always the last one;
- the backend iterator is closed when the consumer stops early.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator

from storage_usage.core.errors import MalformedResponseError, StorageError, from_os_error
from storage_usage.types.models import ListingItem, ListOrder
from storage_usage.types.protocols import ListingClient
from storage_usage.utils.paths import normalize_location

logger = logging.getLogger(__name__)


class Enumerator:
    """Lazy, fail-terminated enumeration of one location.

    Attributes:
        client: Backend listing client bound to the location
    """

    def __init__(self, client: ListingClient) -> None:
        """Initialize the enumerator.

        Args:
            client: Backend listing client bound to the location
        """
        self.client: ListingClient = client

    @property
    def location(self) -> str:
        """Normalized address of the enumerated location."""
        return normalize_location(self.client.location)

    def enumerate(
        self,
        *,
        recursive: bool = False,
        include_incomplete: bool = False,
        order: ListOrder = ListOrder.DIR_FIRST,
    ) -> Iterator[ListingItem]:
        """Yield the entries of the location.

        Args:
            recursive: Flatten the whole subtree instead of direct children only
            include_incomplete: Include in-progress items
            order: Advisory ordering hint forwarded to the backend

        Yields:
            ListingItem values; an error item ends the sequence
        """
        logger.debug(
            "Enumerating location",
            extra={"location": self.location, "recursive": recursive, "order": order.value},
        )
        source: Iterator[ListingItem] | None = None
        try:
            source = iter(
                self.client.list(
                    recursive=recursive,
                    include_incomplete=include_incomplete,
                    order=order,
                )
            )
            for raw in source:
                item = self._check(raw)
                yield item
                if item.error is not None:
                    return
        except StorageError as exc:
            yield ListingItem.failed(exc)
        except OSError as exc:
            yield ListingItem.failed(from_os_error(exc, self.location))
        finally:
            close = getattr(source, "close", None)
            if callable(close):
                _ = close()

    def _check(self, raw: object) -> ListingItem:
        """Validate one backend item and normalize its entry.

        Args:
            raw: Item as produced by the backend

        Returns:
            The normalized item, or an error item describing the violation
        """
        if not isinstance(raw, ListingItem) or (raw.entry is None) == (raw.error is None):
            return ListingItem.failed(
                MalformedResponseError(
                    "Listing produced an item that is neither an entry nor an error",
                    self.location,
                    {"item": repr(raw)},
                )
            )

        entry = raw.entry
        if entry is None:
            return raw

        if entry.size < 0:
            return ListingItem.failed(
                MalformedResponseError(
                    f"Listing reported a negative size ({entry.size})",
                    entry.location,
                )
            )

        location = normalize_location(entry.location, is_dir=entry.is_dir)
        if location == entry.location:
            return raw
        return ListingItem.of(dataclasses.replace(entry, location=location))
