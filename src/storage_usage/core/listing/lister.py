"""Flat listing of a location."""

from __future__ import annotations

import logging
from contextlib import closing

from storage_usage.core.errors import StorageError
from storage_usage.core.listing.enumerator import Enumerator
from storage_usage.output.messages import ContentMessage
from storage_usage.types.models import ListOrder
from storage_usage.types.protocols import ClientResolver, MessageSink
from storage_usage.utils.logging import target_context
from storage_usage.utils.paths import relativize

logger = logging.getLogger(__name__)


def list_entries(
    resolver: ClientResolver,
    address: str,
    *,
    printer: MessageSink,
    recursive: bool = False,
    include_incomplete: bool = False,
    order: ListOrder = ListOrder.LEXICAL,
) -> int:
    """Print every entry under ``address``, one record per entry.

    Entry names are shown relative to the listed root, so a recursive listing
    never echoes the root address in front of each child.

    Args:
        resolver: Resolver turning the address into a listing client
        address: Location to list
        printer: Sink receiving one ContentMessage per entry
        recursive: List the whole subtree instead of direct children only
        include_incomplete: Include in-progress items
        order: Advisory ordering hint

    Returns:
        Number of entries printed

    Raises:
        StorageError: At the first error, annotated with ``address``; nothing
            is printed for the failing item
    """
    with target_context(address):
        try:
            enumerator = Enumerator(resolver.resolve(address))
        except StorageError as exc:
            _ = exc.annotate(address)
            raise

        root = enumerator.location
        printed = 0
        items = enumerator.enumerate(
            recursive=recursive,
            include_incomplete=include_incomplete,
            order=order,
        )
        with closing(items):
            for item in items:
                if item.error is not None:
                    logger.debug("Listing aborted", extra={"location": item.error.location})
                    raise item.error.annotate(address)
                if item.entry is None:
                    continue

                entry = item.entry
                printer.print_message(ContentMessage.from_entry(entry, relativize(entry.location, root)))
                printed += 1

        logger.debug("Listing complete", extra={"entries": printed})
        return printed
