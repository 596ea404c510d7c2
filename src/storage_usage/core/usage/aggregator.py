"""Recursive disk usage aggregation.

The aggregator walks a location with shallow listings, recursing into every
sub-directory before moving on to the next sibling, and sums file sizes.
Counting always covers the whole subtree; the depth only decides which
levels print a summary record.

Per call the walk goes through ``Resolving -> Listing -> (Recursing)* ->
Emitting``; any error at any level moves it to ``Failed`` and unwinds every
enclosing call without visiting remaining siblings or emitting records for
the failed subtree's ancestors.
"""

from __future__ import annotations

import logging
from contextlib import closing

from storage_usage.core.errors import StorageError
from storage_usage.core.listing.enumerator import Enumerator
from storage_usage.output.messages import DiskUsageMessage
from storage_usage.types.models import AggregateResult, AggregateStatus, Depth, ListOrder
from storage_usage.types.protocols import ClientResolver, MessageSink
from storage_usage.utils.formatting import compact_size
from storage_usage.utils.logging import target_context
from storage_usage.utils.paths import normalize_location, relativize, with_dir_suffix

logger = logging.getLogger(__name__)


class DiskUsageAggregator:
    """Summarize disk usage of folder prefixes recursively.

    Locations yielded by a listing must be addresses the resolver accepts,
    since every sub-directory is resolved again before it is listed.

    Attributes:
        resolver: Resolver turning addresses into listing clients
        sink: Receives one DiskUsageMessage per printed level
        include_incomplete: Count in-progress items
    """

    def __init__(
        self,
        resolver: ClientResolver,
        sink: MessageSink,
        *,
        include_incomplete: bool = False,
    ) -> None:
        """Initialize the aggregator.

        Args:
            resolver: Resolver turning addresses into listing clients
            sink: Receives one DiskUsageMessage per printed level
            include_incomplete: Count in-progress items
        """
        self.resolver: ClientResolver = resolver
        self.sink: MessageSink = sink
        self.include_incomplete: bool = include_incomplete

    def compute_usage(self, address: str, depth: Depth | None = None) -> int:
        """Total size of everything under ``address``.

        Summaries are emitted for directories at most ``depth`` levels below
        ``address`` (the address itself is level 0), children before their
        parent. With an unlimited depth every level is emitted.
        Prefixes are reported the way ``address`` names them, not as the
        backend locations they resolve to.

        Args:
            address: Root location, with or without a trailing separator
            depth: Printing depth, unlimited when None

        Returns:
            Sum of all file sizes in the subtree

        Raises:
            StorageError: The first error met anywhere in the subtree,
                annotated with ``address``
        """
        if depth is None:
            depth = Depth.unlimited()

        # The walk counts levels still to print, this one included
        levels = depth if depth.limit is None else Depth.limited(depth.limit + 1)

        with target_context(address):
            try:
                return self._walk(address, levels, with_dir_suffix(normalize_location(address)))
            except StorageError as exc:
                logger.debug(
                    "Failed to find disk usage recursively",
                    extra={"location": exc.location, "error": exc.message},
                )
                _ = exc.annotate(address)
                raise

    def _walk(self, address: str, levels: Depth, prefix: str) -> int:
        """Aggregate one directory level.

        Args:
            address: Location of this level
            levels: Levels still to print, this one included; zero means
                nothing prints from here down
            prefix: Location of this level as addressed by the caller

        Returns:
            Total size of this level's subtree
        """
        address = with_dir_suffix(normalize_location(address))

        enumerator = Enumerator(self.resolver.resolve(address))
        root = with_dir_suffix(enumerator.location)

        size = 0
        items = enumerator.enumerate(
            recursive=False,
            include_incomplete=self.include_incomplete,
            order=ListOrder.DIR_FIRST,
        )
        with closing(items):
            for item in items:
                if item.error is not None:
                    raise item.error

                entry = item.entry
                if entry is None:
                    continue

                # Some backends list the queried prefix as its own first entry
                if entry.location == root:
                    continue

                if entry.is_dir:
                    size += self._walk(
                        entry.location,
                        levels.descend(),
                        prefix + relativize(entry.location, root),
                    )
                else:
                    size += entry.size

        if levels.limit != 0:
            result = AggregateResult(prefix=prefix, total_size=size, status=AggregateStatus.SUCCESS)
            self.sink.print_message(DiskUsageMessage.from_result(result))

        logger.debug(
            "Aggregated prefix",
            extra={"location": root, "size": compact_size(size), "levels": str(levels)},
        )
        return size
