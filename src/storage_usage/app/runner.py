"""Application runner for storage-usage."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Final, TextIO

from storage_usage.core.errors import StorageError
from storage_usage.core.listing.filesystem import FilesystemResolver
from storage_usage.core.listing.lister import list_entries
from storage_usage.core.usage.aggregator import DiskUsageAggregator
from storage_usage.output.messages import ErrorMessage
from storage_usage.output.printer import Printer
from storage_usage.types.models import Depth

if TYPE_CHECKING:
    from storage_usage.core.config import AppConfig
    from storage_usage.types.protocols import ClientResolver

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS: Final[int] = 0
EXIT_ERROR: Final[int] = 1


class ApplicationRunner:
    """Runs listing and disk usage commands against configured backends.

    Attributes:
        config: Validated application configuration
        resolver: Resolver turning addresses into listing clients
        printer: Sink for output and error records
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        resolver: ClientResolver | None = None,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
    ) -> None:
        """Initialize the application runner.

        Args:
            config: Validated application configuration
            resolver: Resolver override; defaults to the local filesystem
                resolver with the configured aliases
            stream: Output stream override (stdout when None)
            error_stream: Error stream override (stderr when None)
        """
        self.config: AppConfig = config
        self.resolver: ClientResolver = resolver if resolver is not None else FilesystemResolver(config.aliases)
        self.printer: Printer = Printer(
            json_output=config.output.json_output,
            theme=config.output.to_theme(),
            stream=stream,
            error_stream=error_stream,
        )

    def run_list(self, address: str, *, recursive: bool = False, include_incomplete: bool = False) -> int:
        """List one target.

        Args:
            address: Target to list
            recursive: List the whole subtree
            include_incomplete: Include in-progress items (also enabled by config)

        Returns:
            Process exit code
        """
        try:
            count = list_entries(
                self.resolver,
                address,
                printer=self.printer,
                recursive=recursive,
                include_incomplete=include_incomplete or self.config.listing.include_incomplete,
                order=self.config.listing.order,
            )
        except StorageError as exc:
            self._report(exc, f"Unable to list folder `{address}`.")
            return EXIT_ERROR

        logger.info("Listed target", extra={"address": address, "entries": count})
        return EXIT_SUCCESS

    def run_du(self, addresses: Sequence[str], depth: Depth) -> int:
        """Summarize disk usage of each target independently.

        A failing target does not stop the remaining ones; the exit code
        reflects whether any target failed.

        Args:
            addresses: Targets to summarize
            depth: Printing depth applied to every target

        Returns:
            Process exit code
        """
        aggregator = DiskUsageAggregator(
            self.resolver,
            self.printer,
            include_incomplete=self.config.listing.include_incomplete,
        )

        first_error: StorageError | None = None
        for address in addresses:
            try:
                total = aggregator.compute_usage(address, depth)
            except StorageError as exc:
                self._report(exc, f"Failed to summarize disk usage `{address}`.")
                if first_error is None:
                    first_error = exc
                continue
            logger.info("Summarized target", extra={"address": address, "total_bytes": total})

        return EXIT_ERROR if first_error is not None else EXIT_SUCCESS

    def _report(self, error: StorageError, message: str) -> None:
        logger.debug(message, extra={"kind": error.kind, "location": error.location})
        self.printer.print_error(ErrorMessage.from_error(error, message))
