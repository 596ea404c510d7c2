"""Local filesystem listing backend.

Provides a ``ListingClient`` over a local directory and a resolver that turns
user addresses (absolute paths, relative paths, or ``alias/sub/path`` with a
configured alias table) into such clients.

Directory symlinks are not followed: a symlink is listed as a file whose size
is the size of the link itself, so a tree walk cannot loop.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Final

from storage_usage.core.errors import InvalidAddressError, StorageError, from_os_error
from storage_usage.types.models import SEPARATOR, Entry, EntryKind, ListingItem, ListOrder
from storage_usage.utils.paths import normalize_location, with_dir_suffix

logger = logging.getLogger(__name__)

# Files still being written carry this suffix
INCOMPLETE_SUFFIX: Final[str] = ".partial"


def _location_of(path: Path, *, is_dir: bool) -> str:
    location = normalize_location(path.as_posix())
    return with_dir_suffix(location) if is_dir else location


class FilesystemClient:
    """Listing client bound to one local path.

    Attributes:
        path: Absolute local path being listed
    """

    def __init__(self, path: Path) -> None:
        """Initialize the client.

        Args:
            path: Local path, made absolute without resolving symlinks
        """
        self.path: Path = Path(os.path.abspath(path))
        self._is_dir: bool = self.path.is_dir()

    @property
    def location(self) -> str:
        """Normalized address of the listed path."""
        return _location_of(self.path, is_dir=self._is_dir)

    def list(
        self,
        *,
        recursive: bool = False,
        include_incomplete: bool = False,
        order: ListOrder = ListOrder.DIR_FIRST,
    ) -> Iterator[ListingItem]:
        """Enumerate the path.

        A path naming a file yields that single file. Any operating system
        error ends the sequence with one error item.

        Args:
            recursive: Walk the whole subtree depth-first, directories before
                their contents
            include_incomplete: Include files ending in ``INCOMPLETE_SUFFIX``
            order: Sort directories before files, or purely by name

        Yields:
            ListingItem values
        """
        try:
            if not self._is_dir:
                yield ListingItem.of(self._entry_for_root())
            elif recursive:
                yield from self._walk(self.path, self.location, include_incomplete, order)
            else:
                for entry in self._read_dir(self.path, self.location, include_incomplete, order):
                    yield ListingItem.of(entry)
        except StorageError as exc:
            logger.debug("Filesystem listing failed", extra={"location": exc.location})
            yield ListingItem.failed(exc)

    def _walk(
        self,
        path: Path,
        location: str,
        include_incomplete: bool,
        order: ListOrder,
    ) -> Iterator[ListingItem]:
        """Depth-first traversal yielding each directory before its contents."""
        for entry in self._read_dir(path, location, include_incomplete, order):
            yield ListingItem.of(entry)
            if entry.is_dir:
                yield from self._walk(path / entry.name, entry.location, include_incomplete, order)

    def _read_dir(
        self,
        path: Path,
        location: str,
        include_incomplete: bool,
        order: ListOrder,
    ) -> list[Entry]:
        """Read and sort the direct children of one directory.

        Raises:
            StorageError: If the directory or one of its children cannot be read
        """
        entries: list[Entry] = []
        try:
            with os.scandir(path) as iterator:
                for item in iterator:
                    is_dir = item.is_dir(follow_symlinks=False)
                    if not is_dir and not include_incomplete and item.name.endswith(INCOMPLETE_SUFFIX):
                        continue

                    stat = item.stat(follow_symlinks=False)
                    entries.append(
                        Entry(
                            location=location + item.name + (SEPARATOR if is_dir else ""),
                            name=item.name,
                            kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
                            size=0 if is_dir else stat.st_size,
                            last_modified=datetime.fromtimestamp(stat.st_mtime, UTC),
                        )
                    )
        except OSError as exc:
            raise from_os_error(exc, location) from exc

        if order == ListOrder.DIR_FIRST:
            entries.sort(key=lambda entry: (not entry.is_dir, entry.name))
        else:
            entries.sort(key=lambda entry: entry.name)
        return entries

    def _entry_for_root(self) -> Entry:
        try:
            stat = self.path.lstat()
        except OSError as exc:
            raise from_os_error(exc, self.location) from exc
        return Entry(
            location=self.location,
            name=self.path.name,
            kind=EntryKind.FILE,
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime, UTC),
        )


class FilesystemResolver:
    """Resolve user addresses to ``FilesystemClient`` instances.

    Attributes:
        aliases: Alias name to local directory mapping
    """

    def __init__(self, aliases: Mapping[str, Path] | None = None) -> None:
        """Initialize the resolver.

        Args:
            aliases: Alias name to local directory mapping
        """
        self.aliases: dict[str, Path] = dict(aliases or {})

    def expand(self, address: str) -> Path:
        """Expand an address into a local path without touching the filesystem.

        Args:
            address: Absolute path, relative path, or ``alias/sub/path``

        Returns:
            Local path for the address

        Raises:
            InvalidAddressError: If the address is empty or uses a URL scheme
        """
        if not address.strip():
            raise InvalidAddressError("Address must not be empty", address)

        normalized = normalize_location(address)
        if "://" in normalized:
            raise InvalidAddressError("No listing backend for URL addresses", address)

        head, _, rest = normalized.partition(SEPARATOR)
        if not normalized.startswith(SEPARATOR) and head in self.aliases:
            alias_root = self.aliases[head]
            return alias_root / rest if rest else alias_root
        return Path(normalized)

    def resolve(self, address: str) -> FilesystemClient:
        """Resolve an address into a client for an existing local path.

        Args:
            address: Absolute path, relative path, or ``alias/sub/path``

        Returns:
            Client bound to the address

        Raises:
            InvalidAddressError: If the address is malformed
            NotFoundError: If the path does not exist
            PermissionDeniedError: If the path cannot be inspected
        """
        path = self.expand(address)
        try:
            _ = path.lstat()
        except OSError as exc:
            raise from_os_error(exc, address) from exc

        logger.debug("Resolved address", extra={"address": address, "path": str(path)})
        return FilesystemClient(path)
