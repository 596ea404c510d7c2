"""In-memory storage namespace for tests.

A tree is a nested mapping: an ``int`` value is a file of that size, a
mapping is a directory.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import UTC, datetime

from storage_usage.core.errors import NotFoundError, StorageError
from storage_usage.types.models import SEPARATOR, Entry, EntryKind, ListingItem, ListOrder
from storage_usage.types.protocols import Message
from storage_usage.utils.paths import normalize_location, with_dir_suffix

type Tree = Mapping[str, int | Tree]

FIXED_TIME = datetime(2024, 1, 31, 16, 4, 5, tzinfo=UTC)


def _children(location: str, tree: Tree, recursive: bool, order: ListOrder) -> Iterator[ListingItem]:
    names = sorted(tree)
    if order == ListOrder.DIR_FIRST:
        names.sort(key=lambda name: not isinstance(tree[name], Mapping))

    for name in names:
        node = tree[name]
        if isinstance(node, Mapping):
            child_location = location + name + SEPARATOR
            yield ListingItem.of(
                Entry(location=child_location, name=name, kind=EntryKind.DIRECTORY, last_modified=FIXED_TIME)
            )
            if recursive:
                yield from _children(child_location, node, recursive, order)
        else:
            yield ListingItem.of(
                Entry(location=location + name, name=name, kind=EntryKind.FILE, size=node, last_modified=FIXED_TIME)
            )


class FakeClient:
    """Listing client over one node of an in-memory tree."""

    def __init__(
        self,
        location: str,
        node: int | Tree,
        *,
        failure: StorageError | None = None,
        self_reference: bool = False,
    ) -> None:
        self._location: str = location
        self.node: int | Tree = node
        self.failure: StorageError | None = failure
        self.self_reference: bool = self_reference
        self.closed: bool = False

    @property
    def location(self) -> str:
        return self._location

    def list(
        self,
        *,
        recursive: bool = False,
        include_incomplete: bool = False,  # pyright: ignore[reportUnusedParameter]
        order: ListOrder = ListOrder.DIR_FIRST,
    ) -> Iterator[ListingItem]:
        try:
            if isinstance(self.node, int):
                name = self._location.rsplit(SEPARATOR, 1)[-1]
                yield ListingItem.of(
                    Entry(
                        location=self._location,
                        name=name,
                        kind=EntryKind.FILE,
                        size=self.node,
                        last_modified=FIXED_TIME,
                    )
                )
                return

            if self.self_reference:
                name = self._location.rstrip(SEPARATOR).rsplit(SEPARATOR, 1)[-1]
                yield ListingItem.of(
                    Entry(location=self._location, name=name, kind=EntryKind.DIRECTORY, last_modified=FIXED_TIME)
                )
            yield from _children(self._location, self.node, recursive, order)
            if self.failure is not None:
                yield ListingItem.failed(self.failure)
        finally:
            self.closed = True


class FakeResolver:
    """Resolver over an in-memory tree with injectable failures.

    Attributes:
        tree: Namespace root
        list_failures: Directory location to error ending its listing
        resolve_failures: Directory location to error raised on resolve
        self_reference: Clients list their own directory as the first entry
        backslash_roots: Directory clients report their location with
            backslash separators
        resolved: Every location resolved, in order
        clients: Every client handed out, in order
    """

    def __init__(
        self,
        tree: Tree,
        *,
        list_failures: Mapping[str, StorageError] | None = None,
        resolve_failures: Mapping[str, StorageError] | None = None,
        self_reference: bool = False,
        backslash_roots: bool = False,
    ) -> None:
        self.tree: Tree = tree
        self.list_failures: dict[str, StorageError] = dict(list_failures or {})
        self.resolve_failures: dict[str, StorageError] = dict(resolve_failures or {})
        self.self_reference: bool = self_reference
        self.backslash_roots: bool = backslash_roots
        self.resolved: list[str] = []
        self.clients: list[FakeClient] = []

    def resolve(self, address: str) -> FakeClient:
        location = normalize_location(address)
        self.resolved.append(location)
        if with_dir_suffix(location) in self.resolve_failures:
            raise self.resolve_failures[with_dir_suffix(location)]

        node: int | Tree = self.tree
        for part in location.strip(SEPARATOR).split(SEPARATOR):
            if not part:
                continue
            if not isinstance(node, Mapping) or part not in node:
                raise NotFoundError("Object does not exist", location)
            node = node[part]

        if isinstance(node, Mapping):
            location = with_dir_suffix(location)
            client = FakeClient(
                location.replace(SEPARATOR, "\\") if self.backslash_roots else location,
                node,
                failure=self.list_failures.get(location),
                self_reference=self.self_reference,
            )
        else:
            client = FakeClient(location.rstrip(SEPARATOR), node)
        self.clients.append(client)
        return client


class RecordingSink:
    """Message sink collecting every record in memory."""

    def __init__(self) -> None:
        self.messages: list[Message] = []

    def print_message(self, message: Message) -> None:
        self.messages.append(message)


