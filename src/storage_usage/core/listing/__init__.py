"""Listing module: enumeration contract, flat listing and the local backend."""

from __future__ import annotations

from .enumerator import Enumerator
from .filesystem import INCOMPLETE_SUFFIX, FilesystemClient, FilesystemResolver
from .lister import list_entries

__all__ = [
    "Enumerator",
    "FilesystemClient",
    "FilesystemResolver",
    "INCOMPLETE_SUFFIX",
    "list_entries",
]
