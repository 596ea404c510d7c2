"""storage-usage - streaming listings and recursive disk usage of storage prefixes.

This package enumerates a hierarchical storage namespace through a listing
abstraction and aggregates the sizes of its subtrees, printing one summary
per directory level up to a requested depth.
"""

from storage_usage.__main__ import main

__all__ = ["main"]
