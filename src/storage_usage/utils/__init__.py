"""Shared utility modules for common operations.

This package provides pure, stateless utility functions for:
- Data size formatting (bytes to IEC units)
- Timestamp formatting (local timezone)
- Address normalization (separators, trailing suffixes, relativization)
"""

from storage_usage.utils.formatting import (
    TIMESTAMP_FORMAT,
    compact_size,
    format_ibytes,
    format_timestamp,
)
from storage_usage.utils.paths import (
    normalize_location,
    relativize,
    trim_separators,
    with_dir_suffix,
)

__all__ = [
    # Formatting utilities
    "TIMESTAMP_FORMAT",
    "compact_size",
    "format_ibytes",
    "format_timestamp",
    # Address utilities
    "normalize_location",
    "relativize",
    "trim_separators",
    "with_dir_suffix",
]
