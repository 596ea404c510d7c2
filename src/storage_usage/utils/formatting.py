"""Pure formatting utilities for human-readable output.

This module provides stateless formatting functions for converting raw entry
data into the strings shown by the listing and disk usage commands. All
functions are pure with no side effects.
"""

from datetime import UTC, datetime
from typing import Final

# Binary unit suffixes (1024-based, IEC)
_IEC_BASE: Final[int] = 1024
_IEC_SUFFIXES: Final[tuple[str, ...]] = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")

# Values below this many bytes are printed as a plain integer count
_SMALL_BYTES: Final[int] = 10

# Local timestamp pattern, e.g. "2024-01-31 17:04:05 CET"
TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S %Z"

_EPOCH: Final[datetime] = datetime.fromtimestamp(0, UTC)


def format_ibytes(size: int) -> str:
    """Convert bytes to a human-readable size with binary (IEC) units.

    Values are rounded to one decimal place; the decimal is only shown while
    the scaled value is below 10.

    Args:
        size: Number of bytes to format (must be non-negative)

    Returns:
        Human-readable size such as ``"100 B"`` or ``"1.5 KiB"``

    Examples:
        >>> format_ibytes(5)
        '5 B'
        >>> format_ibytes(1536)
        '1.5 KiB'
        >>> format_ibytes(2048)
        '2.0 KiB'
        >>> format_ibytes(82854982)
        '79 MiB'
    """
    if size < 0:
        msg = "size must be non-negative"
        raise ValueError(msg)

    if size < _SMALL_BYTES:
        return f"{size} B"

    exponent = 0
    while exponent < len(_IEC_SUFFIXES) - 1 and size >= _IEC_BASE ** (exponent + 1):
        exponent += 1

    scaled = int(size * 10 / _IEC_BASE**exponent + 0.5) / 10
    if scaled < 10:
        return f"{scaled:.1f} {_IEC_SUFFIXES[exponent]}"
    return f"{scaled:.0f} {_IEC_SUFFIXES[exponent]}"


def compact_size(size: int) -> str:
    """Human-readable IEC size with all internal whitespace removed.

    Examples:
        >>> compact_size(1536)
        '1.5KiB'
        >>> compact_size(300)
        '300B'
    """
    return "".join(format_ibytes(size).split())


def format_timestamp(timestamp: datetime | None) -> str:
    """Render a timestamp in the local timezone.

    Naive timestamps are taken to be UTC. A missing timestamp renders as the
    Unix epoch.

    Args:
        timestamp: Modification time of an entry, or None

    Returns:
        Timestamp formatted with ``TIMESTAMP_FORMAT``
    """
    if timestamp is None:
        timestamp = _EPOCH
    elif timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone().strftime(TIMESTAMP_FORMAT)
