"""Address normalization helpers.

Addresses are plain strings: local paths (absolute or relative), alias
prefixed paths (``alias/dir/file``) or URLs (``scheme://host/path``). All of
them are normalized to ``/`` separators so comparisons between a listing root
and the locations it yields are exact string comparisons.
"""

import re
from typing import Final
from urllib.parse import urlsplit

from storage_usage.types.models import SEPARATOR

_SCHEME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
_DUPLICATE_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"/{2,}")


def with_dir_suffix(location: str) -> str:
    """Append a single trailing separator unless one is already present.

    Applying it twice yields the same string as applying it once.

    Examples:
        >>> with_dir_suffix("photos")
        'photos/'
        >>> with_dir_suffix("photos/")
        'photos/'
    """
    if location.endswith(SEPARATOR):
        return location
    return location + SEPARATOR


def normalize_location(location: str, *, is_dir: bool = False) -> str:
    """Normalize separators of an address.

    Backslashes become ``/`` and runs of separators collapse into one, except
    for the ``//`` following a URL scheme. Directories end with exactly one
    trailing separator.

    Args:
        location: Address as produced by a backend or typed by a user
        is_dir: Whether the address denotes a directory

    Returns:
        Normalized address

    Examples:
        >>> normalize_location("data\\\\logs", is_dir=True)
        'data/logs/'
        >>> normalize_location("s3://bucket//a//b")
        's3://bucket/a/b'
    """
    location = location.replace("\\", SEPARATOR)

    scheme = ""
    match = _SCHEME_PATTERN.match(location)
    if match is not None:
        scheme = match.group(0)
        location = location[len(scheme) :]

    location = scheme + _DUPLICATE_SEPARATORS.sub(SEPARATOR, location)
    if is_dir:
        location = with_dir_suffix(location)
    return location


def trim_separators(location: str) -> str:
    """Path component of an address with leading and trailing separators removed.

    Examples:
        >>> trim_separators("/srv/data/photos/")
        'srv/data/photos'
        >>> trim_separators("https://play.example.com/bucket/prefix/")
        'bucket/prefix'
    """
    if _SCHEME_PATTERN.match(location):
        location = urlsplit(location).path
    return location.strip(SEPARATOR)


def relativize(location: str, root: str) -> str:
    """Name of ``location`` as shown to a user listing ``root``.

    The root's own separator-normalized prefix is stripped so that recursive
    listings never echo the root back. A location equal to the root (listing
    a single file) is shown by its final component.

    Examples:
        >>> relativize("/srv/data/a/b.txt", "/srv/data/")
        'a/b.txt'
        >>> relativize("/srv/data/a/b.txt", "/srv/data")
        'a/b.txt'
        >>> relativize("/srv/data/a.txt", "/srv/data/a.txt")
        'a.txt'
    """
    root_prefix = root.rstrip(SEPARATOR) + SEPARATOR
    if location.startswith(root_prefix) and location != root_prefix:
        return location[len(root_prefix) :]

    if location.rstrip(SEPARATOR) == root.rstrip(SEPARATOR):
        trimmed = location.rstrip(SEPARATOR)
        name = trimmed.rsplit(SEPARATOR, 1)[-1] or trimmed
        return name + location[len(trimmed) :]
    return location
