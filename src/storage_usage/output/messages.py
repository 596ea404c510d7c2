"""Output records for the listing and disk usage commands.

Each record renders either as a colorized console line or as an indented JSON
document. The JSON field names and order are stable for scripting consumers.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from storage_usage.core.errors import StorageError
from storage_usage.output.theme import Theme
from storage_usage.types.models import AggregateResult, Entry
from storage_usage.utils.formatting import compact_size, format_ibytes, format_timestamp
from storage_usage.utils.paths import trim_separators, with_dir_suffix

# Indentation used by the structured encoding
JSON_INDENT = 1


class _Message(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    def to_json(self) -> str:
        """JSON'ified message for scripting."""
        return json.dumps(self.model_dump(mode="json", by_alias=True), indent=JSON_INDENT)


class ContentMessage(_Message):
    """One entry of a listing."""

    status: Literal["success"] = "success"
    last_modified: datetime | None = Field(default=None, alias="lastModified")
    size: int = Field(ge=0)
    key: str
    type: Literal["file", "folder"]

    @classmethod
    def from_entry(cls, entry: Entry, display_name: str) -> ContentMessage:
        """Build the record for an entry shown under ``display_name``.

        Directory names always end with exactly one separator.
        """
        if entry.is_dir:
            return cls(
                last_modified=entry.last_modified,
                size=entry.size,
                key=with_dir_suffix(display_name),
                type="folder",
            )
        return cls(
            last_modified=entry.last_modified,
            size=entry.size,
            key=display_name,
            type="file",
        )

    def to_string(self, theme: Theme) -> str:
        """Console line: ``[<local time>] <size> <name>``."""
        timestamp = theme.time(f"[{format_timestamp(self.last_modified)}] ")
        size = theme.size(f"{format_ibytes(self.size):>6} ")
        name = theme.directory(self.key) if self.type == "folder" else theme.entry(self.key)
        return f"{timestamp}{size}{name}"


class DiskUsageMessage(_Message):
    """Disk usage summary of one prefix."""

    prefix: str
    size: str
    status: Literal["success"] = "success"

    @classmethod
    def from_result(cls, result: AggregateResult) -> DiskUsageMessage:
        return cls(
            prefix=trim_separators(result.prefix),
            size=compact_size(result.total_size),
        )

    def to_string(self, theme: Theme) -> str:
        """Colorized message for console printing."""
        return f"{theme.size(self.size)}\t{theme.prefix(self.prefix)}"


class ErrorMessage(_Message):
    """Failure of one command-line target."""

    status: Literal["error"] = "error"
    target: str
    message: str
    kind: str
    cause: str

    @classmethod
    def from_error(cls, error: StorageError, message: str) -> ErrorMessage:
        return cls(
            target=error.target or error.location or "",
            message=message,
            kind=error.kind,
            cause=str(error),
        )

    def to_string(self, theme: Theme) -> str:
        return f"storage-usage: <ERROR> {self.message} {self.cause}."
