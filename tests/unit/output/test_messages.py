"""Unit tests for output records and their renderings."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import click
import pytest
from pydantic import ValidationError

from storage_usage.core.errors import NotFoundError
from storage_usage.output import ContentMessage, DiskUsageMessage, ErrorMessage, Theme
from storage_usage.types.models import AggregateResult, Entry, EntryKind
from storage_usage.utils.formatting import format_timestamp

MODIFIED = datetime(2024, 1, 31, 16, 4, 5, tzinfo=UTC)


@pytest.mark.unit
class TestContentMessage:
    """Test listing records."""

    def test_from_file_entry(self) -> None:
        """Test a file entry keeps its display name, size and time."""
        entry = Entry(location="bucket/x.bin", name="x.bin", kind=EntryKind.FILE, size=2048, last_modified=MODIFIED)

        message = ContentMessage.from_entry(entry, "x.bin")

        assert message.key == "x.bin"
        assert message.size == 2048
        assert message.type == "file"
        assert message.last_modified == MODIFIED

    @pytest.mark.parametrize("display_name", ["y", "y/"])
    def test_folder_name_has_single_suffix(self, display_name: str) -> None:
        """Test folder names end with exactly one separator."""
        entry = Entry(location="bucket/y/", name="y", kind=EntryKind.DIRECTORY)

        message = ContentMessage.from_entry(entry, display_name)

        assert message.key == "y/"
        assert message.type == "folder"

    def test_console_line(self) -> None:
        """Test the plain console line layout."""
        message = ContentMessage(last_modified=MODIFIED, size=2048, key="x.bin", type="file")

        line = message.to_string(Theme.plain())

        assert line == f"[{format_timestamp(MODIFIED)}] 2.0 KiB x.bin"

    def test_console_line_right_aligns_size(self) -> None:
        """Test short sizes are padded to six characters."""
        message = ContentMessage(last_modified=MODIFIED, size=0, key="y/", type="folder")

        assert message.to_string(Theme.plain()).endswith("]    0 B y/")

    def test_console_line_colors(self) -> None:
        """Test themed lines style the folder name and strip back to the plain line."""
        message = ContentMessage(last_modified=MODIFIED, size=0, key="y/", type="folder")

        colored = message.to_string(Theme())

        assert click.style("y/", fg="blue", bold=True) in colored
        assert click.unstyle(colored) == message.to_string(Theme.plain())

    def test_json_field_names_and_order(self) -> None:
        """Test the JSON record uses stable camelCase field names."""
        message = ContentMessage(last_modified=MODIFIED, size=2048, key="x.bin", type="file")

        encoded = message.to_json()
        decoded = json.loads(encoded)

        assert list(decoded) == ["status", "lastModified", "size", "key", "type"]
        assert decoded["status"] == "success"
        assert decoded["lastModified"].startswith("2024-01-31T16:04:05")
        assert encoded.startswith('{\n "status": "success",\n')

    def test_negative_size_rejected(self) -> None:
        """Test records cannot carry a negative size."""
        with pytest.raises(ValidationError):
            _ = ContentMessage(size=-1, key="x", type="file")

    def test_populate_by_alias(self) -> None:
        """Test records accept the JSON field name as well."""
        message = ContentMessage.model_validate(
            {"lastModified": "2024-01-31T16:04:05Z", "size": 1, "key": "x", "type": "file"}
        )

        assert message.last_modified == MODIFIED


@pytest.mark.unit
class TestDiskUsageMessage:
    """Test disk usage records."""

    def test_from_result(self) -> None:
        """Test the prefix is trimmed and the size compacted."""
        message = DiskUsageMessage.from_result(AggregateResult(prefix="root/sub/", total_size=200))

        assert message.prefix == "root/sub"
        assert message.size == "200B"
        assert message.status == "success"

    def test_json_is_bit_stable(self) -> None:
        """Test the exact JSON rendering scripts depend on."""
        message = DiskUsageMessage(prefix="sub", size="200B")

        assert message.to_json() == '{\n "prefix": "sub",\n "size": "200B",\n "status": "success"\n}'

    def test_console_line(self) -> None:
        """Test the console line is size, tab, prefix."""
        message = DiskUsageMessage.from_result(AggregateResult(prefix="/srv/data/", total_size=1536))

        assert message.to_string(Theme.plain()) == "1.5KiB\tsrv/data"

    def test_console_line_colors(self) -> None:
        """Test sizes and prefixes are styled independently."""
        message = DiskUsageMessage(prefix="sub", size="200B")

        colored = message.to_string(Theme(size_color="red", prefix_color="green"))

        assert colored == f"{click.style('200B', fg='red')}\t{click.style('sub', fg='green')}"


@pytest.mark.unit
class TestErrorMessage:
    """Test error records."""

    def test_from_annotated_error(self) -> None:
        """Test the record names the target, kind and cause."""
        error = NotFoundError("Location not found: No such file or directory", "/srv/missing").annotate("missing")

        message = ErrorMessage.from_error(error, "Unable to list folder `missing`.")

        assert message.target == "missing"
        assert message.kind == "not found"
        assert message.status == "error"
        assert message.to_string(Theme.plain()) == (
            "storage-usage: <ERROR> Unable to list folder `missing`. "
            "Location not found: No such file or directory (/srv/missing)."
        )

    def test_unannotated_error_falls_back_to_location(self) -> None:
        """Test an error without target reports its location."""
        message = ErrorMessage.from_error(NotFoundError("gone", "a/b"), "Failed.")

        assert message.target == "a/b"

    def test_json(self) -> None:
        """Test the JSON error record fields."""
        error = NotFoundError("gone", "a/b").annotate("a")

        decoded = json.loads(ErrorMessage.from_error(error, "Failed.").to_json())

        assert decoded == {
            "status": "error",
            "target": "a",
            "message": "Failed.",
            "kind": "not found",
            "cause": "gone (a/b)",
        }
