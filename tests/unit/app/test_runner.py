"""Unit tests for the application runner."""

from __future__ import annotations

import io
import json

import pytest
from fakes import FakeResolver, Tree

from storage_usage.app.runner import EXIT_ERROR, EXIT_SUCCESS, ApplicationRunner
from storage_usage.core.config import AppConfig, ListingConfig, OutputConfig
from storage_usage.core.errors import TransientTransportError
from storage_usage.core.listing import FilesystemResolver
from storage_usage.types.models import Depth, ListOrder


def _runner(
    resolver: FakeResolver,
    config: AppConfig | None = None,
) -> tuple[ApplicationRunner, io.StringIO, io.StringIO]:
    stream = io.StringIO()
    error_stream = io.StringIO()
    config = config or AppConfig(output=OutputConfig(color=False))
    runner = ApplicationRunner(config, resolver=resolver, stream=stream, error_stream=error_stream)
    return runner, stream, error_stream


@pytest.mark.unit
class TestApplicationRunner:
    """Test command execution and exit codes."""

    def test_default_resolver_is_filesystem(self) -> None:
        """Test the runner falls back to the filesystem resolver."""
        runner = ApplicationRunner(AppConfig())

        assert isinstance(runner.resolver, FilesystemResolver)

    def test_run_du_success(self, sample_tree: Tree) -> None:
        """Test a successful summary prints one line per level."""
        runner, stream, error_stream = _runner(FakeResolver(sample_tree))

        code = runner.run_du(["root"], Depth.unlimited())

        assert code == EXIT_SUCCESS
        assert stream.getvalue() == "200B\troot/sub\n300B\troot\n"
        assert error_stream.getvalue() == ""

    def test_run_du_json(self, sample_tree: Tree) -> None:
        """Test JSON mode prints one document per record."""
        config = AppConfig(output=OutputConfig(json_output=True))
        runner, stream, _ = _runner(FakeResolver(sample_tree), config)

        _ = runner.run_du(["root"], Depth.limited(0))

        assert json.loads(stream.getvalue()) == {"prefix": "root", "size": "300B", "status": "success"}

    def test_run_du_continues_after_failure(self) -> None:
        """Test every target runs and any failure sets the exit code."""
        tree: Tree = {"bad": {"x": 1}, "good": {"y": 2}}
        failure = TransientTransportError("connection reset", "bad/")
        runner, stream, error_stream = _runner(FakeResolver(tree, list_failures={"bad/": failure}))

        code = runner.run_du(["bad", "good"], Depth.unlimited())

        assert code == EXIT_ERROR
        assert stream.getvalue() == "2B\tgood\n"
        assert error_stream.getvalue() == (
            "storage-usage: <ERROR> Failed to summarize disk usage `bad`. connection reset (bad/).\n"
        )

    def test_run_list_success(self) -> None:
        """Test listing prints one line per entry."""
        runner, stream, _ = _runner(FakeResolver({"bucket": {"x.bin": 2048, "y": {}}}))

        code = runner.run_list("bucket")

        assert code == EXIT_SUCCESS
        lines = stream.getvalue().splitlines()
        assert len(lines) == 2
        assert lines[0].endswith(" 2.0 KiB x.bin")
        assert lines[1].endswith("   0 B y/")

    def test_run_list_uses_configured_order(self) -> None:
        """Test the configured ordering hint reaches the backend."""
        config = AppConfig(output=OutputConfig(color=False), listing=ListingConfig(order=ListOrder.DIR_FIRST))
        runner, stream, _ = _runner(FakeResolver({"bucket": {"a.txt": 1, "z": {}}}), config)

        _ = runner.run_list("bucket")

        lines = stream.getvalue().splitlines()
        assert lines[0].endswith(" z/")
        assert lines[1].endswith(" a.txt")

    def test_run_list_missing_target(self) -> None:
        """Test a missing target exits with an error line."""
        runner, stream, error_stream = _runner(FakeResolver({}))

        code = runner.run_list("nowhere")

        assert code == EXIT_ERROR
        assert stream.getvalue() == ""
        assert error_stream.getvalue().startswith("storage-usage: <ERROR> Unable to list folder `nowhere`.")
