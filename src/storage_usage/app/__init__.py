"""Application module for storage-usage."""

from __future__ import annotations

from storage_usage.app.cli import cli
from storage_usage.app.runner import ApplicationRunner

__all__ = [
    "cli",
    "ApplicationRunner",
]
