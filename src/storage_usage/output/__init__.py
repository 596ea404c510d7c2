"""Presentation layer: output records, color theme and printer."""

from __future__ import annotations

from storage_usage.output.messages import ContentMessage, DiskUsageMessage, ErrorMessage
from storage_usage.output.printer import Printer
from storage_usage.output.theme import Style, Theme, parse_style

__all__ = [
    "ContentMessage",
    "DiskUsageMessage",
    "ErrorMessage",
    "Printer",
    "Style",
    "Theme",
    "parse_style",
]
