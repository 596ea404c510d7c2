"""Disk usage module for recursive size aggregation."""

from __future__ import annotations

from .aggregator import DiskUsageAggregator

__all__ = [
    "DiskUsageAggregator",
]
