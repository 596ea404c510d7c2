"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest
from fakes import FakeResolver, RecordingSink, Tree


@pytest.fixture
def sink() -> RecordingSink:
    """Create an empty recording sink."""
    return RecordingSink()


@pytest.fixture
def sample_tree() -> Tree:
    """Two-level tree holding 300 bytes in total."""
    return {"root": {"a.txt": 100, "sub": {"b.txt": 200}}}


@pytest.fixture
def deep_tree() -> Tree:
    """Tree with directories at distances zero to three from ``data``."""
    return {
        "data": {
            "top.bin": 1,
            "logs": {
                "app.log": 10,
                "2024": {"jan.log": 100, "feb": {"01.log": 1000}},
            },
            "media": {"clip.mp4": 10_000},
            "empty": {},
        }
    }


@pytest.fixture
def sample_resolver(sample_tree: Tree) -> FakeResolver:
    """Resolver over the 300-byte sample tree."""
    return FakeResolver(sample_tree)
