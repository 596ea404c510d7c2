"""Color theme for console output.

A ``Theme`` is an explicit value passed to the printer; nothing about colors
is process-wide state. Each role holds a style specification such as
``"cyan"`` or ``"bold blue"`` that is applied with ``click.style``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import click

BASE_COLORS: Final[tuple[str, ...]] = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)

VALID_COLORS: Final[frozenset[str]] = frozenset(
    {*BASE_COLORS, *(f"bright_{name}" for name in BASE_COLORS), "reset"}
)

_MODIFIERS: Final[frozenset[str]] = frozenset({"bold", "dim", "underline", "italic"})


@dataclass(slots=True, frozen=True)
class Style:
    """Parsed style specification."""

    fg: str | None = None
    bold: bool = False
    dim: bool = False
    underline: bool = False
    italic: bool = False

    def apply(self, text: str) -> str:
        return click.style(
            text,
            fg=self.fg,
            bold=self.bold or None,
            dim=self.dim or None,
            underline=self.underline or None,
            italic=self.italic or None,
        )


def parse_style(spec: str) -> Style:
    """Parse a style specification like ``"bold cyan"``.

    Args:
        spec: Whitespace separated color name and modifiers, in any order

    Returns:
        Parsed Style

    Raises:
        ValueError: If a token is neither a known color nor a modifier, or
            more than one color is given
    """
    fg: str | None = None
    modifiers: set[str] = set()
    for token in spec.lower().split():
        if token in _MODIFIERS:
            modifiers.add(token)
        elif token in VALID_COLORS:
            if fg is not None:
                msg = f"Style '{spec}' names more than one color"
                raise ValueError(msg)
            fg = token
        else:
            msg = f"Unknown color or modifier '{token}' in style '{spec}'"
            raise ValueError(msg)

    return Style(
        fg=fg,
        bold="bold" in modifiers,
        dim="dim" in modifiers,
        underline="underline" in modifiers,
        italic="italic" in modifiers,
    )


@dataclass(slots=True, frozen=True)
class Theme:
    """Styles for each kind of output element."""

    entry_color: str = ""
    directory_color: str = "bold blue"
    size_color: str = "yellow"
    prefix_color: str = "bold cyan"
    time_color: str = "green"
    enabled: bool = True

    def _paint(self, spec: str, text: str) -> str:
        if not self.enabled or not spec:
            return text
        return parse_style(spec).apply(text)

    def entry(self, text: str) -> str:
        return self._paint(self.entry_color, text)

    def directory(self, text: str) -> str:
        return self._paint(self.directory_color, text)

    def size(self, text: str) -> str:
        return self._paint(self.size_color, text)

    def prefix(self, text: str) -> str:
        return self._paint(self.prefix_color, text)

    def time(self, text: str) -> str:
        return self._paint(self.time_color, text)

    @classmethod
    def plain(cls) -> Theme:
        """Theme that leaves every element uncolored."""
        return cls(enabled=False)
