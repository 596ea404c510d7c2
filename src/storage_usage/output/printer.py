"""Printer rendering output records to a stream."""

from __future__ import annotations

from typing import TextIO

import click

from storage_usage.output.theme import Theme
from storage_usage.types.protocols import Message


class Printer:
    """Message sink writing console lines or JSON documents.

    Attributes:
        json_output: Emit the structured encoding instead of console lines
        theme: Colors applied to console lines
        stream: Destination for records (stdout when None)
        error_stream: Destination for error records (stderr when None)
    """

    def __init__(
        self,
        *,
        json_output: bool = False,
        theme: Theme | None = None,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
    ) -> None:
        self.json_output: bool = json_output
        self.theme: Theme = theme if theme is not None else Theme()
        self.stream: TextIO | None = stream
        self.error_stream: TextIO | None = error_stream

    def _render(self, message: Message) -> str:
        if self.json_output:
            return message.to_json()
        return message.to_string(self.theme)

    def print_message(self, message: Message) -> None:
        """Render one record.

        Args:
            message: Record to print
        """
        click.echo(self._render(message), file=self.stream, color=self._color())

    def print_error(self, message: Message) -> None:
        """Render one error record on the error stream."""
        click.echo(self._render(message), file=self.error_stream, err=True, color=self._color())

    def _color(self) -> bool | None:
        # None lets click strip styles when the stream is not a terminal
        return None if self.theme.enabled else False
