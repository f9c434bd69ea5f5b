"""Result sinks — where formatted lines end up."""

from __future__ import annotations

import click


class EchoSink:
    """Write each line through ``click.echo`` (stdout, or stderr with *err*)."""

    def __init__(self, *, err: bool = False) -> None:
        self._err = err

    def emit(self, line: str) -> None:
        click.echo(line, err=self._err)


class ListSink:
    """Collect lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def emit(self, line: str) -> None:
        self.lines.append(line)
