"""Rich Console factory and theme for diagnostics.

Consoles render into a StringIO buffer so formatters keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

COMMISSION_THEME = Theme(
    {
        "fee.error": "bold red",
        "fee.warning": "bold yellow",
        "fee.op": "bold cyan",
        "fee.code": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps long messages on one line in tests).
    """
    return Console(
        file=StringIO(),
        theme=COMMISSION_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
