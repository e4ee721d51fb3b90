"""Rich Console factory and theme for vidctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

VID_THEME = Theme(
    {
        "vid.ok": "bold green",
        "vid.error": "bold red",
        "vid.warning": "bold yellow",
        "vid.op": "bold cyan",
        "vid.key": "dim",
        "vid.aspect": "bold blue",
        "vid.field": "bold",
        "vid.type": "magenta",
        "vid.done": "green",
        "vid.pending": "dark_orange",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=VID_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def completion_style(complete: bool) -> str:
    """Green for done, orange for pending, matching the interactive menus."""
    return "vid.done" if complete else "vid.pending"
