"""Rich Console factory and theme for signsheet output.

Consoles render into a StringIO buffer so renderers keep returning
plain strings. Rich drops color codes on its own when the output is
not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SIGNSHEET_THEME = Theme(
    {
        "sheet.ok": "bold green",
        "sheet.error": "bold red",
        "sheet.warning": "bold yellow",
        "sheet.op": "bold cyan",
        "sheet.key": "dim",
        "sheet.owner": "bold blue",
        "sheet.date": "bold",
        "sheet.signed": "green",
        "sheet.missed": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=SIGNSHEET_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def day_style(signed_in: bool) -> str:
    """Theme style for a day: green when signed in, red when missed."""
    return "sheet.signed" if signed_in else "sheet.missed"
