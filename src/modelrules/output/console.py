"""Rich Console factory and theme for modelrules output.

Consoles render to a StringIO buffer so formatters keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich disables
color codes automatically.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MODELRULES_THEME = Theme(
    {
        "mr.ok": "bold green",
        "mr.error": "bold red",
        "mr.model": "bold cyan",
        "mr.property": "bold",
        "mr.kind": "magenta",
        "mr.dim": "dim",
    }
)


def create_console() -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=MODELRULES_THEME,
        highlight=False,
        width=120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
