"""Rich Console factory and theme for chronolane output.

Consoles render into a StringIO buffer so renderers keep the
``render_result() -> str`` contract. Outside a terminal (tests, pipes)
Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CHRONO_THEME = Theme(
    {
        "cl.ok": "bold green",
        "cl.error": "bold red",
        "cl.warning": "bold yellow",
        "cl.op": "bold cyan",
        "cl.key": "dim",
        "cl.id": "bold blue",
        "cl.path": "dim",
        "cl.title": "bold",
        "cl.lane": "magenta",
        "cl.kind.bar": "green",
        "cl.kind.point": "yellow",
        "cl.coord": "cyan",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console writing to an in-memory buffer."""
    return Console(
        file=StringIO(),
        theme=CHRONO_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Rich style for a primitive kind (``bar``/``point``)."""
    return f"cl.kind.{kind}" if kind in ("bar", "point") else ""
