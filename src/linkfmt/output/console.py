"""Rich consoles that render into a string.

Renderers draw on a :class:`~rich.console.Console` backed by ``StringIO``
and return the captured text, so ``format_result`` stays a pure
``ServiceResult -> str`` function. Rich drops ANSI codes by itself when
the buffer is not a terminal, which keeps CliRunner output plain.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LINKFMT_THEME = Theme(
    {
        "lf.ok": "bold green",
        "lf.error": "bold red",
        "lf.op": "bold cyan",
        "lf.key": "dim",
        "lf.path": "bold blue",
        "lf.old": "red",
        "lf.new": "green",
        "lf.status.resolved": "green",
        "lf.status.placeholder": "yellow",
        "lf.status.unresolvable": "red",
    }
)

_STATUS_STYLES = {
    status: f"lf.status.{status}" for status in ("resolved", "placeholder", "unresolvable")
}


def create_console(*, no_color: bool = False, width: int = 120) -> Console:
    """New console writing to a private buffer, *width* columns wide."""
    return Console(
        file=StringIO(),
        theme=LINKFMT_THEME,
        no_color=no_color,
        highlight=False,
        width=width,
    )


def get_output(console: Console) -> str:
    """Everything printed to a console from :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "console does not render into a string buffer"
        raise TypeError(msg)
    return buffer.getvalue()


def style_for_status(status: str) -> str:
    """Theme style for a link resolution status, ``""`` if unknown."""
    return _STATUS_STYLES.get(status, "")
