"""Command: list the links of a document and how they resolve."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from linkfmt.commands._base import LinkfmtCommand
from linkfmt.domain.uri import URI

if TYPE_CHECKING:
    from linkfmt.commands._context import AppContext


@click.command(
    cls=LinkfmtCommand,
    examples="""\
  linkfmt links notes/today.md
  linkfmt -v links notes/today.md
  linkfmt --json links notes/today.md""",
)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def links(app: AppContext, path: Path) -> None:
    """Show every link in PATH with its resolution status."""
    from linkfmt.services.links import LinkService

    app.emit(LinkService(app.workspace).list_links(URI.file(path.resolve())))
