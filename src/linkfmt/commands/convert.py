"""Command: convert links between wikilink and inline link syntax."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from linkfmt.commands._base import LinkfmtCommand
from linkfmt.domain.types import LinkType
from linkfmt.domain.uri import URI

if TYPE_CHECKING:
    from linkfmt.commands._context import AppContext


@click.command(
    cls=LinkfmtCommand,
    examples="""\
  linkfmt convert --to link
  linkfmt convert --to wikilink notes/ --write
  linkfmt convert --to link notes/today.md
  linkfmt -v convert --to wikilink
  linkfmt --json convert --to link""",
)
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--to",
    "target_format",
    type=click.Choice([t.value for t in LinkType]),
    default=None,
    help="Target link syntax (default: [convert] default_format).",
)
@click.option("--write", is_flag=True, help="Save converted documents (default: dry run).")
@click.pass_obj
def convert(
    app: AppContext,
    paths: tuple[Path, ...],
    target_format: str | None,
    write: bool,
) -> None:
    """Convert links in the workspace, or only in PATHS."""
    from linkfmt.services.convert import ConvertService

    fmt = target_format or app.settings.convert.default_format
    selected = [URI.file(p.resolve()) for p in paths] if paths else None
    app.emit(ConvertService(app.workspace).convert_workspace(fmt, paths=selected, write=write))
