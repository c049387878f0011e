"""``linkfmt`` entry point: global flags, settings, subcommands."""

from __future__ import annotations

from pathlib import Path

import click

from linkfmt import __version__
from linkfmt.commands import register_commands
from linkfmt.commands._context import AppContext
from linkfmt.config.settings import LinkfmtSettings


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="linkfmt")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only paths or link texts.")
@click.option("-v", "--verbose", is_flag=True, help="Show every replacement and debug logs.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Use this config file instead of discovering linkfmt.toml.",
)
@click.option(
    "-w",
    "--workspace",
    "workspace_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Workspace root (default: directory of linkfmt.toml, else CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: Path | None,
    workspace_root: Path | None,
) -> None:
    """Convert note links between [[wikilink]] and [inline](link.md) syntax."""
    ctx.obj = AppContext(
        LinkfmtSettings.from_cli(
            config_path=config_path,
            workspace_root=workspace_root,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
