"""AppContext — per-invocation state handed to every subcommand.

The root group builds one from :class:`LinkfmtSettings`; commands receive
it with ``@click.pass_obj``, ask it for the workspace and hand their
:class:`ServiceResult` back to :meth:`AppContext.emit`.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from linkfmt.config.logging import configure_logging
from linkfmt.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from linkfmt.config.settings import LinkfmtSettings
    from linkfmt.infrastructure.workspace import MarkdownWorkspace
    from linkfmt.services.result import ServiceResult


class AppContext:
    """Settings, logging and the lazily loaded workspace of one CLI run."""

    def __init__(self, settings: LinkfmtSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @cached_property
    def workspace(self) -> MarkdownWorkspace:
        """Snapshot of the workspace root, read on first access.

        ``--help`` and ``--version`` never touch the filesystem.
        """
        from linkfmt.infrastructure.filesystem import load_workspace

        return load_workspace(self.settings.workspace_root, self.settings.workspace)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Failures go to stderr and exit with status 1. Successes go to
        stdout; their warnings follow on stderr unless the output is JSON,
        where they are part of the payload.
        """
        output_settings = self.output_settings
        text = format_result(result, settings=output_settings)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        if text:
            click.echo(text)
        if not output_settings.json_output:
            for warning in result.warnings:
                click.secho(f"WARNING: {warning}", err=True, fg="yellow")
