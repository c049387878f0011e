"""Subcommand modules for linkfmt.

Provides register_commands() which uses deferred imports to keep
``linkfmt --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from linkfmt.commands.convert import convert
    from linkfmt.commands.links import links

    cli.add_command(convert)
    cli.add_command(links)
