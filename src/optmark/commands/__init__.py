"""Subcommand modules for optmark.

Provides register_commands() which uses deferred imports to keep
``optmark --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from optmark.commands.check import check
    from optmark.commands.transform import transform

    cli.add_command(transform)
    cli.add_command(check)
