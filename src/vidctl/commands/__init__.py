"""Subcommand modules for vidctl.

Provides register_commands() which uses deferred imports to keep
``vidctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the aspects group and the standalone commands on the root CLI group."""
    from vidctl.commands.aspects import aspects
    from vidctl.commands.progress import progress
    from vidctl.commands.validate import validate

    cli.add_command(aspects)
    cli.add_command(progress)
    cli.add_command(validate)
