"""Command group: aspect and field metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidGroup

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.group(
    cls=VidGroup,
    examples="""\
  vidctl aspects overview
  vidctl aspects list
  vidctl --json aspects fields post-publish
  vidctl aspects criterion initial-details sponsorshipEmails""",
)
def aspects() -> None:
    """Inspect the production aspects and their fields."""


@aspects.command(
    examples="""\
  vidctl aspects overview
  vidctl -v aspects overview
  vidctl -q aspects overview""",
)
@click.pass_obj
def overview(app: AppContext) -> None:
    """List the six aspects with their field counts."""
    from vidctl.services.aspects import AspectService

    app.emit(AspectService(app.catalog).aspects_overview())


@aspects.command(
    "list",
    examples="""\
  vidctl aspects list
  vidctl --json aspects list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """Show every aspect with full field metadata."""
    from vidctl.services.aspects import AspectService

    app.emit(AspectService(app.catalog).full_aspects())


@aspects.command(
    examples="""\
  vidctl aspects fields definition
  vidctl -v aspects fields initial-details""",
)
@click.argument("aspect_key")
@click.pass_obj
def fields(app: AppContext, aspect_key: str) -> None:
    """Show the fields of ASPECT_KEY."""
    from vidctl.services.aspects import AspectService

    app.emit(AspectService(app.catalog).aspect_fields(aspect_key))


@aspects.command(
    examples="""\
  vidctl aspects criterion post-publish notifiedSponsors
  vidctl aspects criterion post-production timecodes""",
)
@click.argument("aspect_key")
@click.argument("field_key")
@click.pass_obj
def criterion(app: AppContext, aspect_key: str, field_key: str) -> None:
    """Show the completion criterion of FIELD_KEY in ASPECT_KEY."""
    from vidctl.services.aspects import AspectService

    app.emit(AspectService(app.catalog).completion_criterion(aspect_key, field_key))
