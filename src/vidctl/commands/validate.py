"""Command: validate a candidate field value."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from vidctl.commands._base import VidCommand

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl validate initial-details publishDate 2025-03-01T16:00
  vidctl validate definition title ""
  vidctl validate post-publish dotPosted true --json-value""",
)
@click.argument("aspect_key")
@click.argument("field_key")
@click.argument("value")
@click.option(
    "--json-value",
    is_flag=True,
    help="Decode VALUE as JSON (true, 42, null) instead of a plain string.",
)
@click.pass_obj
def validate(
    app: AppContext, aspect_key: str, field_key: str, value: str, json_value: bool
) -> None:
    """Check VALUE against the type rules of FIELD_KEY in ASPECT_KEY."""
    from vidctl.services.progress import ProgressService

    candidate: Any = value
    if json_value:
        try:
            candidate = json.loads(value)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc.msg}", param_hint="VALUE") from exc

    app.emit(ProgressService(app.catalog).validate_field(aspect_key, field_key, candidate))
