"""Command: completion progress of a video record."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidCommand

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl progress manuscript/devops/my-video.yaml
  vidctl -v progress manuscript/devops/my-video.yaml
  vidctl progress my-video.yaml --aspect post-publish
  vidctl progress my-video.yaml --aspect post-publish --field notifiedSponsors""",
)
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--aspect", "aspect_key", default=None, help="Only report this aspect.")
@click.option("--field", "field_key", default=None, help="Check one field (needs --aspect).")
@click.pass_obj
def progress(app: AppContext, path: Path, aspect_key: str | None, field_key: str | None) -> None:
    """Report which fields of the video at PATH are complete."""
    from vidctl.services.progress import ProgressService
    from vidctl.services.result import ServiceResult

    if field_key is not None and aspect_key is None:
        raise click.UsageError("--field requires --aspect.")

    op = "aspect_progress" if field_key is None else "is_field_complete"
    video = app.load_video(path, op=op)
    if isinstance(video, ServiceResult):
        app.emit(video)
        return

    svc = ProgressService(app.catalog)
    if field_key is not None and aspect_key is not None:
        app.emit(svc.is_field_complete(aspect_key, field_key, video))
    else:
        app.emit(svc.aspect_progress(video, aspect_key))
