"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides the lazily built aspect catalog, record
loading, and centralized result emission (stdout/stderr routing + exit
codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
import structlog
from pydantic import ValidationError

from vidctl.output.formatters import OutputSettings, format_result
from vidctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from vidctl.config.settings import VidSettings
    from vidctl.domain.aspects import AspectCatalog
    from vidctl.domain.video import Video

log = structlog.get_logger(__name__)

RECORD_INVALID = "RECORD_INVALID"


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The catalog is built
    on first use so ``--help`` and ``--version`` never touch the table.
    """

    def __init__(self, settings: VidSettings) -> None:
        self.settings = settings
        self._catalog: AspectCatalog | None = None

        from vidctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def catalog(self) -> AspectCatalog:
        """The aspect catalog (built lazily on first access)."""
        if self._catalog is None:
            from vidctl.domain.aspects import default_catalog

            self._catalog = default_catalog(self.settings.api.videos_prefix)
        return self._catalog

    def load_video(self, path: Path, *, op: str) -> Video | ServiceResult:
        """Load a video record file, or an error result for *op*."""
        from vidctl.domain.video import Video
        from vidctl.infrastructure.records import RecordLoadError, read_record

        try:
            video = Video.model_validate(read_record(path))
        except RecordLoadError as exc:
            log.debug("record_load_failed", path=str(path), reason=exc.reason)
            return self._record_error(op, path, exc.reason)
        except ValidationError as exc:
            log.debug("record_invalid", path=str(path), errors=exc.error_count())
            return self._record_error(op, path, f"invalid record: {exc.error_count()} error(s)")
        log.debug("record_loaded", path=str(path), video=video.name)
        return video

    @staticmethod
    def _record_error(op: str, path: Path, reason: str) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=RECORD_INVALID,
                message=f"Cannot load record {path}: {reason}",
                detail={"path": str(path)},
            ),
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
