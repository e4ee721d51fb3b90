"""Root CLI group for vidctl: global output flags and command registration."""

from __future__ import annotations

import click

from vidctl import __version__
from vidctl.commands import register_commands
from vidctl.commands._context import AppContext
from vidctl.config.settings import VidSettings


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="vidctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (keys, counts, yes/no).")
@click.option("-v", "--verbose", is_flag=True, help="Extra columns, per-field marks, debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Use this vidctl.toml.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """vidctl — production aspects, field metadata and completion progress for videos."""
    ctx.obj = AppContext(
        VidSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
