"""Config file discovery and loading.

``vidctl.toml`` is looked up the way git finds ``.git/``: in the working
directory, then in each parent. ``VIDCTL_CONFIG`` pins an explicit file
and disables the walk.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click

from vidctl.config.models import VidConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "vidctl.toml"
CONFIG_ENV_VAR = "VIDCTL_CONFIG"


def candidate_paths(start: Path | None = None) -> Iterator[Path]:
    """Yield every ``vidctl.toml`` location from *start* (default: cwd) up to the root."""
    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect, or None.

    An explicit ``VIDCTL_CONFIG`` wins; when it names a missing file no
    config is used at all.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        pinned = Path(env_path)
        return pinned if pinned.is_file() else None

    for candidate in candidate_paths(start):
        if candidate.is_file():
            logger.debug("Using config %s", candidate)
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, keeping only the sections :class:`VidConfig` declares.

    Raises:
        click.ClickException: The file is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc

    unknown = sorted(set(data) - set(VidConfig.model_fields))
    if unknown:
        logger.warning("Ignoring unknown sections in %s: %s", path, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in VidConfig.model_fields}


def load_config(path: Path | None = None, cwd: Path | None = None) -> VidConfig:
    """Load and validate config, discovering it from *cwd* when *path* is None.

    Returns the code defaults when no file is found.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return VidConfig()
    return VidConfig.model_validate(read_toml(path))
