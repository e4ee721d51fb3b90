"""Read-only access to video record files.

Each video lives in its own YAML file whose top-level mapping holds the
record attributes. This module only reads; writing records belongs to
the store that owns them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError


class RecordLoadError(Exception):
    """A record file is missing, unreadable, or not a YAML mapping."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def read_record(path: Path) -> dict[str, Any]:
    """Parse the YAML record at *path* into a plain dict.

    Raises:
        RecordLoadError: The file cannot be read or parsed, or its
            top level is not a mapping.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RecordLoadError(path, exc.strerror or str(exc)) from exc

    yaml = YAML(typ="safe")
    try:
        data = yaml.load(raw)
    except YAMLError as exc:
        raise RecordLoadError(path, f"invalid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RecordLoadError(path, f"expected a mapping, got {type(data).__name__}")
    return data
