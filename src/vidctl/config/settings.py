"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags the user actually set
  2. Env vars     — ``VIDCTL_*`` prefix, ``__`` for nested keys
  3. TOML file    — ``vidctl.toml`` (see :mod:`vidctl.config.discovery`)
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from vidctl.config.discovery import find_config, read_toml
from vidctl.config.models import ApiConfig

# Path of the TOML file for the settings object being constructed.
_toml_path: ContextVar[Path | None] = ContextVar("vidctl_toml_path", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the sections of one ``vidctl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_toml(toml_path) if toml_path and toml_path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class VidSettings(BaseSettings):
    """Unified settings for the vidctl CLI.

    Attributes:
        config_path: The ``vidctl.toml`` in effect, or None when running
            on defaults.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "VIDCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    api: ApiConfig = Field(default_factory=ApiConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _toml_path.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> VidSettings:
        """Construct settings from a CLI invocation.

        An explicit *config_path* is used only when it names a file; without
        one, ``vidctl.toml`` is discovered walking up from *start*. Flags
        that were actually set (truthy) override everything; unset flags
        leave env and TOML values alone.
        """
        toml_path: Path | None
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(start)

        overrides = {k: v for k, v in cli_flags.items() if v}
        token = _toml_path.set(toml_path)
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _toml_path.reset(token)
