"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, vidctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from vidctl.domain.aspects import DEFAULT_VIDEOS_PREFIX

# --- vidctl.toml sections ---


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    videos_prefix: str = DEFAULT_VIDEOS_PREFIX


class VidConfig(BaseModel):
    """Root of vidctl.toml."""

    model_config = {"frozen": True}

    api: ApiConfig = Field(default_factory=ApiConfig)
