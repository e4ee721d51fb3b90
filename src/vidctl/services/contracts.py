"""Typed payload contracts for service boundaries.

These models validate operation payload shapes before they leave the
service layer, so key drift between services and renderers (for example
``fieldCount`` vs ``field_count``) fails fast in tests.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized camelCase payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json", by_alias=True)


class _Contract(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CriterionData(_Contract):
    """Payload contract for ``AspectService.completion_criterion``."""

    aspect_key: str
    field_key: str
    criterion: str
    known_field: bool


class FieldCompletionData(_Contract):
    """Payload contract for ``ProgressService.is_field_complete``."""

    aspect_key: str
    field_key: str
    property_path: str
    criterion: str
    value: Any = None
    complete: bool


class FieldCompletion(_Contract):
    """One field row inside an aspect progress entry."""

    key: str
    display_name: str
    criterion: str
    complete: bool


class AspectProgress(_Contract):
    """Completion counts for one aspect of one record."""

    key: str
    title: str
    order: int
    field_count: int
    completed_field_count: int
    fields: list[FieldCompletion]


class ProgressData(_Contract):
    """Payload contract for ``ProgressService.aspect_progress``."""

    video: str
    field_count: int
    completed_field_count: int
    aspects: list[AspectProgress]


class Violation(_Contract):
    """A broken validation rule."""

    kind: str
    message: str


class ValidateFieldData(_Contract):
    """Payload contract for ``ProgressService.validate_field``."""

    aspect_key: str
    field_key: str
    field_type: str
    valid: bool
    violation: Violation | None = None
