"""ProgressService — completion and validation against a live record.

Completion is computed on demand from the record supplied by the caller;
nothing is cached on the descriptors.
"""

from __future__ import annotations

import logging
from typing import Any

from vidctl.domain.aspects import AspectDescriptor, FieldDescriptor
from vidctl.domain.completion import evaluate_criterion
from vidctl.domain.video import MISSING, Video, resolve_property
from vidctl.services.base import BaseService
from vidctl.services.contracts import (
    FieldCompletionData,
    ProgressData,
    ValidateFieldData,
    dump_validated,
)
from vidctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class ProgressService(BaseService):
    """Evaluate field completion and validate candidate field values."""

    def is_field_complete(self, aspect_key: str, field_key: str, video: Video) -> ServiceResult:
        """Whether one field of *video* currently counts as done."""
        op = "is_field_complete"
        found = self._aspect_or_error(op, aspect_key)
        if isinstance(found, ServiceResult):
            return found
        descriptor = found.field(field_key)
        if descriptor is None:
            return self._field_not_found(op, aspect_key, field_key)

        value = resolve_property(video, descriptor.property_path)
        data = dump_validated(
            FieldCompletionData,
            {
                "aspect_key": aspect_key,
                "field_key": field_key,
                "property_path": descriptor.property_path,
                "criterion": str(descriptor.completion_criterion),
                "value": None if value is MISSING else value,
                "complete": self._evaluate(found, descriptor, video),
            },
        )
        return ServiceResult(ok=True, op=op, data=data)

    def aspect_progress(self, video: Video, aspect_key: str | None = None) -> ServiceResult:
        """Completed-field counts per aspect for *video*.

        Args:
            video: The record to evaluate.
            aspect_key: Restrict the report to one aspect.
        """
        op = "aspect_progress"
        if aspect_key is None:
            aspects = self._catalog.aspects
        else:
            found = self._aspect_or_error(op, aspect_key)
            if isinstance(found, ServiceResult):
                return found
            aspects = (found,)

        rows: list[dict[str, Any]] = []
        for aspect in aspects:
            fields = [
                {
                    "key": d.key,
                    "display_name": d.display_name,
                    "criterion": str(d.completion_criterion),
                    "complete": self._evaluate(aspect, d, video),
                }
                for d in aspect.fields
            ]
            rows.append(
                {
                    "key": str(aspect.key),
                    "title": aspect.title,
                    "order": aspect.order,
                    "field_count": len(fields),
                    "completed_field_count": sum(1 for f in fields if f["complete"]),
                    "fields": fields,
                }
            )

        data = dump_validated(
            ProgressData,
            {
                "video": video.name,
                "field_count": sum(r["field_count"] for r in rows),
                "completed_field_count": sum(r["completed_field_count"] for r in rows),
                "aspects": rows,
            },
        )
        return ServiceResult(ok=True, op=op, data=data)

    def validate_field(self, aspect_key: str, field_key: str, value: Any) -> ServiceResult:
        """Check *value* against the field's type rules.

        A broken rule is a successful operation with ``valid`` False and
        the violation in the payload; only unknown aspects or fields
        produce an error result.
        """
        op = "validate_field"
        found = self._aspect_or_error(op, aspect_key)
        if isinstance(found, ServiceResult):
            return found
        descriptor = found.field(field_key)
        field_type = self._catalog.field_type(aspect_key, field_key)
        if descriptor is None or field_type is None:
            return self._field_not_found(op, aspect_key, field_key)

        violation = field_type.validate(value)
        data = dump_validated(
            ValidateFieldData,
            {
                "aspect_key": aspect_key,
                "field_key": field_key,
                "field_type": str(descriptor.field_type),
                "valid": violation is None,
                "violation": (
                    None
                    if violation is None
                    else {"kind": str(violation.kind), "message": violation.message}
                ),
            },
        )
        return ServiceResult(ok=True, op=op, data=data)

    @staticmethod
    def _evaluate(aspect: AspectDescriptor, descriptor: FieldDescriptor, video: Video) -> bool:
        value = resolve_property(video, descriptor.property_path)
        return evaluate_criterion(
            descriptor.completion_criterion,
            value,
            record=video,
            aspect_key=aspect.key,
            field_key=descriptor.key,
        )
