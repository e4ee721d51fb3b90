"""AspectService — read-only queries over aspect and field metadata.

All operations are pure lookups over the catalog: no record is needed
and nothing is mutated, so any number of callers may share one service.
"""

from __future__ import annotations

from vidctl.domain.types import CompletionCriterion
from vidctl.services.base import BaseService
from vidctl.services.contracts import CriterionData, dump_validated
from vidctl.services.result import ServiceResult


class AspectService(BaseService):
    """Serve aspect descriptors in full, summary and per-aspect form."""

    def full_aspects(self) -> ServiceResult:
        """Every aspect with every field fully described, ordered by ``order``."""
        aspects = [a.to_payload() for a in self._catalog.aspects]
        return ServiceResult(
            ok=True,
            op="full_aspects",
            data={"aspects": aspects},
            meta={"aspect_count": len(aspects)},
        )

    def aspects_overview(self) -> ServiceResult:
        """Every aspect with field counts only.

        ``completedFieldCount`` stays zero here; see
        :meth:`ProgressService.aspect_progress` for record-based counts.
        """
        summaries = [a.summary().to_payload() for a in self._catalog.aspects]
        return ServiceResult(ok=True, op="aspects_overview", data={"aspects": summaries})

    def aspect_fields(self, aspect_key: str) -> ServiceResult:
        """Fields of one aspect, or an ``ASPECT_NOT_FOUND`` error result."""
        op = "aspect_fields"
        found = self._aspect_or_error(op, aspect_key)
        if isinstance(found, ServiceResult):
            return found
        return ServiceResult(ok=True, op=op, data=found.detail().to_payload())

    def completion_criterion(self, aspect_key: str, field_key: str) -> ServiceResult:
        """Completion criterion of one field.

        Unknown ``(aspect, field)`` pairs report ``filled_only`` with a
        warning rather than failing.
        """
        criterion = self._catalog.criterion_for(aspect_key, field_key)
        known = self._catalog.field(aspect_key, field_key) is not None
        warnings: list[str] = []
        if not known:
            warnings.append(
                f"Unknown field {aspect_key}/{field_key}; "
                f"defaulting to {CompletionCriterion.FILLED_ONLY}"
            )
        data = dump_validated(
            CriterionData,
            {
                "aspect_key": aspect_key,
                "field_key": field_key,
                "criterion": str(criterion),
                "known_field": known,
            },
        )
        return ServiceResult(ok=True, op="completion_criterion", data=data, warnings=warnings)
