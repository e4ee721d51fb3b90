"""Completion criteria — decide whether a field value counts as done.

Every criterion except ``conditional`` is a one-argument predicate over
the field value. Conditional criteria are two-argument predicates over
``(value, record)`` registered per ``(aspect, field)`` in
:data:`CONDITIONAL_RULES`; they encode an implication: a sponsorship on
the record obliges the dependent field to be satisfied.

Unrecognized criteria and conditional fields without a registered rule
fall back to ``filled_only``, so a misconfigured field is stricter,
never vacuously complete.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from vidctl.domain.types import AspectKey, CompletionCriterion
from vidctl.domain.video import MISSING, resolve_property

logger = logging.getLogger(__name__)

FIXME_MARKER = "FIXME:"
PLACEHOLDER_VALUE = "-"
NO_SPONSORSHIP_MARKERS = frozenset({"", "N/A", "-"})
SPONSORSHIP_AMOUNT_PATH = "sponsorship.amount"

ConditionalRule = Callable[[Any, Any], bool]


# --- Single-value predicates ---


def is_filled_only(value: Any) -> bool:
    """Non-blank string other than ``"-"``, or ``True``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        return bool(stripped) and stripped != PLACEHOLDER_VALUE
    return False


def is_empty_or_filled(value: Any) -> bool:
    """Blank string, ``False``, or no value at all.

    Used for fields whose absence is the healthy state, such as a
    sponsorship blocked reason.
    """
    if value is None or value is MISSING:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, str):
        return not value.strip()
    return False


def is_filled_required(value: Any) -> bool:
    """Same rule as :func:`is_filled_only`."""
    return is_filled_only(value)


def is_true_only(value: Any) -> bool:
    return value is True


def is_false_only(value: Any) -> bool:
    return value is False


def is_no_fixme(value: Any) -> bool:
    """Non-blank string without a ``FIXME:`` marker."""
    if not isinstance(value, str):
        return False
    return bool(value.strip()) and FIXME_MARKER not in value


# --- Cross-field rules ---


def has_sponsorship(record: Any) -> bool:
    """True when the record carries a real sponsorship amount."""
    amount = resolve_property(record, SPONSORSHIP_AMOUNT_PATH)
    if amount is MISSING or amount is None:
        return False
    return str(amount).strip() not in NO_SPONSORSHIP_MARKERS


def sponsor_emails_complete(value: Any, record: Any) -> bool:
    """Sponsor contact emails are only owed when a sponsorship exists."""
    return not has_sponsorship(record) or is_filled_only(value)


def sponsor_notification_complete(value: Any, record: Any) -> bool:
    """Sponsors are only notified when a sponsorship exists."""
    return not has_sponsorship(record) or is_true_only(value)


CONDITIONAL_RULES: dict[tuple[str, str], ConditionalRule] = {
    (AspectKey.INITIAL_DETAILS, "sponsorshipEmails"): sponsor_emails_complete,
    (AspectKey.POST_PUBLISH, "notifiedSponsors"): sponsor_notification_complete,
}

_PREDICATES: dict[CompletionCriterion, Callable[[Any], bool]] = {
    CompletionCriterion.FILLED_ONLY: is_filled_only,
    CompletionCriterion.EMPTY_OR_FILLED: is_empty_or_filled,
    CompletionCriterion.FILLED_REQUIRED: is_filled_required,
    CompletionCriterion.TRUE_ONLY: is_true_only,
    CompletionCriterion.FALSE_ONLY: is_false_only,
    CompletionCriterion.NO_FIXME: is_no_fixme,
}


def evaluate_criterion(
    criterion: CompletionCriterion | str | None,
    value: Any,
    *,
    record: Any = None,
    aspect_key: str = "",
    field_key: str = "",
) -> bool:
    """Apply *criterion* to *value*.

    Args:
        criterion: The rule to apply. Unknown values fall back to
            ``filled_only``.
        value: The field's current value (``MISSING`` when unresolved).
        record: The whole record; only conditional rules read it.
        aspect_key: Aspect of the field, selects the conditional rule.
        field_key: Field key, selects the conditional rule.
    """
    try:
        resolved = CompletionCriterion(criterion)
    except ValueError:
        logger.debug("Unknown completion criterion %r, using filled_only", criterion)
        return is_filled_only(value)

    if resolved is not CompletionCriterion.CONDITIONAL:
        return _PREDICATES[resolved](value)

    rule = CONDITIONAL_RULES.get((aspect_key, field_key))
    if rule is None or record is None:
        logger.debug(
            "No conditional rule applies to %s/%s, using filled_only",
            aspect_key,
            field_key,
        )
        return is_filled_only(value)
    return rule(value, record)
