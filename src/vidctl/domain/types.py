"""Aspect keys and completion-criterion enums.

The six aspects are the ordered production phases of a video. Their
declaration order here is the canonical phase sequence.
"""

from __future__ import annotations

from enum import StrEnum


class AspectKey(StrEnum):
    """Production phases, declared in canonical order."""

    INITIAL_DETAILS = "initial-details"
    WORK_PROGRESS = "work-progress"
    DEFINITION = "definition"
    POST_PRODUCTION = "post-production"
    PUBLISHING = "publishing"
    POST_PUBLISH = "post-publish"


CANONICAL_ASPECT_ORDER: tuple[AspectKey, ...] = tuple(AspectKey)


class CompletionCriterion(StrEnum):
    """Rule deciding whether a field value counts as done."""

    FILLED_ONLY = "filled_only"
    EMPTY_OR_FILLED = "empty_or_filled"
    FILLED_REQUIRED = "filled_required"
    TRUE_ONLY = "true_only"
    FALSE_ONLY = "false_only"
    NO_FIXME = "no_fixme"
    CONDITIONAL = "conditional"
