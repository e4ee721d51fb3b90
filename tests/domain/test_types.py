"""Tests for aspect keys and completion-criterion enums."""

from vidctl.domain.types import CANONICAL_ASPECT_ORDER, AspectKey, CompletionCriterion


class TestAspectKey:
    def test_canonical_order(self) -> None:
        assert [str(k) for k in CANONICAL_ASPECT_ORDER] == [
            "initial-details",
            "work-progress",
            "definition",
            "post-production",
            "publishing",
            "post-publish",
        ]

    def test_str_compares_to_value(self) -> None:
        assert AspectKey.POST_PUBLISH == "post-publish"
        assert AspectKey("definition") is AspectKey.DEFINITION


class TestCompletionCriterion:
    def test_seven_criteria(self) -> None:
        assert {str(c) for c in CompletionCriterion} == {
            "filled_only",
            "empty_or_filled",
            "filled_required",
            "true_only",
            "false_only",
            "no_fixme",
            "conditional",
        }
