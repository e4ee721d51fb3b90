"""Tests for ProgressService — completion and validation against a record."""

from __future__ import annotations

from typing import Any

import pytest

from tests.conftest import complete_video, make_video
from vidctl.domain.video import Video
from vidctl.services.progress import ProgressService


def _field_states(result_data: dict[str, Any]) -> dict[tuple[str, str], bool]:
    return {
        (a["key"], f["key"]): f["complete"]
        for a in result_data["aspects"]
        for f in a["fields"]
    }


class TestIsFieldComplete:
    def test_filled_string(self) -> None:
        result = ProgressService().is_field_complete(
            "definition", "title", make_video(title="Hello")
        )
        assert result.ok
        assert result.data == {
            "aspectKey": "definition",
            "fieldKey": "title",
            "propertyPath": "title",
            "criterion": "filled_only",
            "value": "Hello",
            "complete": True,
        }

    def test_nested_path(self) -> None:
        result = ProgressService().is_field_complete(
            "initial-details", "sponsorshipAmount", make_video(amount="-")
        )
        assert result.data["value"] == "-"
        assert result.data["complete"] is False

    def test_fixme_timecodes(self) -> None:
        video = make_video(timecodes="00:00 Intro\nFIXME: outro")
        result = ProgressService().is_field_complete("post-production", "timecodes", video)
        assert result.data["criterion"] == "no_fixme"
        assert result.data["complete"] is False

    def test_delayed(self) -> None:
        svc = ProgressService()
        assert svc.is_field_complete("initial-details", "delayed", make_video()).data["complete"]
        delayed = make_video(delayed=True)
        assert not svc.is_field_complete("initial-details", "delayed", delayed).data["complete"]

    def test_blocked_reason(self) -> None:
        svc = ProgressService()
        clear = make_video()
        blocked = Video(sponsorship={"amount": "100", "blocked": "legal review"})
        key = "sponsorshipBlockedReason"
        assert svc.is_field_complete("initial-details", key, clear).data["complete"] is True
        assert svc.is_field_complete("initial-details", key, blocked).data["complete"] is False

    def test_unknown_aspect(self) -> None:
        result = ProgressService().is_field_complete("nope", "title", make_video())
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ASPECT_NOT_FOUND"

    def test_unknown_field(self) -> None:
        result = ProgressService().is_field_complete("definition", "nope", make_video())
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "FIELD_NOT_FOUND"


class TestSponsorScenario:
    """Notify-sponsors completion follows the sponsorship, nothing else moves."""

    def test_notification_flips_only_its_field(self) -> None:
        svc = ProgressService()
        video = make_video(amount="500", notified_sponsors=False)

        before = svc.is_field_complete("post-publish", "notifiedSponsors", video)
        assert before.data["complete"] is False
        states_before = _field_states(svc.aspect_progress(video).data)

        notified = video.model_copy(update={"notified_sponsors": True})
        after = svc.is_field_complete("post-publish", "notifiedSponsors", notified)
        assert after.data["complete"] is True
        states_after = _field_states(svc.aspect_progress(notified).data)

        changed = {k for k in states_before if states_before[k] != states_after[k]}
        assert changed == {("post-publish", "notifiedSponsors")}

    def test_no_sponsorship_means_nothing_owed(self) -> None:
        svc = ProgressService()
        video = make_video(amount="N/A")
        assert svc.is_field_complete("post-publish", "notifiedSponsors", video).data["complete"]
        assert svc.is_field_complete("initial-details", "sponsorshipEmails", video).data[
            "complete"
        ]

    def test_sponsored_emails(self) -> None:
        svc = ProgressService()
        missing = make_video(amount="1000")
        present = make_video(amount="1000", emails="a@b.com")
        key = "sponsorshipEmails"
        assert svc.is_field_complete("initial-details", key, missing).data["complete"] is False
        assert svc.is_field_complete("initial-details", key, present).data["complete"] is True


class TestAspectProgress:
    def test_complete_video(self) -> None:
        result = ProgressService().aspect_progress(complete_video())
        assert result.ok
        assert result.data["video"] == "done"
        assert result.data["fieldCount"] == 45
        assert result.data["completedFieldCount"] == 45
        for aspect in result.data["aspects"]:
            assert aspect["completedFieldCount"] == aspect["fieldCount"]

    def test_empty_video(self) -> None:
        data = ProgressService().aspect_progress(Video()).data
        per_aspect = {a["key"]: a["completedFieldCount"] for a in data["aspects"]}
        # Only the "absence is healthy" fields count on a blank record.
        assert per_aspect == {
            "initial-details": 3,
            "work-progress": 0,
            "definition": 0,
            "post-production": 0,
            "publishing": 0,
            "post-publish": 1,
        }
        assert data["completedFieldCount"] == 4

    def test_single_aspect(self) -> None:
        result = ProgressService().aspect_progress(make_video(title="T"), "definition")
        assert result.ok
        assert [a["key"] for a in result.data["aspects"]] == ["definition"]
        assert result.data["fieldCount"] == 7
        assert result.data["completedFieldCount"] == 1

    def test_unknown_aspect(self) -> None:
        result = ProgressService().aspect_progress(make_video(), "nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ASPECT_NOT_FOUND"

    def test_field_rows(self) -> None:
        data = ProgressService().aspect_progress(make_video(), "publishing").data
        row = data["aspects"][0]["fields"][0]
        assert row == {
            "key": "videoFilePath",
            "displayName": "Video File Path",
            "criterion": "filled_only",
            "complete": False,
        }

    def test_does_not_mutate_record(self) -> None:
        video = complete_video()
        snapshot = video.model_dump()
        ProgressService().aspect_progress(video)
        assert video.model_dump() == snapshot


class TestValidateField:
    def test_valid(self) -> None:
        result = ProgressService().validate_field(
            "initial-details", "publishDate", "2025-03-01T16:00"
        )
        assert result.ok
        assert result.data == {
            "aspectKey": "initial-details",
            "fieldKey": "publishDate",
            "fieldType": "date",
            "valid": True,
            "violation": None,
        }

    @pytest.mark.parametrize(
        ("aspect", "field", "value", "kind"),
        [
            ("initial-details", "publishDate", "tomorrow", "invalid_date"),
            ("definition", "title", "  ", "required"),
            ("definition", "title", 7, "wrong_type"),
            ("post-publish", "dotPosted", "yes", "wrong_type"),
        ],
    )
    def test_violations(self, aspect: str, field: str, value: object, kind: str) -> None:
        result = ProgressService().validate_field(aspect, field, value)
        assert result.ok
        assert result.data["valid"] is False
        assert result.data["violation"]["kind"] == kind

    def test_unknown_aspect(self) -> None:
        result = ProgressService().validate_field("nope", "title", "x")
        assert result.error is not None
        assert result.error.code == "ASPECT_NOT_FOUND"

    def test_unknown_field(self) -> None:
        result = ProgressService().validate_field("definition", "nope", "x")
        assert result.error is not None
        assert result.error.code == "FIELD_NOT_FOUND"
