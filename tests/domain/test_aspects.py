"""Tests for the aspect table, its validation, and the catalog built from it."""

from __future__ import annotations

import pytest

from vidctl.domain.aspects import (
    ASPECT_TABLE,
    DEFAULT_VIDEOS_PREFIX,
    AspectCatalog,
    AspectSpec,
    FieldSpec,
    MappingError,
    default_catalog,
    validate_table,
)
from vidctl.domain.fieldtypes import FieldKind, SelectField
from vidctl.domain.types import CANONICAL_ASPECT_ORDER, AspectKey, CompletionCriterion
from vidctl.domain.video import MISSING, Video, resolve_property

# ── Helpers ───────────────────────────────────────────────────────────


def _replace_aspect(index: int, **changes: object) -> tuple[AspectSpec, ...]:
    table = list(ASPECT_TABLE)
    table[index] = table[index]._replace(**changes)
    return tuple(table)


def _replace_field(
    aspect_index: int, field_index: int, **changes: object
) -> tuple[AspectSpec, ...]:
    fields = list(ASPECT_TABLE[aspect_index].fields)
    fields[field_index] = fields[field_index]._replace(**changes)
    return _replace_aspect(aspect_index, fields=tuple(fields))


_LANGUAGE = FieldSpec(
    "language",
    "Language",
    "language",
    FieldKind.SELECT,
    CompletionCriterion.FILLED_ONLY,
    8,
    "Spoken language of the video",
    options=("en", "es"),
)


# ── Table shape ───────────────────────────────────────────────────────


class TestAspectOrder:
    def test_orders_are_one_through_six(self, catalog: AspectCatalog) -> None:
        assert sorted(a.order for a in catalog.aspects) == [1, 2, 3, 4, 5, 6]

    def test_follows_phase_sequence(self, catalog: AspectCatalog) -> None:
        assert catalog.keys() == CANONICAL_ASPECT_ORDER

    def test_field_orders_contiguous(self, catalog: AspectCatalog) -> None:
        for aspect in catalog.aspects:
            assert [f.order for f in aspect.fields] == list(range(1, len(aspect.fields) + 1))

    def test_field_keys_unique_per_aspect(self, catalog: AspectCatalog) -> None:
        for aspect in catalog.aspects:
            keys = [f.key for f in aspect.fields]
            assert len(keys) == len(set(keys))

    def test_field_counts(self, catalog: AspectCatalog) -> None:
        assert [len(a.fields) for a in catalog.aspects] == [8, 11, 7, 6, 3, 10]

    def test_every_path_resolves(self, catalog: AspectCatalog) -> None:
        video = Video()
        for aspect in catalog.aspects:
            for f in aspect.fields:
                assert resolve_property(video, f.property_path) is not MISSING, f.key

    def test_every_criterion_is_valid(self, catalog: AspectCatalog) -> None:
        for aspect in catalog.aspects:
            for f in aspect.fields:
                assert isinstance(f.completion_criterion, CompletionCriterion)


class TestKnownRows:
    def test_sponsor_fields(self, catalog: AspectCatalog) -> None:
        emails = catalog.field("initial-details", "sponsorshipEmails")
        assert emails is not None
        assert emails.property_path == "sponsorship.emails"
        assert emails.completion_criterion is CompletionCriterion.CONDITIONAL

        blocked = catalog.field("initial-details", "sponsorshipBlockedReason")
        assert blocked is not None
        assert blocked.completion_criterion is CompletionCriterion.EMPTY_OR_FILLED

        notified = catalog.field("post-publish", "notifiedSponsors")
        assert notified is not None
        assert notified.property_path == "notified_sponsors"
        assert notified.completion_criterion is CompletionCriterion.CONDITIONAL

    def test_special_criteria(self, catalog: AspectCatalog) -> None:
        timecodes = catalog.criterion_for("post-production", "timecodes")
        assert timecodes is CompletionCriterion.NO_FIXME
        assert catalog.criterion_for("initial-details", "delayed") is CompletionCriterion.FALSE_ONLY
        assert catalog.criterion_for("work-progress", "codeDone") is CompletionCriterion.TRUE_ONLY

    def test_title_is_required(self, catalog: AspectCatalog) -> None:
        title = catalog.field("definition", "title")
        assert title is not None
        assert title.required is True
        assert title.validation_hints.required is True

    def test_publish_date_is_a_date(self, catalog: AspectCatalog) -> None:
        date = catalog.field("initial-details", "publishDate")
        assert date is not None
        assert date.field_type is FieldKind.DATE
        assert date.ui_hints.input_type == "datetime"


# ── Descriptors ───────────────────────────────────────────────────────


class TestDescriptors:
    def test_endpoint_uses_prefix(self, catalog: AspectCatalog) -> None:
        aspect = catalog.get("publishing")
        assert aspect is not None
        assert aspect.endpoint == f"{DEFAULT_VIDEOS_PREFIX}/{{videoName}}/publishing"

    def test_custom_prefix_trailing_slash(self) -> None:
        catalog = AspectCatalog(videos_prefix="/v2/videos/")
        aspect = catalog.get("definition")
        assert aspect is not None
        assert aspect.endpoint == "/v2/videos/{videoName}/definition"

    def test_defaults_from_field_type(self, catalog: AspectCatalog) -> None:
        code = catalog.field("work-progress", "codeDone")
        tagline = catalog.field("work-progress", "tagline")
        assert code is not None and tagline is not None
        assert code.default_value is False
        assert tagline.default_value == ""

    def test_field_payload_keys(self, catalog: AspectCatalog) -> None:
        descriptor = catalog.field("definition", "description")
        assert descriptor is not None
        payload = descriptor.to_payload()
        assert payload["type"] == "text"
        assert payload["displayName"] == "Description"
        assert payload["propertyPath"] == "description"
        assert payload["completionCriterion"] == "filled_only"
        assert payload["uiHints"]["multiline"] is True
        assert "options" not in payload

    def test_summary(self, catalog: AspectCatalog) -> None:
        aspect = catalog.get("post-publish")
        assert aspect is not None
        summary = aspect.summary().to_payload()
        assert summary["fieldCount"] == 10
        assert summary["completedFieldCount"] == 0
        assert summary["icon"] == "share"

    def test_detail(self, catalog: AspectCatalog) -> None:
        aspect = catalog.get("publishing")
        assert aspect is not None
        detail = aspect.detail().to_payload()
        assert detail["aspectKey"] == "publishing"
        assert detail["aspectTitle"] == "Publishing Details"
        assert [f["key"] for f in detail["fields"]] == [
            "videoFilePath",
            "youTubeVideoId",
            "hugoPostPath",
        ]

    def test_descriptors_are_frozen(self, catalog: AspectCatalog) -> None:
        aspect = catalog.aspects[0]
        with pytest.raises(Exception):
            aspect.title = "Changed"  # type: ignore[misc]


# ── Lookups ───────────────────────────────────────────────────────────


class TestLookups:
    def test_unknown_aspect(self, catalog: AspectCatalog) -> None:
        assert catalog.get("does-not-exist") is None
        assert catalog.field("does-not-exist", "title") is None
        assert catalog.field_type("does-not-exist", "title") is None

    def test_unknown_field(self, catalog: AspectCatalog) -> None:
        assert catalog.field("definition", "nope") is None

    def test_criterion_fallback(self, catalog: AspectCatalog) -> None:
        assert catalog.criterion_for("definition", "nope") is CompletionCriterion.FILLED_ONLY
        assert catalog.criterion_for("nope", "nope") is CompletionCriterion.FILLED_ONLY

    def test_enum_key_lookup(self, catalog: AspectCatalog) -> None:
        assert catalog.get(AspectKey.DEFINITION) is catalog.get("definition")

    def test_default_catalog_is_shared(self) -> None:
        assert default_catalog() is default_catalog()
        assert default_catalog("/other") is not default_catalog()


# ── Table validation ──────────────────────────────────────────────────


class TestValidateTable:
    def test_default_table_is_valid(self) -> None:
        validate_table(ASPECT_TABLE)

    def test_wrong_aspect_sequence(self) -> None:
        table = (ASPECT_TABLE[1], ASPECT_TABLE[0], *ASPECT_TABLE[2:])
        with pytest.raises(MappingError, match="phase order"):
            AspectCatalog(table)

    def test_missing_aspect(self) -> None:
        with pytest.raises(MappingError):
            AspectCatalog(ASPECT_TABLE[:5])

    def test_aspect_order_mismatch(self) -> None:
        with pytest.raises(MappingError, match="order 7"):
            AspectCatalog(_replace_aspect(2, order=7))

    def test_empty_aspect(self) -> None:
        with pytest.raises(MappingError, match="no fields"):
            AspectCatalog(_replace_aspect(4, fields=()))

    def test_field_order_gap(self) -> None:
        with pytest.raises(MappingError, match="expected 2"):
            AspectCatalog(_replace_field(0, 1, order=3))

    def test_duplicate_field_key(self) -> None:
        with pytest.raises(MappingError, match="Duplicate"):
            AspectCatalog(_replace_field(0, 1, key="projectName"))

    def test_empty_field_key(self) -> None:
        with pytest.raises(MappingError, match="empty key"):
            AspectCatalog(_replace_field(3, 0, key=""))

    def test_invalid_criterion(self) -> None:
        with pytest.raises(MappingError, match="criterion"):
            AspectCatalog(_replace_field(2, 0, criterion="done_ish"))

    def test_invalid_kind(self) -> None:
        with pytest.raises(MappingError, match="field kind"):
            AspectCatalog(_replace_field(2, 0, kind="color"))

    def test_dangling_property_path(self) -> None:
        with pytest.raises(MappingError, match="unknown property path"):
            AspectCatalog(_replace_field(0, 0, property_path="projectName"))

    def test_select_without_options(self) -> None:
        with pytest.raises(MappingError, match="no options"):
            AspectCatalog(_replace_field(2, 6, kind=FieldKind.SELECT))

    def test_options_on_non_select(self) -> None:
        with pytest.raises(MappingError, match="not a select"):
            AspectCatalog(_replace_field(2, 6, options=("a",)))

    def test_mapping_error_is_value_error(self) -> None:
        assert issubclass(MappingError, ValueError)


class TestSelectRow:
    @pytest.fixture
    def select_catalog(self) -> AspectCatalog:
        definition = ASPECT_TABLE[2]
        table = _replace_aspect(2, fields=(*definition.fields, _LANGUAGE))
        return AspectCatalog(table)

    def test_descriptor_carries_options(self, select_catalog: AspectCatalog) -> None:
        descriptor = select_catalog.field("definition", "language")
        assert descriptor is not None
        assert descriptor.options == ("en", "es")
        assert descriptor.default_value == "en"
        payload = descriptor.to_payload()
        assert payload["options"] == ["en", "es"]
        assert [o["value"] for o in payload["uiHints"]["options"]] == ["en", "es"]

    def test_field_type_is_select(self, select_catalog: AspectCatalog) -> None:
        field_type = select_catalog.field_type("definition", "language")
        assert isinstance(field_type, SelectField)
        assert field_type.validate("es") is None
        assert field_type.validate("fr") is not None

    def test_count_grows(self, select_catalog: AspectCatalog) -> None:
        aspect = select_catalog.get("definition")
        assert aspect is not None
        assert aspect.summary().field_count == 8
