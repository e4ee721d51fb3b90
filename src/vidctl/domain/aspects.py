"""Aspect table — field descriptors grouped into the six production phases.

:data:`ASPECT_TABLE` is the single declarative source: one
:class:`FieldSpec` row per editable field, binding a unique field key to a
``Video`` property path, a field kind, a completion criterion and an
explicit 1-based order. :class:`AspectCatalog` validates the table once
and materializes immutable descriptors from it.

INVARIANT: ``order`` is stored, never derived from list position; the
catalog rejects any table where the two disagree.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Sequence
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vidctl.domain.fieldtypes import (
    FieldKind,
    FieldType,
    UIHints,
    ValidationHints,
    field_type_for,
)
from vidctl.domain.types import CANONICAL_ASPECT_ORDER, AspectKey, CompletionCriterion
from vidctl.domain.video import is_known_path

logger = logging.getLogger(__name__)

DEFAULT_VIDEOS_PREFIX = "/api/videos"
DEFAULT_FIELD_DESCRIPTION = "Field description"

_STRING = FieldKind.STRING
_TEXT = FieldKind.TEXT
_BOOLEAN = FieldKind.BOOLEAN
_DATE = FieldKind.DATE

_FILLED = CompletionCriterion.FILLED_ONLY
_EMPTY = CompletionCriterion.EMPTY_OR_FILLED
_TRUE = CompletionCriterion.TRUE_ONLY
_FALSE = CompletionCriterion.FALSE_ONLY
_NO_FIXME = CompletionCriterion.NO_FIXME
_CONDITIONAL = CompletionCriterion.CONDITIONAL


class MappingError(ValueError):
    """The aspect table is malformed. Raised once, at catalog construction."""


# ---------------------------------------------------------------------------
# Declarative table
# ---------------------------------------------------------------------------


class FieldSpec(NamedTuple):
    """One row of the aspect table."""

    key: str
    display_name: str
    property_path: str
    kind: FieldKind
    criterion: CompletionCriterion
    order: int
    description: str = DEFAULT_FIELD_DESCRIPTION
    required: bool = False
    options: tuple[str, ...] = ()


class AspectSpec(NamedTuple):
    """One aspect of the table with its ordered field rows."""

    key: AspectKey
    title: str
    description: str
    icon: str
    order: int
    fields: tuple[FieldSpec, ...]


# fmt: off
ASPECT_TABLE: tuple[AspectSpec, ...] = (
    AspectSpec(
        AspectKey.INITIAL_DETAILS, "Initial Details",
        "Initial video details and project information", "info", 1,
        (
            FieldSpec("projectName", "Project Name", "project_name", _STRING, _FILLED, 1,
                      "Name of the related project"),
            FieldSpec("projectURL", "Project URL", "project_url", _STRING, _FILLED, 2,
                      "URL to the project repository or documentation"),
            FieldSpec("sponsorshipAmount", "Sponsorship Amount", "sponsorship.amount",
                      _STRING, _FILLED, 3, "Sponsorship amount if applicable"),
            FieldSpec("sponsorshipEmails", "Sponsorship Emails (comma separated)",
                      "sponsorship.emails", _STRING, _CONDITIONAL, 4,
                      "Sponsor contact emails"),
            FieldSpec("sponsorshipBlockedReason", "Sponsorship Blocked Reason",
                      "sponsorship.blocked", _STRING, _EMPTY, 5,
                      "Why the sponsorship is blocked, empty when it is not"),
            FieldSpec("publishDate", "Publish Date (YYYY-MM-DDTHH:MM)", "date", _DATE,
                      _FILLED, 6, "Scheduled publication date and time"),
            FieldSpec("delayed", "Delayed", "delayed", _BOOLEAN, _FALSE, 7,
                      "Whether the video is delayed"),
            FieldSpec("gistPath", "Gist Path (.md file)", "gist", _STRING, _FILLED, 8,
                      "Path to the manuscript/gist file"),
        ),
    ),
    AspectSpec(
        AspectKey.WORK_PROGRESS, "Work In Progress",
        "Work progress and content creation status", "video", 2,
        (
            FieldSpec("codeDone", "Code Done", "code", _BOOLEAN, _TRUE, 1,
                      "Code/demonstration completed"),
            FieldSpec("talkingHeadDone", "Talking Head Done", "head", _BOOLEAN, _TRUE, 2,
                      "Talking head video recorded"),
            FieldSpec("screenRecordingDone", "Screen Recording Done", "screen", _BOOLEAN,
                      _TRUE, 3, "Screen recording completed"),
            FieldSpec("relatedVideos", "Related Videos (comma separated)", "related_videos",
                      _TEXT, _FILLED, 4, "List of related videos for reference"),
            FieldSpec("thumbnailsDone", "Thumbnails Done", "thumbnails", _BOOLEAN, _TRUE, 5,
                      "Thumbnail images prepared"),
            FieldSpec("diagramsDone", "Diagrams Done", "diagrams", _BOOLEAN, _TRUE, 6,
                      "Diagrams and visual aids created"),
            FieldSpec("screenshotsDone", "Screenshots Done", "screenshots", _BOOLEAN, _TRUE, 7,
                      "Screenshots captured"),
            FieldSpec("filesLocation", "Files Location (e.g., Google Drive link)", "location",
                      _STRING, _FILLED, 8, "File storage location or Google Drive link"),
            FieldSpec("tagline", "Tagline", "tagline", _STRING, _FILLED, 9,
                      "Video tagline or subtitle"),
            FieldSpec("taglineIdeas", "Tagline Ideas", "tagline_ideas", _TEXT, _FILLED, 10,
                      "Alternative tagline options"),
            FieldSpec("otherLogos", "Other Logos/Assets", "other_logos", _STRING, _FILLED, 11,
                      "Additional logos or assets needed"),
        ),
    ),
    AspectSpec(
        AspectKey.DEFINITION, "Definition",
        "Video content definition and metadata", "edit", 3,
        (
            FieldSpec("title", "Title", "title", _STRING, _FILLED, 1, "Video title",
                      required=True),
            FieldSpec("description", "Description", "description", _TEXT, _FILLED, 2,
                      "Video description text"),
            FieldSpec("highlight", "Highlight", "highlight", _STRING, _FILLED, 3,
                      "Key highlight or main point"),
            FieldSpec("tags", "Tags", "tags", _STRING, _FILLED, 4,
                      "Video tags for categorization"),
            FieldSpec("descriptionTags", "Description Tags", "description_tags", _TEXT,
                      _FILLED, 5, "Tags for video description"),
            FieldSpec("tweet", "Tweet", "tweet", _STRING, _FILLED, 6,
                      "Social media tweet text"),
            FieldSpec("animationsScript", "Animations Script", "animations", _TEXT, _FILLED, 7,
                      "Animation instructions or script"),
        ),
    ),
    AspectSpec(
        AspectKey.POST_PRODUCTION, "Post-Production",
        "Post-production editing and review tasks", "scissors", 4,
        (
            FieldSpec("thumbnailPath", "Thumbnail Path", "thumbnail", _STRING, _FILLED, 1,
                      "Path to thumbnail image file"),
            FieldSpec("members", "Members (comma separated)", "members", _STRING, _FILLED, 2,
                      "Team members involved"),
            FieldSpec("requestEdit", "Edit Request", "request_edit", _BOOLEAN, _TRUE, 3,
                      "Video sent to the editor"),
            FieldSpec("timecodes", "Timecodes", "timecodes", _TEXT, _NO_FIXME, 4,
                      "Important timestamp markers"),
            FieldSpec("movieDone", "Movie Done", "movie", _BOOLEAN, _TRUE, 5,
                      "Video editing completed"),
            FieldSpec("slidesDone", "Slides Done", "slides", _BOOLEAN, _TRUE, 6,
                      "Presentation slides finalized"),
        ),
    ),
    AspectSpec(
        AspectKey.PUBLISHING, "Publishing Details",
        "Publishing settings and video upload", "upload", 5,
        (
            FieldSpec("videoFilePath", "Video File Path", "upload_video", _STRING, _FILLED, 1,
                      "Path to final video file"),
            FieldSpec("youTubeVideoId", "Current YouTube Video ID", "video_id", _STRING,
                      _FILLED, 2, "ID of the uploaded YouTube video"),
            FieldSpec("hugoPostPath", "Create/Update Hugo Post", "hugo_path", _STRING,
                      _FILLED, 3, "Path to the Hugo blog post"),
        ),
    ),
    AspectSpec(
        AspectKey.POST_PUBLISH, "Post-Publish Details",
        "Post-publication tasks and social media", "share", 6,
        (
            FieldSpec("dotPosted", "DevOpsToolkit Post Sent (manual)", "dot_posted", _BOOLEAN,
                      _TRUE, 1, "Posted to DevOpsToolkit"),
            FieldSpec("blueSkyPosted", "BlueSky Post Sent", "bluesky_posted", _BOOLEAN,
                      _TRUE, 2, "Posted to BlueSky social media"),
            FieldSpec("linkedInPosted", "LinkedIn Post Sent (manual)", "linkedin_posted",
                      _BOOLEAN, _TRUE, 3, "Posted to LinkedIn"),
            FieldSpec("slackPosted", "Slack Post Sent", "slack_posted", _BOOLEAN, _TRUE, 4,
                      "Posted to Slack channels"),
            FieldSpec("youTubeHighlight", "YouTube Highlight Created (manual)",
                      "youtube_highlight", _BOOLEAN, _TRUE, 5, "YouTube highlight reel created"),
            FieldSpec("youTubeComment", "YouTube Pinned Comment Added (manual)",
                      "youtube_comment", _BOOLEAN, _TRUE, 6, "Pinned comment added to YouTube"),
            FieldSpec("youTubeCommentReply", "Replied to YouTube Comments (manual)",
                      "youtube_comment_reply", _BOOLEAN, _TRUE, 7, "Replied to YouTube comments"),
            FieldSpec("gdePosted", "GDE Advocu Post Sent (manual)", "gde", _BOOLEAN, _TRUE, 8,
                      "Posted to GDE Advocu"),
            FieldSpec("codeRepository", "Code Repository URL", "repo", _STRING, _FILLED, 9,
                      "Link to associated code repository"),
            FieldSpec("notifiedSponsors", "Notify Sponsors", "notified_sponsors", _BOOLEAN,
                      _CONDITIONAL, 10, "Notify sponsors of publication"),
        ),
    ),
)
# fmt: on


# ---------------------------------------------------------------------------
# Descriptors (serialized with camelCase keys)
# ---------------------------------------------------------------------------

_DESCRIPTOR_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class FieldDescriptor(BaseModel):
    """Full metadata for one editable field."""

    model_config = _DESCRIPTOR_CONFIG

    key: str
    display_name: str
    property_path: str
    field_type: FieldKind = Field(alias="type")
    required: bool
    order: int
    description: str
    options: tuple[str, ...] | None = None
    ui_hints: UIHints
    validation_hints: ValidationHints
    default_value: Any = None
    completion_criterion: CompletionCriterion

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict; ``options`` appears only on select fields."""
        data = self.model_dump(mode="json", by_alias=True)
        if self.options is None:
            data.pop("options")
        return data


class AspectSummary(BaseModel):
    """Aspect without per-field detail.

    ``completed_field_count`` needs a live record to fill; metadata-only
    callers leave it at zero.
    """

    model_config = _DESCRIPTOR_CONFIG

    key: AspectKey
    title: str
    description: str
    endpoint: str
    icon: str
    order: int
    field_count: int
    completed_field_count: int = 0

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AspectDetail(BaseModel):
    """The fields of a single aspect."""

    model_config = _DESCRIPTOR_CONFIG

    aspect_key: AspectKey
    aspect_title: str
    fields: tuple[FieldDescriptor, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            "aspectKey": str(self.aspect_key),
            "aspectTitle": self.aspect_title,
            "fields": [f.to_payload() for f in self.fields],
        }


class AspectDescriptor(BaseModel):
    """Full metadata for one aspect, fields in order."""

    model_config = _DESCRIPTOR_CONFIG

    key: AspectKey
    title: str
    description: str
    endpoint: str
    icon: str
    order: int
    fields: tuple[FieldDescriptor, ...]

    def field(self, field_key: str) -> FieldDescriptor | None:
        for descriptor in self.fields:
            if descriptor.key == field_key:
                return descriptor
        return None

    def summary(self, completed_field_count: int = 0) -> AspectSummary:
        return AspectSummary(
            key=self.key,
            title=self.title,
            description=self.description,
            endpoint=self.endpoint,
            icon=self.icon,
            order=self.order,
            field_count=len(self.fields),
            completed_field_count=completed_field_count,
        )

    def detail(self) -> AspectDetail:
        return AspectDetail(aspect_key=self.key, aspect_title=self.title, fields=self.fields)

    def to_payload(self) -> dict[str, Any]:
        return {
            "key": str(self.key),
            "title": self.title,
            "description": self.description,
            "endpoint": self.endpoint,
            "icon": self.icon,
            "order": self.order,
            "fields": [f.to_payload() for f in self.fields],
        }


# ---------------------------------------------------------------------------
# Table validation
# ---------------------------------------------------------------------------


def validate_table(table: Sequence[AspectSpec]) -> None:
    """Check every table invariant, raising :class:`MappingError` on the first defect."""
    keys = tuple(aspect.key for aspect in table)
    if keys != CANONICAL_ASPECT_ORDER:
        expected = [str(k) for k in CANONICAL_ASPECT_ORDER]
        msg = f"Aspects must follow the phase order {expected}, got {[str(k) for k in keys]}"
        raise MappingError(msg)

    for position, aspect in enumerate(table, start=1):
        if aspect.order != position:
            msg = f"Aspect '{aspect.key}' declares order {aspect.order}, expected {position}"
            raise MappingError(msg)
        if not aspect.fields:
            msg = f"Aspect '{aspect.key}' declares no fields"
            raise MappingError(msg)

        seen: set[str] = set()
        for index, row in enumerate(aspect.fields, start=1):
            where = f"{aspect.key}/{row.key}"
            if not row.key:
                msg = f"Aspect '{aspect.key}' has a field with an empty key at position {index}"
                raise MappingError(msg)
            if row.key in seen:
                msg = f"Duplicate field key {where}"
                raise MappingError(msg)
            seen.add(row.key)
            if row.order != index:
                msg = f"Field {where} declares order {row.order}, expected {index}"
                raise MappingError(msg)
            if not isinstance(row.criterion, CompletionCriterion):
                msg = f"Field {where} has invalid completion criterion {row.criterion!r}"
                raise MappingError(msg)
            if not isinstance(row.kind, FieldKind):
                msg = f"Field {where} has invalid field kind {row.kind!r}"
                raise MappingError(msg)
            if not is_known_path(row.property_path):
                msg = f"Field {where} maps to unknown property path '{row.property_path}'"
                raise MappingError(msg)
            if row.kind is FieldKind.SELECT and not row.options:
                msg = f"Select field {where} declares no options"
                raise MappingError(msg)
            if row.kind is not FieldKind.SELECT and row.options:
                msg = f"Field {where} declares options but is not a select field"
                raise MappingError(msg)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class AspectCatalog:
    """Immutable, validated view of the aspect table.

    Descriptors are built eagerly in the constructor and never change,
    so a catalog can be shared between threads without locking.
    """

    def __init__(
        self,
        table: Sequence[AspectSpec] = ASPECT_TABLE,
        *,
        videos_prefix: str = DEFAULT_VIDEOS_PREFIX,
    ) -> None:
        validate_table(table)
        prefix = videos_prefix.rstrip("/")

        aspects: list[AspectDescriptor] = []
        field_types: dict[tuple[str, str], FieldType] = {}
        for aspect in table:
            fields: list[FieldDescriptor] = []
            for row in aspect.fields:
                field_type = field_type_for(row.kind, required=row.required, options=row.options)
                field_types[(aspect.key, row.key)] = field_type
                fields.append(_describe_field(row, field_type))
            aspects.append(
                AspectDescriptor(
                    key=aspect.key,
                    title=aspect.title,
                    description=aspect.description,
                    endpoint=f"{prefix}/{{videoName}}/{aspect.key}",
                    icon=aspect.icon,
                    order=aspect.order,
                    fields=tuple(fields),
                )
            )

        self._aspects: tuple[AspectDescriptor, ...] = tuple(aspects)
        self._by_key: dict[str, AspectDescriptor] = {a.key: a for a in self._aspects}
        self._field_types = field_types
        logger.debug(
            "Built aspect catalog: %d aspects, %d fields",
            len(self._aspects),
            len(field_types),
        )

    @property
    def aspects(self) -> tuple[AspectDescriptor, ...]:
        """All aspects, ordered by ``order``."""
        return self._aspects

    def keys(self) -> tuple[AspectKey, ...]:
        return tuple(a.key for a in self._aspects)

    def get(self, aspect_key: str) -> AspectDescriptor | None:
        return self._by_key.get(aspect_key)

    def field(self, aspect_key: str, field_key: str) -> FieldDescriptor | None:
        aspect = self.get(aspect_key)
        if aspect is None:
            return None
        return aspect.field(field_key)

    def field_type(self, aspect_key: str, field_key: str) -> FieldType | None:
        return self._field_types.get((aspect_key, field_key))

    def criterion_for(self, aspect_key: str, field_key: str) -> CompletionCriterion:
        """Completion criterion of a field; ``filled_only`` for unknown pairs."""
        descriptor = self.field(aspect_key, field_key)
        if descriptor is None:
            return CompletionCriterion.FILLED_ONLY
        return descriptor.completion_criterion


def _describe_field(row: FieldSpec, field_type: FieldType) -> FieldDescriptor:
    return FieldDescriptor(
        key=row.key,
        display_name=row.display_name,
        property_path=row.property_path,
        field_type=row.kind,
        required=row.required,
        order=row.order,
        description=row.description,
        options=row.options if row.kind is FieldKind.SELECT else None,
        ui_hints=field_type.ui_hints(),
        validation_hints=field_type.validation_hints(),
        default_value=field_type.default_value(),
        completion_criterion=row.criterion,
    )


@functools.cache
def default_catalog(videos_prefix: str = DEFAULT_VIDEOS_PREFIX) -> AspectCatalog:
    """Process-wide catalog over :data:`ASPECT_TABLE`, built on first use."""
    return AspectCatalog(videos_prefix=videos_prefix)
