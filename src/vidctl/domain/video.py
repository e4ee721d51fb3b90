"""Video record model and property-path resolution.

``Video`` is the production-tracking record whose attributes the aspect
table describes. Attribute names map 1:1 to the keys of the on-disk YAML
store, which spells each name lower-cased without separators
(``projectname``, ``notifiedsponsors``); both spellings are accepted.

Property paths address one attribute, with at most one level of nesting
(``sponsorship.amount``). Resolution never raises: unknown paths yield
:data:`MISSING`.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from vidctl.domain.fieldtypes import DATE_FORMAT

PATH_SEPARATOR = "."


def _store_key(name: str) -> str:
    """``notified_sponsors`` -> ``notifiedsponsors``."""
    return name.replace("_", "")


class _Record(BaseModel):
    """Base for store-backed models.

    Hand-edited YAML leaves empty values (``highlight:``) as None and bare
    timestamps as date objects; both are normalized before validation.
    """

    model_config = ConfigDict(
        alias_generator=_store_key,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
        validate_assignment=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_store_value(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name is not None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        if isinstance(value, dt.datetime):
            return value.strftime(DATE_FORMAT)
        if isinstance(value, dt.date):
            return value.isoformat()
        return value


class _Missing:
    """Sentinel type for a property path that names no attribute."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


class Sponsorship(_Record):
    """Sponsor deal attached to a video."""

    amount: str = ""
    emails: str = ""
    blocked: str = ""


class Video(_Record):
    """A single video moving through the production phases."""

    name: str = ""
    category: str = ""

    # Initial details
    project_name: str = ""
    project_url: str = ""
    sponsorship: Sponsorship = Field(default_factory=Sponsorship)
    date: str = ""
    delayed: bool = False
    gist: str = ""

    # Work progress
    code: bool = False
    head: bool = False
    screen: bool = False
    related_videos: str = ""
    thumbnails: bool = False
    diagrams: bool = False
    screenshots: bool = False
    location: str = ""
    tagline: str = ""
    tagline_ideas: str = ""
    other_logos: str = ""

    # Definition
    title: str = ""
    description: str = ""
    highlight: str = ""
    tags: str = ""
    description_tags: str = ""
    tweet: str = ""
    animations: str = ""
    request_thumbnail: bool = False
    language: str = ""

    # Post-production
    thumbnail: str = ""
    members: str = ""
    request_edit: bool = False
    timecodes: str = ""
    movie: bool = False
    slides: bool = False

    # Publishing
    upload_video: str = ""
    video_id: str = ""
    hugo_path: str = ""

    # Post-publish
    dot_posted: bool = False
    bluesky_posted: bool = False
    linkedin_posted: bool = False
    slack_posted: bool = False
    hn_posted: bool = False
    youtube_highlight: bool = False
    youtube_comment: bool = False
    youtube_comment_reply: bool = False
    gde: bool = False
    repo: str = ""
    notified_sponsors: bool = False


def _lookup(source: Any, name: str) -> Any:
    if not name:
        return MISSING
    if isinstance(source, BaseModel):
        if name in type(source).model_fields:
            return getattr(source, name)
        return MISSING
    if isinstance(source, Mapping):
        return source.get(name, MISSING)
    return MISSING


def resolve_property(record: Any, path: str) -> Any:
    """Read the value at *path* from a record model or plain mapping.

    Returns :data:`MISSING` when any segment is unknown or the path nests
    deeper than one level.
    """
    head, sep, tail = path.partition(PATH_SEPARATOR)
    value = _lookup(record, head)
    if not sep or value is MISSING:
        return value
    if PATH_SEPARATOR in tail:
        return MISSING
    return _lookup(value, tail)


def is_known_path(path: str, model: type[BaseModel] = Video) -> bool:
    """Check that *path* names an attribute declared on *model*."""
    head, sep, tail = path.partition(PATH_SEPARATOR)
    info = model.model_fields.get(head)
    if info is None:
        return False
    if not sep:
        return True
    nested = info.annotation
    if not (isinstance(nested, type) and issubclass(nested, BaseModel)):
        return False
    return PATH_SEPARATOR not in tail and tail in nested.model_fields
