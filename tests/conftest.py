"""Shared pytest fixtures and test helpers for vidctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from vidctl.domain.aspects import AspectCatalog
from vidctl.domain.video import Video

# A record as it sits on disk: lower-cased keys, nested sponsorship block.
SAMPLE_RECORD = """\
name: Something
category: category-02
projectname: Something
projecturl: https://crossplane.io
sponsorship:
    amount: ""
    emails: ""
    blocked: ""
date: "2024-01-21T16:00"
delayed: false
screen: true
head: true
thumbnails: true
diagrams: true
title: 'APIs vs. Scripts: The Battle for the Soul of Platform Engineering!'
tags: '#KubernetesTutorial #DevOpsTraining'
location: google drive
tagline: Awesome
thumbnail: thumbnail.png
timecodes: |-
    00:00 Intro
    FIXME: Section: Nix Pros and Cons
repo: N/A
notifiedsponsors: false
gist: manuscript/category-02/something.md
code: true
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def catalog() -> AspectCatalog:
    """A freshly built catalog over the default aspect table."""
    return AspectCatalog()


@pytest.fixture
def record_file(tmp_path: Path) -> Path:
    """The sample record written to a temporary YAML file."""
    path = tmp_path / "something.yaml"
    path.write_text(SAMPLE_RECORD, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler changes made by CLI invocations that configure logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    vid_level = logging.getLogger("vidctl").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("vidctl").setLevel(vid_level)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory so no stray vidctl.toml is discovered."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("VIDCTL_CONFIG", raising=False)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_video(*, amount: str = "", emails: str = "", **fields: Any) -> Video:
    """Build a Video with an optional sponsorship and attribute overrides."""
    return Video(
        name=fields.pop("name", "test-video"),
        sponsorship={"amount": amount, "emails": emails},
        **fields,
    )


def complete_video(**overrides: Any) -> Video:
    """A Video on which every default-table field is complete."""
    fields: dict[str, Any] = {
        "name": "done",
        "project_name": "Crossplane",
        "project_url": "https://crossplane.io",
        "date": "2025-03-01T16:00",
        "delayed": False,
        "gist": "manuscript/devops/done.md",
        "code": True,
        "head": True,
        "screen": True,
        "related_videos": "https://youtu.be/abc",
        "thumbnails": True,
        "diagrams": True,
        "screenshots": True,
        "location": "drive",
        "tagline": "Ship it",
        "tagline_ideas": "Ship it faster",
        "other_logos": "crossplane.png",
        "title": "Done",
        "description": "All done",
        "highlight": "It works",
        "tags": "devops",
        "description_tags": "#devops",
        "tweet": "New video",
        "animations": "- Logo: crossplane.png",
        "thumbnail": "thumb.png",
        "members": "viktor",
        "request_edit": True,
        "timecodes": "00:00 Intro",
        "movie": True,
        "slides": True,
        "upload_video": "done.mp4",
        "video_id": "xyz",
        "hugo_path": "posts/done.md",
        "dot_posted": True,
        "bluesky_posted": True,
        "linkedin_posted": True,
        "slack_posted": True,
        "youtube_highlight": True,
        "youtube_comment": True,
        "youtube_comment_reply": True,
        "gde": True,
        "repo": "https://github.com/vfarcic/done",
        "notified_sponsors": True,
    }
    fields.update(overrides)
    sponsorship = fields.pop("sponsorship", {"amount": "1000", "emails": "a@b.com"})
    return Video(sponsorship=sponsorship, **fields)
