# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Data models for the release notes maker."""

from typing import Optional, List
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Release note categories. NONE excludes the issue from the notes."""
    BUGS_FIXED = "Bugs Fixed"
    FEATURES = "Features"
    NONE = "none"


class Label(BaseModel):
    """Issue label model."""
    name: str
    color: Optional[str] = None
    description: Optional[str] = None


class Milestone(BaseModel):
    """Milestone model."""
    number: int
    title: str
    state: str = "open"


class Issue(BaseModel):
    """Issue model, read-only once fetched."""
    number: int
    title: str
    body: Optional[str] = None
    url: str = ""
    labels: List[Label] = Field(default_factory=list)
    milestone: Optional[Milestone] = None

    def label_names(self) -> List[str]:
        return [label.name for label in self.labels]


class Release(BaseModel):
    """Snapshot of a release as the registry reports it."""
    id: int
    name: str
    tag_name: str
    body: Optional[str] = None
    is_draft: bool = False
    is_prerelease: bool = False
    url: Optional[str] = None


def is_prerelease_tag(tag: str) -> bool:
    """A tag is a prerelease if it starts with "0" or contains a hyphen."""
    return tag.startswith("0") or "-" in tag


class ReleaseSpec(BaseModel):
    """
    Desired state of a release.

    ``publish`` True means the release must be public. False means it should
    be a draft, but an already public release is only unpublished after
    approval. The prerelease flag always follows the tag.
    """
    model_config = ConfigDict(extra="forbid")

    tag_name: str
    name: str
    body: str = ""
    publish: bool = False

    @property
    def prerelease(self) -> bool:
        return is_prerelease_tag(self.tag_name)


class ReleasePatch(BaseModel):
    """Partial update of a release. ``None`` fields are left untouched."""
    tag_name: Optional[str] = None
    body: Optional[str] = None
    prerelease: Optional[bool] = None
    draft: Optional[bool] = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.tag_name, self.body, self.prerelease, self.draft)
        )
