# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Interfaces of the remote collaborators and the run context threading them."""

from dataclasses import dataclass
from typing import List, Protocol

from .config import Config
from .models import Issue, Milestone, Release, ReleasePatch, ReleaseSpec


class ReleaseStore(Protocol):
    """Source of milestones, issues and releases; sink for release changes.

    Implementations raise ``StoreError`` on any communication failure.
    """

    def list_components(self, owner: str) -> List[str]:
        ...

    def list_milestones(self, component: str) -> List[Milestone]:
        ...

    def list_closed_issues(self, component: str, milestone_number: int) -> List[Issue]:
        ...

    def list_open_labeled_issues(self, repo: str, label: str) -> List[Issue]:
        ...

    def list_releases(self, component: str) -> List[Release]:
        ...

    def create_release(self, component: str, spec: ReleaseSpec) -> Release:
        ...

    def update_release(self, component: str, release_id: int, patch: ReleasePatch) -> Release:
        ...


class ApprovalOracle(Protocol):
    """Yes/no decision source consulted before unpublishing a release."""

    def confirm(self, prompt: str) -> bool:
        ...


@dataclass
class RunContext:
    """Everything a run needs, passed explicitly instead of living in globals."""
    config: Config
    store: ReleaseStore
    oracle: ApprovalOracle
    dry_run: bool = False
    debug: bool = False
