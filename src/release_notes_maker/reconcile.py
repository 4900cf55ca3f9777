# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Reconcile a release's actual state with its desired state.

A release is in one of three states: absent, draft or public. The transition
applied is computed from (exists, draft, publish requested):

* absent: create it with the desired content, as a draft unless publishing.
* exists: patch body, prerelease flag and tag if any of them differ, then
  publish a draft when publishing is requested, or unpublish a public release
  when it is not and the approval oracle agrees.

Running it twice with the same desired state against a store that reflects the
first run makes no further changes.
"""

from typing import Optional
from rich.console import Console

from .models import Release, ReleasePatch, ReleaseSpec
from .store import ApprovalOracle, ReleaseStore

console = Console()


def content_patch(desired: ReleaseSpec, actual: Release) -> Optional[ReleasePatch]:
    """Return the patch bringing body, prerelease flag and tag in line, or None."""
    if (
        (actual.body or "") == desired.body
        and actual.is_prerelease == desired.prerelease
        and actual.tag_name == desired.tag_name
    ):
        return None

    return ReleasePatch(
        body=desired.body,
        prerelease=desired.prerelease,
        tag_name=desired.tag_name
    )


def visibility_patch(desired: ReleaseSpec, actual: Release) -> Optional[ReleasePatch]:
    """Return the draft flag change needed, or None when visibility is as desired.

    A returned unpublish patch still needs approval before it is applied.
    """
    if desired.publish and actual.is_draft:
        return ReleasePatch(draft=False)
    if not desired.publish and not actual.is_draft:
        return ReleasePatch(draft=True)
    return None


class ReleaseReconciler:
    """Apply the minimal create/update/publish/unpublish transition for a release."""

    def __init__(self, store: ReleaseStore, oracle: ApprovalOracle, debug: bool = False):
        self.store = store
        self.oracle = oracle
        self.debug = debug

    def find_release(self, component: str, name: str) -> Optional[Release]:
        """Find a release by name. Tags may change between runs, names do not."""
        for release in self.store.list_releases(component):
            if release.name == name:
                return release
        return None

    def reconcile(
        self,
        component: str,
        desired: ReleaseSpec,
        actual: Optional[Release]
    ) -> Release:
        """
        Bring the release in line with ``desired``.

        Args:
            component: Repository holding the release
            desired: Desired release state
            actual: Current release with the same name, or None if absent

        Returns:
            The release as the store reports it after the last change

        Raises:
            StoreError: If any store call fails. Earlier changes are kept.
        """
        if actual is None:
            release = self.store.create_release(component, desired)
            state = "public" if desired.publish else "draft"
            console.print(
                f"[green]Created {state} release '{release.name}' ({release.tag_name}) "
                f"in {component}: {release.url}[/green]"
            )
            return release

        release = actual

        patch = content_patch(desired, release)
        if patch is not None:
            if self.debug:
                console.print(f"[dim]Updating release '{release.name}' in {component}: {patch}[/dim]")
            release = self.store.update_release(component, release.id, patch)
            console.print(f"[green]Updated release '{release.name}' in {component}[/green]")
        elif self.debug:
            console.print(f"[dim]Release '{release.name}' in {component} content is up to date[/dim]")

        visibility = visibility_patch(desired, release)
        if visibility is None:
            return release

        if visibility.draft is False:
            release = self.store.update_release(component, release.id, visibility)
            console.print(f"[green]Published release '{release.name}' in {component}: {release.url}[/green]")
            return release

        prompt = f"Release '{release.name}' in {component} is public. Unpublish it?"
        if not self.oracle.confirm(prompt):
            console.print(f"[yellow]Release '{release.name}' in {component} left public[/yellow]")
            return release

        release = self.store.update_release(component, release.id, visibility)
        console.print(f"[green]Unpublished release '{release.name}' in {component}[/green]")
        return release
