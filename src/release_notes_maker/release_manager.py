# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Build notes and reconcile releases for one component or a whole organization."""

from typing import Dict, List, Optional, Tuple
from rich.console import Console

from .errors import MilestoneNotFoundError
from .models import Issue, Milestone, Release, ReleaseSpec
from .notes import NotesBuilder, RollupNotesBuilder
from .policies import select_known_issues, select_milestone
from .reconcile import ReleaseReconciler, content_patch, visibility_patch
from .store import RunContext

console = Console()


def component_name(component: str) -> str:
    """Short repository name of an ``owner/name`` component."""
    return component.split('/')[-1]


class ReleaseManager:
    """Drive notes generation and release reconciliation, strictly sequentially."""

    def __init__(self, context: RunContext):
        self.context = context
        self.config = context.config
        self.store = context.store
        self.reconciler = ReleaseReconciler(context.store, context.oracle, debug=context.debug)
        self.notes_builder = NotesBuilder()

    def build_component_notes(self, component: str, milestone_token: str) -> Tuple[Milestone, str]:
        """
        Render the notes of the milestone matching ``milestone_token``.

        Raises:
            MilestoneNotFoundError: If no milestone title ends with the token
        """
        milestone = select_milestone(self.store.list_milestones(component), milestone_token)
        if milestone is None:
            raise MilestoneNotFoundError(component, milestone_token)

        issues = self.store.list_closed_issues(component, milestone.number)
        grouped = self.notes_builder.group(issues)
        notes = self.notes_builder.build(issues)

        console.print(f"Found ({sum(len(g) for g in grouped.values())}) issues in {milestone.title}")
        if self.context.debug or self.context.dry_run:
            console.print(notes, markup=False, highlight=False)

        return milestone, notes

    def collect_known_issues(self, milestone_label: str) -> List[Issue]:
        """Open notices labelled as known issues for this milestone."""
        rollup = self.config.rollup
        if not rollup.notices_repo:
            return []
        issues = self.store.list_open_labeled_issues(rollup.notices_repo, rollup.known_issue_label)
        return select_known_issues(issues, milestone_label)

    def _describe_plan(self, component: str, desired: ReleaseSpec, actual: Optional[Release]):
        if actual is None:
            state = "public" if desired.publish else "draft"
            console.print(
                f"[yellow]Would create {state} release '{desired.name}' ({desired.tag_name}) in {component}[/yellow]"
            )
            return

        patch = content_patch(desired, actual)
        visibility = visibility_patch(desired, actual)
        if patch is None and visibility is None:
            console.print(f"[dim]Release '{actual.name}' in {component} is up to date[/dim]")
        if patch is not None:
            console.print(f"[yellow]Would update release '{actual.name}' in {component}[/yellow]")
        if visibility is not None and visibility.draft is False:
            console.print(f"[yellow]Would publish release '{actual.name}' in {component}[/yellow]")
        elif visibility is not None:
            console.print(f"[yellow]Would ask to unpublish release '{actual.name}' in {component}[/yellow]")

    def _apply(self, component: str, desired: ReleaseSpec) -> Optional[Release]:
        actual = self.reconciler.find_release(component, desired.name)
        if self.context.dry_run:
            self._describe_plan(component, desired, actual)
            return actual
        return self.reconciler.reconcile(component, desired, actual)

    def publish_component(
        self,
        component: str,
        tag: str,
        milestone_token: str,
        publish: bool
    ) -> Optional[Release]:
        """
        Create or update the release of ``component`` for a milestone.

        The release is named after the matched milestone title and tagged
        ``tag``. In dry-run mode nothing is changed and the existing release,
        if any, is returned.
        """
        console.print(f"[bold cyan]{component}[/bold cyan]")
        milestone, notes = self.build_component_notes(component, milestone_token)
        desired = ReleaseSpec(tag_name=tag, name=milestone.title, body=notes, publish=publish)
        return self._apply(component, desired)

    def publish_rollup(
        self,
        component: str,
        tag: str,
        milestone_token: str,
        publish: bool,
        releases: Dict[str, Release]
    ) -> Optional[Release]:
        """Create or update the umbrella release linking the component releases."""
        console.print(f"[bold cyan]{component} (rollup)[/bold cyan]")
        owner = component.split('/')[0]
        known_issues = self.collect_known_issues(milestone_token)
        notes = RollupNotesBuilder(self.config, owner).build(milestone_token, releases, known_issues)
        if self.context.debug or self.context.dry_run:
            console.print(notes, markup=False, highlight=False)

        desired = ReleaseSpec(tag_name=tag, name=milestone_token, body=notes, publish=publish)
        return self._apply(component, desired)

    def publish_organization(
        self,
        owner: str,
        tag: str,
        milestone_token: str,
        publish: bool
    ) -> Dict[str, Release]:
        """
        Publish every component of ``owner`` in listing order, then the rollup.

        Excluded components are skipped. The rollup component, when configured
        and present, goes last so it links to the final component releases.
        Any failure aborts the remaining run.

        Returns:
            Component name to its release
        """
        components = self.store.list_components(owner)
        console.print(f"Found ({len(components)}) repositories in {owner}")

        excluded = self.config.release.excluded_components
        rollup_name = self.config.rollup.component
        rollup_component: Optional[str] = None
        releases: Dict[str, Release] = {}

        for component in components:
            name = component_name(component)
            if name in excluded or component in excluded:
                console.print(f"[dim]Skipping excluded repository {component}[/dim]")
                continue
            if rollup_name and name == rollup_name:
                rollup_component = component
                continue

            release = self.publish_component(component, tag, milestone_token, publish)
            if release is not None:
                releases[name] = release

        if rollup_component is not None:
            rollup_release = self.publish_rollup(
                rollup_component, tag, milestone_token, publish, dict(releases)
            )
            if rollup_release is not None:
                releases[component_name(rollup_component)] = rollup_release

        return releases
