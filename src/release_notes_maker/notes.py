# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Markdown release notes for a single component and for a rollup release."""

from typing import Dict, List, Mapping, Sequence

from .config import Config
from .models import Category, Issue, Release
from .policies import categorize
from .template_utils import render_rollup_text


class NotesBuilder:
    """Render per-repository release notes from closed milestone issues."""

    def group(self, issues: Sequence[Issue]) -> Dict[Category, List[Issue]]:
        """
        Group categorized issues, dropping the ones without a category.

        Groups are ordered by category name, descending, and keep the input
        order of their issues.
        """
        grouped: Dict[Category, List[Issue]] = {}
        for issue in issues:
            category = categorize(issue.labels)
            if category == Category.NONE:
                continue
            grouped.setdefault(category, []).append(issue)

        return {
            category: grouped[category]
            for category in sorted(grouped, key=lambda c: c.value, reverse=True)
        }

    def build(self, issues: Sequence[Issue]) -> str:
        """Render the grouped issues as Markdown. Empty if no issue is categorized."""
        lines: List[str] = []
        for category, group in self.group(issues).items():
            lines.append(f"### {category.value}")
            lines.append("")
            for issue in group:
                lines.append(f"* {issue.title} ([#{issue.number}]({issue.url}))")
            lines.append("")

        if not lines:
            return ""
        return "\n".join(lines) + "\n"


class RollupNotesBuilder:
    """Render the umbrella notes linking every component release of a milestone."""

    def __init__(self, config: Config, owner: str = ""):
        self.config = config
        self.owner = owner

    def _render(self, template_str: str, milestone_label: str) -> str:
        return render_rollup_text(template_str, milestone_label, self.owner)

    def build(
        self,
        milestone_label: str,
        releases: Mapping[str, Release],
        known_issues: Sequence[Issue]
    ) -> str:
        """
        Render the rollup notes.

        Args:
            milestone_label: Milestone the rollup is released for
            releases: Component name to its release for this milestone
            known_issues: Open issues to list under "Known Issues"

        Returns:
            Markdown text
        """
        rollup = self.config.rollup
        lines: List[str] = [
            f"# {self._render(rollup.title_template, milestone_label)}",
            "",
            self._render(rollup.announcement_template, milestone_label),
            "",
            self._render(rollup.intro_template, milestone_label),
            "",
        ]

        # Components without notes have nothing to link to
        for name in sorted(releases):
            release = releases[name]
            if not (release.body or "").strip():
                continue
            lines.append(f"- [{name}]({release.url or ''})")
        lines.append("")

        announcements_url = self._render(rollup.announcements_url_template, milestone_label)
        lines.extend([
            "## Breaking Changes",
            "",
            f"- [Review the list of breaking changes for {milestone_label}]({announcements_url})",
            "",
            "## Known Issues",
            "",
        ])

        for issue in known_issues:
            lines.append(f"- **{issue.title}**")
            lines.append("")
            for body_line in (issue.body or "").splitlines():
                lines.append(f"  {body_line}")
            lines.append("")

        return "\n".join(lines) + "\n"
