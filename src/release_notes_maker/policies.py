# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Policies for issue categorization, milestone and known issue selection."""

from typing import Iterable, List, Optional, Sequence, Union

from .models import Category, Issue, Label, Milestone, is_prerelease_tag  # noqa: F401

# Label fragments, matched by substring containment
RESOLVED_MARKERS = ("Done", "closed-fixed")
BUG_MARKERS = ("bug",)
FEATURE_MARKERS = ("feature", "enhancement")


def _label_names(labels: Iterable[Union[Label, str]]) -> List[str]:
    return [label.name if isinstance(label, Label) else label for label in labels]


def _any_contains(names: Sequence[str], markers: Sequence[str]) -> bool:
    return any(marker in name for name in names for marker in markers)


def categorize(labels: Iterable[Union[Label, str]]) -> Category:
    """
    Map an issue's labels to a release note category.

    Only resolved issues (a label containing "Done" or "closed-fixed") are
    categorized. A bug label wins over feature and enhancement labels.

    Args:
        labels: Label objects or plain label names

    Returns:
        The matching Category, or Category.NONE if the issue is excluded
    """
    names = _label_names(labels)

    if not _any_contains(names, RESOLVED_MARKERS):
        return Category.NONE

    is_bug = _any_contains(names, BUG_MARKERS)
    is_feature = _any_contains(names, FEATURE_MARKERS)

    if is_bug:
        return Category.BUGS_FIXED
    if is_feature:
        return Category.FEATURES
    return Category.NONE


def _ends_with(title: str, suffix: str) -> bool:
    return title.lower().endswith(suffix.lower())


def select_milestone(milestones: Iterable[Milestone], token: str) -> Optional[Milestone]:
    """
    Return the first milestone whose title ends with ``token``.

    Comparison is case-insensitive. When several titles share the suffix the
    store's listing order decides.
    """
    for milestone in milestones:
        if _ends_with(milestone.title, token):
            return milestone
    return None


def select_known_issues(issues: Iterable[Issue], milestone_label: str) -> List[Issue]:
    """Keep the issues attached to a milestone whose title ends with ``milestone_label``."""
    return [
        issue for issue in issues
        if issue.milestone is not None and _ends_with(issue.milestone.title, milestone_label)
    ]
