# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Exceptions raised while building and publishing release notes."""


class ReleaseNotesError(Exception):
    """Base class for all release-notes-maker errors."""
    pass


class UsageError(ReleaseNotesError):
    """Malformed command line invocation."""
    pass


class MilestoneNotFoundError(ReleaseNotesError):
    """No milestone title matches the requested milestone for a component."""

    def __init__(self, component: str, milestone: str):
        self.component = component
        self.milestone = milestone
        super().__init__(
            f"No milestone matching '{milestone}' found in {component}"
        )


class StoreError(ReleaseNotesError):
    """Communication with the issue tracker or release registry failed."""
    pass
