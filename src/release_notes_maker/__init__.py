# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Milestone based release notes and release state synchronization."""

__version__ = "0.1.0"
