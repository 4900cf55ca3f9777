# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Approval oracles."""

import click


class ConsoleApprovalOracle:
    """Ask the user on the console. Defaults to "no", also when input ends."""

    def confirm(self, prompt: str) -> bool:
        try:
            return click.confirm(prompt, default=False)
        except click.Abort:
            click.echo()
            return False


class StaticApprovalOracle:
    """Always give the same answer (``--assume-yes`` and non-interactive runs)."""

    def __init__(self, answer: bool):
        self.answer = answer

    def confirm(self, prompt: str) -> bool:
        return self.answer
