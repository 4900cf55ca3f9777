# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Main CLI for the release notes maker."""

import sys
import logging
import click
from rich.console import Console

from .commands.publish import publish

console = Console()


class SuppressUserEndpoint403Filter(logging.Filter):
    """Drop PyGithub's "GET /user failed with 403" noise for tokens without user scope."""

    def filter(self, record):
        message = record.getMessage()
        return not ('403' in message and '/user' in message)


def main():
    for logger_name in ['github', 'github.Requester']:
        logging.getLogger(logger_name).addFilter(SuppressUserEndpoint403Filter())

    # Usage errors exit with 1, not click's default 2
    try:
        exit_code = publish.main(prog_name='release-notes-maker', obj={}, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        console.print("[red]Aborted![/red]")
        sys.exit(1)
    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
