# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

import sys
from typing import Optional, Tuple
import click
from rich.console import Console

from ..approval import ConsoleApprovalOracle, StaticApprovalOracle
from ..config import Config, load_config
from ..errors import ReleaseNotesError, UsageError
from ..github_utils import GitHubReleaseStore
from ..release_manager import ReleaseManager
from ..store import RunContext

console = Console()


def parse_repository(repository: str) -> Tuple[str, Optional[str]]:
    """
    Split ``owner/name`` or ``owner`` into its parts.

    Raises:
        UsageError: If the path has more than two segments or an empty one
    """
    segments = repository.split('/')
    if len(segments) > 2 or not all(segments):
        raise UsageError(f"Invalid repository '{repository}', expected OWNER/NAME or OWNER")
    owner = segments[0]
    name = segments[1] if len(segments) > 1 else None
    return owner, name


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('repository')
@click.argument('tag')
@click.argument('milestone', required=False)
@click.option('--publish', 'publish_release', is_flag=True, help='Make the release public (default: keep it a draft)')
@click.option('--config', '-c', 'config_path', type=click.Path(), help='Path to configuration file')
@click.option('-y', '--assume-yes', is_flag=True, help='Assume "yes" for all confirmation prompts')
@click.option('--dry-run', is_flag=True, help='Show the notes and planned changes without changing any release')
@click.option('--debug', is_flag=True, help='Show detailed debug information')
@click.pass_context
def publish(ctx, repository: str, tag: str, milestone: Optional[str], publish_release: bool,
            config_path: Optional[str], assume_yes: bool, dry_run: bool, debug: bool):
    """
    Build release notes from a milestone and sync the GitHub release.

    REPOSITORY is OWNER/NAME for a single repository, or OWNER to process
    every repository of an organization. MILESTONE defaults to TAG.

    Examples:

      release-notes-maker signalr/signalr 2.1.1

      release-notes-maker signalr/signalr 2.1.1 2.1.1-rc1 --publish

      release-notes-maker aspnet 1.0.0 --dry-run
    """
    try:
        owner, name = parse_repository(repository)
    except UsageError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("\nUsage: release-notes-maker [OPTIONS] REPOSITORY TAG [MILESTONE]")
        console.print("Sample:\n  release-notes-maker signalr/signalr 2.1.1")
        sys.exit(1)

    obj = ctx.obj or {}
    try:
        config: Config = obj.get('config') or load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    milestone = milestone or tag

    if debug:
        console.print("\n[bold cyan]Debug Mode: Configuration & Settings[/bold cyan]")
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print(f"[dim]Repository:[/dim] {repository}")
        console.print(f"[dim]Tag:[/dim] {tag}")
        console.print(f"[dim]Milestone:[/dim] {milestone}")
        console.print(f"[dim]Publish:[/dim] {publish_release}")
        console.print(f"[dim]Dry run:[/dim] {dry_run}")
        console.print(f"[dim]Excluded repositories:[/dim] {sorted(config.release.excluded_components)}")
        console.print("[dim]" + "=" * 60 + "[/dim]\n")

    if dry_run:
        console.print(f"[bold yellow]DRY RUN: Release {tag} for milestone {milestone}[/bold yellow]")

    oracle = StaticApprovalOracle(True) if assume_yes else ConsoleApprovalOracle()

    try:
        context = RunContext(
            config=config,
            store=GitHubReleaseStore(config),
            oracle=oracle,
            dry_run=dry_run,
            debug=debug
        )
        manager = ReleaseManager(context)
        if name is not None:
            manager.publish_component(repository, tag, milestone, publish_release)
        else:
            manager.publish_organization(owner, tag, milestone, publish_release)
    except ReleaseNotesError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if dry_run:
        console.print("[yellow]Dry run: no releases were changed[/yellow]")
