# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""GitHub implementation of the release store."""

from typing import Any, Dict, List, Optional
from github import Auth, Github, GithubException
from requests.exceptions import RequestException
from rich.console import Console

from .config import Config
from .errors import StoreError
from .models import Issue, Label, Milestone, Release, ReleasePatch, ReleaseSpec

console = Console()

# PyGithub reports API errors as GithubException, transport errors come from requests
STORE_ERRORS = (GithubException, RequestException)


def _auth_from_config(config: Config) -> Optional[Auth.Auth]:
    """Token auth takes precedence over username and password."""
    if config.github.token:
        return Auth.Token(config.github.token)
    if config.github.user and config.github.password:
        return Auth.Login(config.github.user, config.github.password)
    return None


class GitHubReleaseStore:
    """Milestones, issues and releases backed by the GitHub API."""

    def __init__(self, config: Config):
        """Initialize GitHub client."""
        self.config = config
        auth = _auth_from_config(config)
        if auth is None:
            console.print(
                "[yellow]Warning: no GitHub credentials found, using anonymous access. "
                "Set GITHUB_TOKEN, or GITHUB_USER and GITHUB_PASSWORD.[/yellow]"
            )
        # Set per_page=100 (max) for efficient pagination across all API calls
        self.gh = Github(auth=auth, base_url=config.github.api_url, per_page=100)
        self._repos: Dict[str, Any] = {}

    def _get_repo(self, repo_full_name: str):
        if repo_full_name not in self._repos:
            try:
                self._repos[repo_full_name] = self.gh.get_repo(repo_full_name)
            except STORE_ERRORS as e:
                raise StoreError(f"Failed to fetch repository {repo_full_name}: {e}") from e
        return self._repos[repo_full_name]

    @staticmethod
    def _milestone_to_model(gh_milestone) -> Milestone:
        return Milestone(
            number=gh_milestone.number,
            title=gh_milestone.title,
            state=gh_milestone.state
        )

    def _issue_to_model(self, gh_issue) -> Issue:
        return Issue(
            number=gh_issue.number,
            title=gh_issue.title,
            body=gh_issue.body,
            url=gh_issue.html_url,
            labels=[
                Label(name=label.name, color=label.color, description=label.description)
                for label in gh_issue.labels
            ],
            milestone=self._milestone_to_model(gh_issue.milestone) if gh_issue.milestone else None
        )

    @staticmethod
    def _release_to_model(gh_release) -> Release:
        return Release(
            id=gh_release.id,
            name=gh_release.title or "",
            tag_name=gh_release.tag_name,
            body=gh_release.body,
            is_draft=gh_release.draft,
            is_prerelease=gh_release.prerelease,
            url=gh_release.html_url
        )

    def list_components(self, owner: str) -> List[str]:
        """List the repositories of an organization, in GitHub's listing order."""
        try:
            org = self.gh.get_organization(owner)
            return [repo.full_name for repo in org.get_repos()]
        except STORE_ERRORS as e:
            raise StoreError(f"Failed to list repositories of {owner}: {e}") from e

    def list_milestones(self, component: str) -> List[Milestone]:
        """List open milestones followed by closed ones."""
        repo = self._get_repo(component)
        try:
            milestones = list(repo.get_milestones(state='open'))
            milestones.extend(repo.get_milestones(state='closed'))
            return [self._milestone_to_model(m) for m in milestones]
        except STORE_ERRORS as e:
            raise StoreError(f"Failed to list milestones of {component}: {e}") from e

    def list_closed_issues(self, component: str, milestone_number: int) -> List[Issue]:
        repo = self._get_repo(component)
        try:
            gh_milestone = repo.get_milestone(milestone_number)
            return [
                self._issue_to_model(issue)
                for issue in repo.get_issues(state='closed', milestone=gh_milestone)
            ]
        except STORE_ERRORS as e:
            raise StoreError(
                f"Failed to list closed issues of {component} milestone {milestone_number}: {e}"
            ) from e

    def list_open_labeled_issues(self, repo: str, label: str) -> List[Issue]:
        gh_repo = self._get_repo(repo)
        try:
            return [
                self._issue_to_model(issue)
                for issue in gh_repo.get_issues(state='open', labels=[label])
            ]
        except STORE_ERRORS as e:
            raise StoreError(f"Failed to list open '{label}' issues of {repo}: {e}") from e

    def list_releases(self, component: str) -> List[Release]:
        repo = self._get_repo(component)
        try:
            return [self._release_to_model(r) for r in repo.get_releases()]
        except STORE_ERRORS as e:
            raise StoreError(f"Failed to list releases of {component}: {e}") from e

    def create_release(self, component: str, spec: ReleaseSpec) -> Release:
        repo = self._get_repo(component)
        try:
            gh_release = repo.create_git_release(
                tag=spec.tag_name,
                name=spec.name,
                message=spec.body,
                draft=not spec.publish,
                prerelease=spec.prerelease
            )
            return self._release_to_model(gh_release)
        except STORE_ERRORS as e:
            raise StoreError(f"Failed to create release {spec.name} in {component}: {e}") from e

    def update_release(self, component: str, release_id: int, patch: ReleasePatch) -> Release:
        """Update a release. GitHub requires every field, so unset ones keep their value."""
        repo = self._get_repo(component)
        try:
            gh_release = repo.get_release(release_id)
            updated = gh_release.update_release(
                name=gh_release.title,
                message=patch.body if patch.body is not None else (gh_release.body or ""),
                draft=patch.draft if patch.draft is not None else gh_release.draft,
                prerelease=patch.prerelease if patch.prerelease is not None else gh_release.prerelease,
                tag_name=patch.tag_name if patch.tag_name is not None else gh_release.tag_name
            )
            return self._release_to_model(updated)
        except STORE_ERRORS as e:
            raise StoreError(f"Failed to update release {release_id} in {component}: {e}") from e
