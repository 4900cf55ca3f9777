# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Configuration management for the release notes maker."""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Set
from pydantic import BaseModel, Field
import tomli


DEFAULT_CONFIG_PATHS = [
    "release_notes_maker.toml",
    ".release_notes_maker.toml",
    "config/release_notes_maker.toml",
]


class GitHubConfig(BaseModel):
    """GitHub configuration."""
    token: Optional[str] = Field(
        default=None,
        description="GitHub API token (can also use GITHUB_TOKEN env var)"
    )
    user: Optional[str] = Field(
        default=None,
        description="GitHub username, used with password when no token is set (GITHUB_USER env var)"
    )
    password: Optional[str] = Field(
        default=None,
        description="GitHub password (GITHUB_PASSWORD env var)"
    )
    api_url: str = Field(
        default="https://api.github.com",
        description="GitHub API URL"
    )


class ReleaseConfig(BaseModel):
    """Per-component release configuration."""
    excluded_components: Set[str] = Field(
        default_factory=set,
        description="Repository names skipped in an organization-wide run"
    )


class RollupConfig(BaseModel):
    """Rollup (umbrella) release configuration."""
    component: Optional[str] = Field(
        default=None,
        description="Repository name holding the rollup release. It is processed after every other component."
    )
    notices_repo: Optional[str] = Field(
        default=None,
        description="Repository (owner/name) holding release notices, the source of known issues"
    )
    known_issue_label: str = Field(
        default="release-note",
        description="Label marking an open notice issue as a known issue"
    )
    title_template: str = Field(
        default="{{ milestone }} Release Notes",
        description="Jinja2 template for the rollup title. Variables: {{ milestone }}, {{ owner }}"
    )
    announcement_template: str = Field(
        default="We are pleased to announce the release of {{ milestone }}!",
        description="Jinja2 template for the announcement paragraph"
    )
    intro_template: str = Field(
        default="You can find details on the new features and bug fixes in the following repositories:",
        description="Jinja2 template introducing the component list"
    )
    announcements_url_template: str = Field(
        default="https://github.com/{{ owner }}/Announcements/issues?q=is%3Aissue+milestone%3A{{ milestone | urlencode }}",
        description="Jinja2 template for the breaking changes announcements query"
    )


class Config(BaseModel):
    """Main configuration model."""
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
    rollup: RollupConfig = Field(default_factory=RollupConfig)

    @classmethod
    def from_file(cls, config_path: str) -> "Config":
        """Load configuration from a TOML file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, 'rb') as f:
            data = tomli.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Load configuration from dictionary, filling credentials from the environment."""
        if 'github' not in data:
            data['github'] = {}
        github = data['github']
        if not github.get('token'):
            github['token'] = os.getenv('GITHUB_TOKEN')
        if not github.get('user'):
            github['user'] = os.getenv('GITHUB_USER')
        if not github.get('password'):
            github['password'] = os.getenv('GITHUB_PASSWORD')

        return cls(**data)


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (optional, will search default locations if not provided)

    Returns:
        Config object
    """
    if config_path:
        return Config.from_file(config_path)

    for default_path in DEFAULT_CONFIG_PATHS:
        if Path(default_path).exists():
            return Config.from_file(default_path)

    return Config.from_dict({})
