# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Shared pytest fixtures."""

import pytest

from release_notes_maker.config import Config
from release_notes_maker.models import Milestone
from release_notes_maker.store import RunContext
from helpers.store_helpers import FakeReleaseStore, ScriptedApprovalOracle, make_issue


@pytest.fixture(autouse=True)
def no_github_credentials(monkeypatch):
    """Keep the developer's credentials out of the tests."""
    for name in ("GITHUB_TOKEN", "GITHUB_USER", "GITHUB_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_config():
    """Create a test configuration."""
    return Config.from_dict({
        "github": {"token": "test_token"},
        "release": {"excluded_components": ["sandbox"]},
        "rollup": {
            "component": "meta",
            "notices_repo": "acme/notices",
        },
    })


@pytest.fixture
def fake_store():
    """
    Create a store with one repository, acme/web, and a 2.1.1 milestone
    holding a fixed bug and a shipped feature.
    """
    store = FakeReleaseStore()
    store.milestones["acme/web"] = [
        Milestone(number=3, title="2.1.0", state="closed"),
        Milestone(number=7, title="2.1.1", state="open"),
    ]
    store.closed_issues[("acme/web", 7)] = [
        make_issue(10, "Crash on startup", ["bug", "Done"]),
        make_issue(11, "Dark mode", ["feature-request", "Done"]),
        make_issue(12, "Refactor tests", ["Done"]),
    ]
    return store


@pytest.fixture
def oracle():
    """Oracle declining every confirmation."""
    return ScriptedApprovalOracle(False)


@pytest.fixture
def run_context(test_config, fake_store, oracle):
    """Create a run context wired to the fake store."""
    return RunContext(config=test_config, store=fake_store, oracle=oracle)
