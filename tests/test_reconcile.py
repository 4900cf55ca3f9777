# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Tests for the release reconciliation state machine."""

import pytest

from release_notes_maker.errors import StoreError
from release_notes_maker.models import Release, ReleaseSpec
from release_notes_maker.reconcile import ReleaseReconciler, content_patch, visibility_patch
from helpers.store_helpers import FakeReleaseStore, ScriptedApprovalOracle

COMPONENT = "acme/web"


@pytest.fixture
def store():
    return FakeReleaseStore()


def _spec(**overrides) -> ReleaseSpec:
    fields = {"tag_name": "v1.2.0", "name": "1.2.0", "body": "notes", "publish": True}
    fields.update(overrides)
    return ReleaseSpec(**fields)


class TestCreate:
    """Reconciling against an absent release."""

    def test_creates_public_release_when_publishing(self, store):
        reconciler = ReleaseReconciler(store, ScriptedApprovalOracle())

        release = reconciler.reconcile(COMPONENT, _spec(), None)

        assert len(store.mutating_calls) == 1
        assert store.mutating_calls[0][0] == 'create_release'
        assert release.is_draft is False
        assert release.is_prerelease is False
        assert release.tag_name == "v1.2.0"
        assert release.body == "notes"

    def test_creates_draft_without_publish(self, store):
        reconciler = ReleaseReconciler(store, ScriptedApprovalOracle())

        release = reconciler.reconcile(COMPONENT, _spec(publish=False), None)

        assert release.is_draft is True

    @pytest.mark.parametrize("tag,prerelease", [
        ("1.0.0-rc1", True),
        ("2.0.0", False),
        ("0.9.0", True),
    ])
    def test_prerelease_follows_tag(self, store, tag, prerelease):
        reconciler = ReleaseReconciler(store, ScriptedApprovalOracle())

        release = reconciler.reconcile(COMPONENT, _spec(tag_name=tag), None)

        assert release.is_prerelease is prerelease

    def test_second_run_makes_no_changes(self, store):
        """Reconciling again against the store's new state is a no-op."""
        reconciler = ReleaseReconciler(store, ScriptedApprovalOracle())
        desired = _spec(body="B")

        reconciler.reconcile(COMPONENT, desired, reconciler.find_release(COMPONENT, "1.2.0"))
        reconciler.reconcile(COMPONENT, desired, reconciler.find_release(COMPONENT, "1.2.0"))

        assert len(store.mutating_calls) == 1

    def test_second_draft_run_makes_no_changes(self, store):
        oracle = ScriptedApprovalOracle()
        reconciler = ReleaseReconciler(store, oracle)
        desired = _spec(tag_name="1.0.0-rc1", publish=False)

        reconciler.reconcile(COMPONENT, desired, reconciler.find_release(COMPONENT, "1.2.0"))
        reconciler.reconcile(COMPONENT, desired, reconciler.find_release(COMPONENT, "1.2.0"))

        assert len(store.mutating_calls) == 1
        assert oracle.prompts == []


class TestUpdate:
    """Reconciling against an existing release."""

    def test_up_to_date_release_is_left_alone(self, store):
        actual = store.add_release(COMPONENT, name="1.2.0", tag_name="v1.2.0", body="notes",
                                   is_draft=False, is_prerelease=False)

        result = ReleaseReconciler(store, ScriptedApprovalOracle()).reconcile(COMPONENT, _spec(), actual)

        assert store.mutating_calls == []
        assert result == actual

    def test_body_change_is_patched(self, store):
        actual = store.add_release(COMPONENT, name="1.2.0", tag_name="v1.2.0", body="old",
                                   is_draft=False, is_prerelease=False)

        result = ReleaseReconciler(store, ScriptedApprovalOracle()).reconcile(COMPONENT, _spec(), actual)

        assert len(store.mutating_calls) == 1
        patch = store.mutating_calls[0][3]
        assert patch.body == "notes"
        assert patch.draft is None
        assert result.body == "notes"

    def test_missing_body_counts_as_empty(self, store):
        actual = store.add_release(COMPONENT, name="1.2.0", tag_name="v1.2.0", body=None,
                                   is_draft=False, is_prerelease=False)

        ReleaseReconciler(store, ScriptedApprovalOracle()).reconcile(COMPONENT, _spec(body=""), actual)

        assert store.mutating_calls == []

    def test_promoting_rc_tag_updates_then_publishes(self, store):
        """Same release name, new final tag: retag, clear prerelease, publish."""
        actual = store.add_release(COMPONENT, name="1.2.0", tag_name="v1.2.0-rc1", body="notes",
                                   is_draft=True, is_prerelease=True)

        result = ReleaseReconciler(store, ScriptedApprovalOracle()).reconcile(COMPONENT, _spec(), actual)

        content, publish = store.mutating_calls
        assert content[3].tag_name == "v1.2.0"
        assert content[3].prerelease is False
        assert publish[3].draft is False
        assert result.tag_name == "v1.2.0"
        assert result.is_prerelease is False
        assert result.is_draft is False

    def test_publishes_draft_without_content_change(self, store):
        actual = store.add_release(COMPONENT, name="1.2.0", tag_name="v1.2.0", body="notes",
                                   is_draft=True, is_prerelease=False)

        result = ReleaseReconciler(store, ScriptedApprovalOracle()).reconcile(COMPONENT, _spec(), actual)

        assert len(store.mutating_calls) == 1
        assert store.mutating_calls[0][3].draft is False
        assert result.is_draft is False

    def test_draft_stays_draft_without_publish(self, store):
        actual = store.add_release(COMPONENT, name="1.2.0", tag_name="v1.2.0", body="notes",
                                   is_draft=True, is_prerelease=False)
        oracle = ScriptedApprovalOracle()

        ReleaseReconciler(store, oracle).reconcile(COMPONENT, _spec(publish=False), actual)

        assert store.mutating_calls == []
        assert oracle.prompts == []


class TestUnpublish:
    """Unpublishing needs approval."""

    def _public(self, store) -> Release:
        return store.add_release(COMPONENT, name="1.2.0", tag_name="v1.2.0", body="notes",
                                 is_draft=False, is_prerelease=False)

    def test_declined_leaves_release_public(self, store):
        actual = self._public(store)
        oracle = ScriptedApprovalOracle(False)

        result = ReleaseReconciler(store, oracle).reconcile(COMPONENT, _spec(publish=False), actual)

        assert len(oracle.prompts) == 1
        assert "Unpublish" in oracle.prompts[0]
        assert store.mutating_calls == []
        assert result.is_draft is False

    def test_approved_makes_release_draft(self, store):
        actual = self._public(store)

        result = ReleaseReconciler(store, ScriptedApprovalOracle(True)).reconcile(
            COMPONENT, _spec(publish=False), actual
        )

        assert len(store.mutating_calls) == 1
        assert store.mutating_calls[0][3].draft is True
        assert result.is_draft is True


class TestFailures:
    """Store failures propagate and nothing is rolled back."""

    def test_create_failure_propagates(self, store):
        store.failing_methods.add('create_release')

        with pytest.raises(StoreError):
            ReleaseReconciler(store, ScriptedApprovalOracle()).reconcile(COMPONENT, _spec(), None)

    def test_update_failure_stops_before_publish(self, store):
        actual = store.add_release(COMPONENT, name="1.2.0", tag_name="v1.2.0", body="old",
                                   is_draft=True, is_prerelease=False)
        store.failing_methods.add('update_release')

        with pytest.raises(StoreError):
            ReleaseReconciler(store, ScriptedApprovalOracle()).reconcile(COMPONENT, _spec(), actual)

        assert len(store.mutating_calls) == 1
        assert store.get_release(COMPONENT, "1.2.0").is_draft is True


def test_find_release_matches_name_not_tag(store):
    store.add_release(COMPONENT, name="1.1.0", tag_name="1.2.0", is_draft=False)
    wanted = store.add_release(COMPONENT, name="1.2.0", tag_name="1.2.0-rc1", is_draft=True)

    reconciler = ReleaseReconciler(store, ScriptedApprovalOracle())

    assert reconciler.find_release(COMPONENT, "1.2.0") == wanted
    assert reconciler.find_release(COMPONENT, "9.9.9") is None


def test_patches_are_pure():
    actual = Release(id=1, name="1.2.0", tag_name="v1.2.0", body="notes",
                     is_draft=True, is_prerelease=False)

    assert content_patch(_spec(), actual) is None
    assert visibility_patch(_spec(), actual).draft is False
    assert visibility_patch(_spec(publish=False), actual) is None
