"""Tests for action/_run.py — authorize()."""

from __future__ import annotations

import pytest

from gatekeep.action._action import Action, initialize
from gatekeep.action._run import authorize
from gatekeep.exceptions import InvalidDecisionError, MissingActionIdError, MissingPolicyError
from gatekeep.policy._decision import PERMITTED, Denied
from tests._support import post_policy


class _Recorder:
    def __init__(self, decision=PERMITTED):
        self.decision = decision
        self.calls: list[tuple] = []

    def decide(self, principal, action_id, params):
        self.calls.append((principal, action_id, dict(params)))
        return self.decision


class TestAuthorizeOutcome:
    def test_permitted_sets_state(self, owner, post):
        action = initialize(post_policy).set_principal(owner).set_params(post=post)
        result = authorize(action, "delete_post")
        assert result.authorized is True
        assert result.authorization_result == PERMITTED

    def test_denied_sets_state(self, stranger, post):
        action = initialize(post_policy).set_principal(stranger).set_params(post=post)
        result = action.authorize("delete_post")
        assert result.authorized is False
        assert result.authorization_result == Denied("unauthorized")

    def test_input_action_untouched(self, owner, post):
        action = initialize(post_policy).set_principal(owner).set_params(post=post)
        authorize(action, "delete_post")
        assert action.authorized is None
        assert action.authorization_result is None
        assert action.action_id is None


class TestResolution:
    def test_explicit_action_id_wins(self):
        policy = _Recorder()
        initialize(policy).set_action_id("read").authorize("delete")
        assert policy.calls[0][1] == "delete"

    def test_falls_back_to_field(self):
        policy = _Recorder()
        result = initialize(policy).set_action_id("read").authorize()
        assert policy.calls[0][1] == "read"
        assert result.action_id == "read"

    def test_resolved_action_id_recorded(self):
        result = initialize(_Recorder()).authorize("archive")
        assert result.action_id == "archive"

    def test_params_override_merged(self):
        policy = _Recorder()
        result = initialize(policy).set_params(a=1, b=1).authorize("x", {"b": 2, "c": 3})
        assert policy.calls[0][2] == {"a": 1, "b": 2, "c": 3}
        assert result.params == {"a": 1, "b": 2, "c": 3}

    def test_principal_forwarded(self):
        policy = _Recorder()
        initialize(policy).set_principal("alice").authorize("x")
        assert policy.calls[0][0] == "alice"


class TestReauthorization:
    def test_fresh_authorize_overwrites(self, owner, stranger, post):
        first = initialize(post_policy).set_principal(owner).set_params(post=post)
        first = first.authorize("delete_post")
        assert first.authorized is True

        second = first.set_principal(stranger).authorize("delete_post")
        assert second.authorized is False
        assert second.authorization_result == Denied("unauthorized")


class TestContractViolations:
    def test_missing_action_id(self):
        policy = _Recorder()
        with pytest.raises(MissingActionIdError):
            initialize(policy).set_principal("alice").set_params(a=1).authorize()
        assert policy.calls == []

    def test_missing_policy(self):
        with pytest.raises(MissingPolicyError):
            Action().authorize("read")

    def test_missing_policy_checked_before_action_id(self):
        with pytest.raises(MissingPolicyError):
            Action().authorize()

    def test_invalid_decision(self):
        with pytest.raises(InvalidDecisionError):
            initialize(_Recorder(decision=None)).authorize("read")
