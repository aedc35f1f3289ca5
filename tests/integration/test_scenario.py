"""End-to-end check of the admin / owner / unauthorized post scenario."""

from __future__ import annotations

import pytest

from gatekeep import (
    PERMITTED,
    AuthorizationDenied,
    Denied,
    decide_or_bool,
    decide_or_fail,
    decide_or_raise,
    initialize,
)
from tests._support import post_policy, post_rules

POLICIES = [pytest.param(post_policy, id="function"), pytest.param(post_rules, id="rule_set")]


@pytest.mark.parametrize("policy", POLICIES)
class TestPostScenario:
    def test_admin_may_delete_any_post(self, policy, admin, post) -> None:
        assert decide_or_fail(policy, admin, "delete_post", {"post": post}) == PERMITTED
        assert decide_or_bool(policy, admin, "delete_post", {"post": post}) is True

    def test_owner_may_delete_own_post(self, policy, owner, post) -> None:
        assert decide_or_fail(policy, owner, "delete_post", {"post": post}) == PERMITTED

    def test_stranger_is_denied(self, policy, stranger, post) -> None:
        assert decide_or_fail(policy, stranger, "delete_post", {"post": post}) == Denied(
            "unauthorized"
        )
        assert decide_or_bool(policy, stranger, "delete_post", {"post": post}) is False
        with pytest.raises(AuthorizationDenied) as exc_info:
            decide_or_raise(policy, stranger, "delete_post", {"post": post})
        assert exc_info.value.reason == "unauthorized"

    def test_owner_may_not_edit(self, policy, owner, post) -> None:
        assert decide_or_fail(policy, owner, "edit_post", {"post": post}) == Denied(
            "unauthorized"
        )

    def test_guarded_delete(self, policy, owner, stranger, post) -> None:
        deleted: list[int] = []

        def delete(action):
            deleted.append(action.params["post"].id)
            return "deleted"

        base = initialize(policy).set_params(post=post).set_action_id("delete_post")

        assert base.set_principal(stranger).run(delete) == Denied("unauthorized")
        assert deleted == []

        assert base.set_principal(owner).run(delete) == "deleted"
        assert deleted == [post.id]


class TestAsyncScenario:
    @pytest.mark.asyncio
    async def test_async_policy_and_job(self, owner, stranger, post) -> None:
        class AsyncPostPolicy:
            async def decide(self, principal, action_id, params):
                return decide_or_fail(post_policy, principal, action_id, params)

        async def delete(action):
            return f"deleted {action.params['post'].id}"

        base = initialize(AsyncPostPolicy()).set_params(post=post)
        assert await base.set_principal(owner).run_async(delete, "delete_post") == "deleted 10"
        assert await base.set_principal(stranger).run_async(delete, "delete_post") == Denied(
            "unauthorized"
        )
