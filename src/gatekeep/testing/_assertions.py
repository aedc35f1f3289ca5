"""Assertion helpers for testing gatekeep policies."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gatekeep._types import ActionId
from gatekeep.policy._decision import Denied, Permitted
from gatekeep.policy._wrappers import decide_or_fail

__all__ = ["assert_denied", "assert_permitted"]

_ANY_REASON = object()


def assert_permitted(
    policy: Any,
    principal: Any,
    action_id: ActionId,
    params: Mapping[str, Any] | None = None,
) -> None:
    """Assert that *policy* permits *principal* to perform *action_id*.

    Example::

        assert_permitted(PostPolicy, make_admin(), "delete_post", {"post": post})
    """
    decision = decide_or_fail(policy, principal, action_id, params)
    if not isinstance(decision, Permitted):
        raise AssertionError(
            f"expected Permitted, got {decision!r} "
            f"(principal={principal!r}, action_id={action_id!r})"
        )


def assert_denied(
    policy: Any,
    principal: Any,
    action_id: ActionId,
    params: Mapping[str, Any] | None = None,
    *,
    reason: Any = _ANY_REASON,
) -> None:
    """Assert that *policy* denies the action, optionally with a given *reason*.

    Example::

        assert_denied(PostPolicy, make_user(id=2), "delete_post",
                      {"post": post}, reason="unauthorized")
    """
    decision = decide_or_fail(policy, principal, action_id, params)
    if not isinstance(decision, Denied):
        raise AssertionError(
            f"expected Denied, got {decision!r} "
            f"(principal={principal!r}, action_id={action_id!r})"
        )
    if reason is not _ANY_REASON and decision.reason != reason:
        raise AssertionError(f"expected denial reason {reason!r}, got {decision.reason!r}")
