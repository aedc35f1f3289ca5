"""The three decision wrappers: raw, raising and boolean.

Each wrapper calls the policy's ``decide`` exactly once and validates the
result with :func:`ensure_decision`. None of them re-implements matching.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any

from gatekeep._types import ActionId, DecideFn
from gatekeep.config._config import get_global_config
from gatekeep.exceptions import AuthorizationDenied, MissingPolicyError
from gatekeep.policy._decision import Decision, Denied, ensure_decision

__all__ = [
    "decide_or_bool",
    "decide_or_fail",
    "decide_or_fail_async",
    "decide_or_raise",
    "resolve_decide",
]


def resolve_decide(policy: Any) -> DecideFn:
    """Return the ``decide`` callable of *policy*.

    Accepts anything exposing a callable ``decide`` attribute (policy
    objects, classes with a ``decide`` staticmethod, modules) or a bare
    decision function.

    Raises:
        MissingPolicyError: If *policy* is ``None`` or not decide-shaped.
    """
    if policy is None:
        raise MissingPolicyError()
    decide = getattr(policy, "decide", None)
    if callable(decide):
        return decide
    if callable(policy):
        return policy
    raise MissingPolicyError(
        f"{policy!r} is not a policy: expected a decide() method or a callable"
    )


def _finish(
    policy: Any,
    principal: Any,
    action_id: ActionId,
    params: dict[str, Any],
    result: object,
) -> Decision:
    decision = ensure_decision(result, policy=policy)
    if get_global_config().log_policy_decisions:
        from gatekeep._audit import log_policy_decision

        log_policy_decision(
            policy=policy,
            principal=principal,
            action_id=action_id,
            params=params,
            decision=decision,
        )
    return decision


def decide_or_fail(
    policy: Any,
    principal: Any,
    action_id: ActionId,
    params: Mapping[str, Any] | None = None,
) -> Decision:
    """Run *policy* and return its decision unchanged.

    This is the primitive the other wrappers build on. A denial is a
    normal return value here, not an exception.

    Args:
        policy: A ``PolicyLike`` object or a bare decision function.
        principal: The acting entity (opaque to gatekeep).
        action_id: The attempted action (e.g., ``"delete_post"``).
        params: Contextual data for the decision. Defaults to ``{}``.

    Returns:
        ``Permitted()`` or ``Denied(reason)`` exactly as the policy returned it.

    Raises:
        InvalidDecisionError: If the policy returned anything else.
        MissingPolicyError: If *policy* is not decide-shaped.

    Example::

        decision = decide_or_fail(PostPolicy, user, "delete_post", {"post": post})
        if isinstance(decision, Denied):
            log.info("denied: %s", decision.reason)
    """
    decide = resolve_decide(policy)
    effective = dict(params) if params is not None else {}
    return _finish(policy, principal, action_id, effective, decide(principal, action_id, effective))


async def decide_or_fail_async(
    policy: Any,
    principal: Any,
    action_id: ActionId,
    params: Mapping[str, Any] | None = None,
) -> Decision:
    """Like :func:`decide_or_fail`, awaiting the result of an async ``decide``."""
    decide = resolve_decide(policy)
    effective = dict(params) if params is not None else {}
    result = decide(principal, action_id, effective)
    if inspect.isawaitable(result):
        result = await result
    return _finish(policy, principal, action_id, effective, result)


def decide_or_raise(
    policy: Any,
    principal: Any,
    action_id: ActionId,
    params: Mapping[str, Any] | None = None,
) -> None:
    """Assert that *policy* permits the action.

    Returns ``None`` on ``Permitted``.

    Raises:
        AuthorizationDenied: On ``Denied(reason)``; ``exc.reason`` is the
            policy's reason, unchanged.
        InvalidDecisionError: If the policy returned a non-decision.

    Example::

        decide_or_raise(PostPolicy, user, "delete_post", {"post": post})
    """
    decision = decide_or_fail(policy, principal, action_id, params)
    if isinstance(decision, Denied):
        raise AuthorizationDenied(decision.reason, principal=principal, action_id=action_id)


def decide_or_bool(
    policy: Any,
    principal: Any,
    action_id: ActionId,
    params: Mapping[str, Any] | None = None,
) -> bool:
    """Return ``True`` if *policy* permits the action, ``False`` otherwise.

    The denial reason is discarded. Contract violations still raise.

    Example::

        if decide_or_bool(PostPolicy, user, "edit_post", {"post": post}):
            show_edit_button()
    """
    return not isinstance(decide_or_fail(policy, principal, action_id, params), Denied)
