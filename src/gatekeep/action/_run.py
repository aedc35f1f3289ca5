"""Terminal operations — authorize an Action and run its guarded job."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from gatekeep._types import ActionId, Job
from gatekeep.action._action import Action
from gatekeep.config._config import get_global_config
from gatekeep.exceptions import AuthorizationDenied, MissingActionIdError, MissingPolicyError
from gatekeep.policy._decision import Decision, Denied, Permitted, ensure_decision
from gatekeep.policy._wrappers import decide_or_fail, decide_or_fail_async

__all__ = ["authorize", "authorize_async", "run", "run_async", "run_or_raise"]


def _resolve(
    action: Action, action_id: ActionId | None, params: Mapping[str, Any] | None
) -> Action:
    """Fold the overrides into *action* and validate it can be authorized."""
    if action.policy is None:
        raise MissingPolicyError()
    effective_id = action_id if action_id is not None else action.action_id
    if effective_id is None:
        raise MissingActionIdError()
    if params:
        return replace(action, action_id=effective_id, params={**action.params, **params})
    return replace(action, action_id=effective_id)


def _record(action: Action, decision: Decision) -> Action:
    return replace(
        action,
        authorized=isinstance(decision, Permitted),
        authorization_result=decision,
    )


def _log_run(action: Action, event: str) -> None:
    if get_global_config().log_policy_decisions:
        from gatekeep._audit import log_run_event

        log_run_event(action_id=action.action_id, event=event)


def _settled(
    action: Action, action_id: ActionId | None, params: Mapping[str, Any] | None
) -> Action:
    """Validate an already-authorized Action; overrides are not applied."""
    ensure_decision(action.authorization_result, policy=action.policy)
    if action_id is not None or params:
        _log_run(action, "already authorized, ignoring action_id/params overrides")
    return action


def authorize(
    action: Action,
    action_id: ActionId | None = None,
    params: Mapping[str, Any] | None = None,
) -> Action:
    """Run the bound policy against the accumulated state.

    An explicit *action_id* wins over ``action.action_id``; *params* are
    merged over ``action.params``. The returned Action records the
    resolved action id, the merged params and the decision. A denial is
    recorded, not raised.

    Args:
        action: The Action to authorize.
        action_id: Optional override for the action identifier.
        params: Optional params merged over the existing ones.

    Returns:
        A new Action with ``authorized`` and ``authorization_result`` set.

    Raises:
        MissingPolicyError: If no policy is bound.
        MissingActionIdError: If no action id is set or passed.
        InvalidDecisionError: If the policy returned a non-decision.

    Example::

        action = authorize(initialize(PostPolicy).set_principal(user), "delete_post")
        if action.authorized:
            ...
    """
    resolved = _resolve(action, action_id, params)
    decision = decide_or_fail(
        resolved.policy, resolved.principal, resolved.action_id, resolved.params
    )
    return _record(resolved, decision)


async def authorize_async(
    action: Action,
    action_id: ActionId | None = None,
    params: Mapping[str, Any] | None = None,
) -> Action:
    """Like :func:`authorize`, awaiting a policy whose ``decide`` is async."""
    resolved = _resolve(action, action_id, params)
    decision = await decide_or_fail_async(
        resolved.policy, resolved.principal, resolved.action_id, resolved.params
    )
    return _record(resolved, decision)


def run(
    action: Action,
    job: Job,
    action_id: ActionId | None = None,
    params: Mapping[str, Any] | None = None,
    *,
    fallback: Job | None = None,
) -> Any:
    """Authorize if needed, then run *job* only when permitted.

    If ``action.authorized`` is ``None`` the Action is authorized first with
    the given overrides. An Action that was already authorized is never
    re-authorized; its recorded decision is used and overrides are ignored.

    On ``Permitted``, ``job(final_action)`` is called exactly once and its
    result returned unchanged. On ``Denied`` the job is not called and the
    ``Denied`` value is returned, or ``fallback(final_action)`` when a
    fallback is given. Exceptions raised by the job propagate unchanged.

    Example::

        result = run(
            initialize(PostPolicy).set_principal(user).set_params(post=post),
            lambda action: repo.delete(action.params["post"]),
            "delete_post",
        )
    """
    if action.authorized is None:
        final = authorize(action, action_id, params)
    else:
        final = _settled(action, action_id, params)

    decision = final.authorization_result
    if isinstance(decision, Denied):
        _log_run(final, "denied, job skipped")
        if fallback is not None:
            return fallback(final)
        return decision
    return job(final)


def run_or_raise(
    action: Action,
    job: Job,
    action_id: ActionId | None = None,
    params: Mapping[str, Any] | None = None,
) -> Any:
    """Like :func:`run`, raising instead of returning a denial.

    Raises:
        AuthorizationDenied: When the decision is ``Denied(reason)``.
    """
    if action.authorized is None:
        final = authorize(action, action_id, params)
    else:
        final = _settled(action, action_id, params)

    decision = final.authorization_result
    if isinstance(decision, Denied):
        _log_run(final, "denied, raising")
        raise AuthorizationDenied(
            decision.reason, principal=final.principal, action_id=final.action_id
        )
    return job(final)


async def _resolve_awaitable(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def run_async(
    action: Action,
    job: Job,
    action_id: ActionId | None = None,
    params: Mapping[str, Any] | None = None,
    *,
    fallback: Job | None = None,
) -> Any:
    """Async form of :func:`run`.

    The decision, the job result and the fallback result are awaited when
    they are awaitable. Authorization always finishes before the job starts.
    """
    if action.authorized is None:
        final = await authorize_async(action, action_id, params)
    else:
        final = _settled(action, action_id, params)

    decision = final.authorization_result
    if isinstance(decision, Denied):
        _log_run(final, "denied, job skipped")
        if fallback is not None:
            return await _resolve_awaitable(fallback(final))
        return decision
    return await _resolve_awaitable(job(final))
