"""Action — the composable authorization accumulator and its builders."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from gatekeep._types import ActionId, Job
from gatekeep.policy._decision import Decision

__all__ = [
    "Action",
    "initialize",
    "set_action_id",
    "set_option",
    "set_options",
    "set_params",
    "set_principal",
]


def _merge(
    base: Mapping[str, Any], partial: Mapping[str, Any] | None, extra: Mapping[str, Any]
) -> dict[str, Any]:
    merged = dict(base)
    if partial:
        merged.update(partial)
    merged.update(extra)
    return merged


@dataclass(frozen=True, slots=True)
class Action:
    """Accumulates everything needed to authorize and run a unit of work.

    Builders return a new ``Action`` and never touch the receiver, so an
    Action can be shared, stored on a request, and extended later.

    ``authorized`` and ``authorization_result`` start as ``None``
    (unknown). ``authorize`` sets them; later builder calls leave them
    alone, and only another ``authorize`` call overwrites them.

    Attributes:
        policy: The bound policy (``PolicyLike`` or decision function).
        principal: The acting entity, opaque to gatekeep.
        action_id: The attempted action, e.g. ``"delete_post"``.
        params: Contextual data passed to the policy.
        options: Open configuration mapping for builders and integrations.
        authorized: ``None`` until authorized, then ``True`` / ``False``.
        authorization_result: ``None`` until authorized, then the decision.

    Example::

        result = (
            initialize(PostPolicy)
            .set_principal(current_user)
            .set_params(post=post)
            .run(lambda action: delete(action.params["post"]), "delete_post")
        )
        if isinstance(result, Denied):
            return forbidden(result.reason)
    """

    policy: Any = None
    principal: Any = None
    action_id: ActionId | None = None
    params: Mapping[str, Any] = field(default_factory=dict)
    options: Mapping[str, Any] = field(default_factory=dict)
    authorized: bool | None = None
    authorization_result: Decision | None = None

    def __post_init__(self) -> None:
        # Each Action owns a read-only snapshot of its mappings.
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    # -- builders -----------------------------------------------------------

    def set_principal(self, principal: Any) -> Action:
        return replace(self, principal=principal)

    def set_params(self, partial: Mapping[str, Any] | None = None, /, **params: Any) -> Action:
        """Merge params into the existing ones. Later keys win."""
        return replace(self, params=_merge(self.params, partial, params))

    def set_option(self, key: str, value: Any) -> Action:
        return replace(self, options=_merge(self.options, None, {key: value}))

    def set_options(self, partial: Mapping[str, Any] | None = None, /, **options: Any) -> Action:
        """Merge several options at once. Later keys win."""
        return replace(self, options=_merge(self.options, partial, options))

    def set_action_id(self, action_id: ActionId) -> Action:
        return replace(self, action_id=action_id)

    # -- terminal operations --------------------------------------------------

    def authorize(
        self, action_id: ActionId | None = None, params: Mapping[str, Any] | None = None
    ) -> Action:
        from gatekeep.action._run import authorize

        return authorize(self, action_id, params)

    def run(
        self,
        job: Job,
        action_id: ActionId | None = None,
        params: Mapping[str, Any] | None = None,
        *,
        fallback: Job | None = None,
    ) -> Any:
        from gatekeep.action._run import run

        return run(self, job, action_id, params, fallback=fallback)

    def run_or_raise(
        self,
        job: Job,
        action_id: ActionId | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        from gatekeep.action._run import run_or_raise

        return run_or_raise(self, job, action_id, params)

    async def authorize_async(
        self, action_id: ActionId | None = None, params: Mapping[str, Any] | None = None
    ) -> Action:
        from gatekeep.action._run import authorize_async

        return await authorize_async(self, action_id, params)

    async def run_async(
        self,
        job: Job,
        action_id: ActionId | None = None,
        params: Mapping[str, Any] | None = None,
        *,
        fallback: Job | None = None,
    ) -> Any:
        from gatekeep.action._run import run_async

        return await run_async(self, job, action_id, params, fallback=fallback)


# ---------------------------------------------------------------------------
# Function forms of the builders
# ---------------------------------------------------------------------------


def initialize(policy: Any) -> Action:
    """Create an :class:`Action` bound to *policy*, every other field at its default.

    Example::

        action = initialize(PostPolicy).set_principal(user)
    """
    return Action(policy=policy)


def set_principal(action: Action, principal: Any) -> Action:
    return action.set_principal(principal)


def set_params(
    action: Action, partial: Mapping[str, Any] | None = None, /, **params: Any
) -> Action:
    return action.set_params(partial, **params)


def set_option(action: Action, key: str, value: Any) -> Action:
    return action.set_option(key, value)


def set_options(
    action: Action, partial: Mapping[str, Any] | None = None, /, **options: Any
) -> Action:
    return action.set_options(partial, **options)


def set_action_id(action: Action, action_id: ActionId) -> Action:
    return action.set_action_id(action_id)
