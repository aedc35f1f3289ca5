"""Shared protocols and type aliases for gatekeep."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Literal, Protocol, runtime_checkable

__all__ = [
    "ActionId",
    "DecideFn",
    "Job",
    "OnMissingScope",
    "Params",
    "PolicyLike",
]

# Valid values for AuthzConfig.on_missing_scope.
OnMissingScope = Literal["deny", "raise"]

# Symbolic identifier of an attempted action (e.g. ``"delete_post"``).
ActionId = str

# Contextual data handed to a policy alongside the principal.
Params = Mapping[str, Any]

# A bare decision function: ``(principal, action_id, params) -> Decision``.
DecideFn = Callable[[Any, ActionId, Params], Any]

# The unit of work guarded by an Action: ``job(action) -> R``.
Job = Callable[[Any], Any]


@runtime_checkable
class PolicyLike(Protocol):
    """Structural type for authorization policies.

    Any object with a ``decide`` method satisfies this protocol: a
    :class:`~gatekeep.policy.Policy` subclass, a plain class with a
    ``decide`` staticmethod, or a Python module defining a top-level
    ``decide`` function. No inheritance required.

    Example::

        class PostPolicy:
            @staticmethod
            def decide(principal, action_id, params):
                if principal.role == "admin":
                    return PERMITTED
                return Denied("unauthorized")

        assert isinstance(PostPolicy, PolicyLike)
    """

    def decide(self, principal: Any, action_id: ActionId, params: Params) -> Any: ...
