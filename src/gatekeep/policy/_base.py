"""Policy base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from gatekeep._types import ActionId, DecideFn, Params
from gatekeep.policy._decision import Decision
from gatekeep.policy._wrappers import decide_or_bool, decide_or_fail, decide_or_raise

__all__ = ["FunctionPolicy", "Policy"]


class Policy(ABC):
    """Base class for policies with one required method, ``decide``.

    Subclasses get ``decide_or_fail``, ``decide_or_raise`` and
    ``decide_or_bool`` derived from ``decide``. Inheriting is optional:
    the module-level wrappers accept any ``PolicyLike``.

    Example::

        class CommentPolicy(Policy):
            name = "comments"

            def decide(self, principal, action_id, params):
                if params["comment"].author_id == principal.id:
                    return PERMITTED
                return Denied("not_author")

        CommentPolicy().decide_or_raise(user, "edit_comment", {"comment": c})
    """

    name: str = ""

    @abstractmethod
    def decide(self, principal: Any, action_id: ActionId, params: Params) -> Decision:
        """Decide whether *principal* may perform *action_id*."""

    def decide_or_fail(
        self, principal: Any, action_id: ActionId, params: Mapping[str, Any] | None = None
    ) -> Decision:
        return decide_or_fail(self, principal, action_id, params)

    def decide_or_raise(
        self, principal: Any, action_id: ActionId, params: Mapping[str, Any] | None = None
    ) -> None:
        decide_or_raise(self, principal, action_id, params)

    def decide_or_bool(
        self, principal: Any, action_id: ActionId, params: Mapping[str, Any] | None = None
    ) -> bool:
        return decide_or_bool(self, principal, action_id, params)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name or type(self).__name__!r})"


class FunctionPolicy(Policy):
    """A policy backed by a single decision function.

    Attributes:
        fn: The decision function ``(principal, action_id, params) -> Decision``.
        name: The policy name (for debugging/logging).
        description: Human-readable description (from docstring).
    """

    def __init__(self, fn: DecideFn, *, name: str = "", description: str = "") -> None:
        self.fn = fn
        self.name = name or getattr(fn, "__name__", "<anonymous>")
        self.description = description

    def decide(self, principal: Any, action_id: ActionId, params: Params) -> Decision:
        return self.fn(principal, action_id, params)

    def __call__(self, principal: Any, action_id: ActionId, params: Params) -> Decision:
        return self.fn(principal, action_id, params)
