"""Composable predicates for rule conditions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from gatekeep._types import ActionId, Params

__all__ = ["Predicate", "action_is", "always", "never", "predicate"]

PredicateFn = Callable[[Any, ActionId, Params], bool]


class Predicate:
    """A composable rule condition.

    Wraps a callable that takes ``(principal, action_id, params)`` and
    returns a ``bool``. Supports ``&`` (AND), ``|`` (OR), and ``~`` (NOT)
    composition. ``&`` and ``|`` short-circuit like ``and`` / ``or``.

    Example::

        is_admin = Predicate(lambda p, a, params: p.role == "admin")
        owns_post = Predicate(lambda p, a, params: params["post"].owner_id == p.id)

        rule = is_admin | (action_is("delete_post") & owns_post)
        rule(user, "delete_post", {"post": post})  # bool
    """

    def __init__(self, fn: PredicateFn, *, name: str = "") -> None:
        self._fn = fn
        self._name = name or getattr(fn, "__name__", "<anonymous>")

    def __call__(self, principal: Any, action_id: ActionId, params: Params) -> bool:
        return bool(self._fn(principal, action_id, params))

    def __and__(self, other: Predicate) -> Predicate:
        def _and(principal: Any, action_id: ActionId, params: Params) -> bool:
            return self(principal, action_id, params) and other(principal, action_id, params)

        return Predicate(_and, name=f"({self._name} & {other._name})")

    def __or__(self, other: Predicate) -> Predicate:
        def _or(principal: Any, action_id: ActionId, params: Params) -> bool:
            return self(principal, action_id, params) or other(principal, action_id, params)

        return Predicate(_or, name=f"({self._name} | {other._name})")

    def __invert__(self) -> Predicate:
        def _not(principal: Any, action_id: ActionId, params: Params) -> bool:
            return not self(principal, action_id, params)

        return Predicate(_not, name=f"~{self._name}")

    @property
    def name(self) -> str:
        """The human-readable name of this predicate."""
        return self._name

    def __repr__(self) -> str:
        return f"Predicate({self._name!r})"


def predicate(fn: PredicateFn) -> Predicate:
    """Decorator/factory that creates a Predicate from a callable.

    Example::

        @predicate
        def is_admin(principal, action_id, params) -> bool:
            return principal.role == "admin"

        # Or as a factory:
        is_owner = predicate(lambda p, a, params: params["post"].owner_id == p.id)
    """
    if isinstance(fn, Predicate):
        return fn
    return Predicate(fn, name=getattr(fn, "__name__", "<lambda>"))


def action_is(*action_ids: ActionId) -> Predicate:
    """Predicate matching any of *action_ids*.

    Example::

        action_is("update_post", "delete_post")
    """
    wanted = frozenset(action_ids)

    def _action_is(principal: Any, action_id: ActionId, params: Params) -> bool:
        return action_id in wanted

    return Predicate(_action_is, name=f"action_is{action_ids!r}")


# Built-in predicates


def _always(principal: Any, action_id: ActionId, params: Params) -> bool:
    return True


def _never(principal: Any, action_id: ActionId, params: Params) -> bool:
    return False


always: Predicate = Predicate(_always, name="always")
never: Predicate = Predicate(_never, name="never")
