"""RuleSet — an ordered, first-match-wins policy."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Union

from gatekeep._types import ActionId, Params
from gatekeep.exceptions import InvalidDecisionError, NonExhaustivePolicyError
from gatekeep.policy._base import Policy
from gatekeep.policy._decision import Decision, ensure_decision, is_decision
from gatekeep.policy._predicate import Predicate, always, predicate

__all__ = ["Rule", "RuleSet"]

Outcome = Union[Decision, Callable[[Any, ActionId, Params], Decision]]


def _check_outcome(then: object) -> None:
    if is_decision(then):
        return
    if isinstance(then, type) or not callable(then):
        raise InvalidDecisionError(then)


@dataclass(frozen=True, slots=True)
class Rule:
    """One ``(condition, outcome)`` pair of a :class:`RuleSet`.

    Attributes:
        when: Condition evaluated against ``(principal, action_id, params)``.
        then: A fixed decision, or a callable producing one.
    """

    when: Predicate
    then: Outcome

    def matches(self, principal: Any, action_id: ActionId, params: Params) -> bool:
        return self.when(principal, action_id, params)

    def outcome(self, principal: Any, action_id: ActionId, params: Params) -> object:
        if is_decision(self.then):
            return self.then
        return self.then(principal, action_id, params)


class RuleSet(Policy):
    """A policy made of ordered rules, evaluated top to bottom.

    The first rule whose condition holds decides. A rule set must be
    exhaustive: declare a final catch-all with :meth:`otherwise`. When no
    rule matches, ``decide`` raises :class:`NonExhaustivePolicyError`
    rather than assuming a denial.

    Example::

        posts = RuleSet("posts")

        @posts.rule(then=PERMITTED)
        def is_admin(principal, action_id, params):
            return principal.role == "admin"

        posts.add(action_is("delete_post") & owns_post, PERMITTED)
        posts.otherwise(Denied("unauthorized"))

        posts.decide_or_fail(user, "delete_post", {"post": post})
    """

    def __init__(self, name: str = "", *, rules: Iterable[Rule] = ()) -> None:
        self.name = name
        self._rules: list[Rule] = []
        self._catch_all: Rule | None = None
        for r in rules:
            self.add(r.when, r.then)

    @property
    def rules(self) -> tuple[Rule, ...]:
        """All rules in evaluation order, catch-all last."""
        if self._catch_all is None:
            return tuple(self._rules)
        return (*self._rules, self._catch_all)

    @property
    def is_exhaustive(self) -> bool:
        return self._catch_all is not None

    def add(self, when: Predicate | Callable[..., bool], then: Outcome) -> RuleSet:
        """Append a rule. Returns ``self`` for chaining.

        Raises:
            InvalidDecisionError: If *then* is neither a decision nor a callable.
            ValueError: If a catch-all was already declared.
        """
        if self._catch_all is not None:
            raise ValueError(f"{self!r} already has a catch-all; rules after it never run")
        _check_outcome(then)
        self._rules.append(Rule(when=predicate(when), then=then))
        return self

    def rule(self, then: Outcome) -> Callable[[Callable[..., bool]], Predicate]:
        """Decorator form of :meth:`add`; the decorated function is the condition."""

        def decorator(fn: Callable[..., bool]) -> Predicate:
            cond = predicate(fn)
            self.add(cond, then)
            return cond

        return decorator

    def otherwise(self, then: Outcome) -> RuleSet:
        """Declare the catch-all outcome, evaluated after every other rule."""
        if self._catch_all is not None:
            raise ValueError(f"{self!r} already has a catch-all")
        _check_outcome(then)
        self._catch_all = Rule(when=always, then=then)
        return self

    def decide(self, principal: Any, action_id: ActionId, params: Params) -> Decision:
        for r in self.rules:
            if r.matches(principal, action_id, params):
                return ensure_decision(r.outcome(principal, action_id, params), policy=self)
        raise NonExhaustivePolicyError(policy=self, action_id=action_id)
