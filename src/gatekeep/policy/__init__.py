"""Decision protocol — decision values, policies, wrappers and rule sets."""

from gatekeep.policy._base import FunctionPolicy, Policy
from gatekeep.policy._decision import (
    PERMITTED,
    Decision,
    Denied,
    Permitted,
    ensure_decision,
    is_decision,
)
from gatekeep.policy._decorator import policy
from gatekeep.policy._predicate import Predicate, action_is, always, never, predicate
from gatekeep.policy._rules import Rule, RuleSet
from gatekeep.policy._wrappers import (
    decide_or_bool,
    decide_or_fail,
    decide_or_fail_async,
    decide_or_raise,
    resolve_decide,
)

__all__ = [
    "PERMITTED",
    "Decision",
    "Denied",
    "FunctionPolicy",
    "Permitted",
    "Policy",
    "Predicate",
    "Rule",
    "RuleSet",
    "action_is",
    "always",
    "decide_or_bool",
    "decide_or_fail",
    "decide_or_fail_async",
    "decide_or_raise",
    "ensure_decision",
    "is_decision",
    "never",
    "policy",
    "predicate",
    "resolve_decide",
]
