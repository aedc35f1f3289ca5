"""gatekeep — plain-function authorization with composable guarded actions.

Policies are ordinary decision functions returning ``Permitted()`` or
``Denied(reason)``. An :class:`Action` accumulates the principal, params
and options, authorizes against a policy, and runs a job only when the
decision is a permit.

Example::

    from gatekeep import PERMITTED, Denied, initialize, policy

    @policy
    def post_policy(principal, action_id, params):
        if principal.role == "admin":
            return PERMITTED
        if action_id == "delete_post" and params["post"].owner_id == principal.id:
            return PERMITTED
        return Denied("unauthorized")

    result = (
        initialize(post_policy)
        .set_principal(current_user)
        .set_params(post=post)
        .run(lambda action: repo.delete(action.params["post"]), "delete_post")
    )
"""

from importlib.metadata import PackageNotFoundError, version

from gatekeep._types import PolicyLike
from gatekeep.action._action import (
    Action,
    initialize,
    set_action_id,
    set_option,
    set_options,
    set_params,
    set_principal,
)
from gatekeep.action._run import authorize, authorize_async, run, run_async, run_or_raise
from gatekeep.config._config import AuthzConfig, configure
from gatekeep.exceptions import (
    AuthorizationDenied,
    AuthzError,
    ContractViolation,
    InvalidDecisionError,
    MissingActionIdError,
    MissingPolicyError,
    NonExhaustivePolicyError,
    NoScopeError,
    ScopeContractError,
)
from gatekeep.policy._base import Policy
from gatekeep.policy._decision import PERMITTED, Decision, Denied, Permitted
from gatekeep.policy._decorator import policy
from gatekeep.policy._predicate import action_is, predicate
from gatekeep.policy._rules import RuleSet
from gatekeep.policy._wrappers import decide_or_bool, decide_or_fail, decide_or_raise
from gatekeep.scope._query import scope_query

try:
    __version__ = version("gatekeep")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "PERMITTED",
    "Action",
    "AuthorizationDenied",
    "AuthzConfig",
    "AuthzError",
    "ContractViolation",
    "Decision",
    "Denied",
    "InvalidDecisionError",
    "MissingActionIdError",
    "MissingPolicyError",
    "NoScopeError",
    "NonExhaustivePolicyError",
    "Permitted",
    "Policy",
    "PolicyLike",
    "RuleSet",
    "ScopeContractError",
    "action_is",
    "authorize",
    "authorize_async",
    "configure",
    "decide_or_bool",
    "decide_or_fail",
    "decide_or_raise",
    "initialize",
    "policy",
    "predicate",
    "run",
    "run_async",
    "run_or_raise",
    "scope_query",
    "set_action_id",
    "set_option",
    "set_options",
    "set_params",
    "set_principal",
]
