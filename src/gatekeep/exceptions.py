"""Exception hierarchy for gatekeep."""

from __future__ import annotations

from typing import Any

__all__ = [
    "AuthorizationDenied",
    "AuthzError",
    "ContractViolation",
    "InvalidDecisionError",
    "MissingActionIdError",
    "MissingPolicyError",
    "NoScopeError",
    "NonExhaustivePolicyError",
    "ScopeContractError",
]


class AuthzError(Exception):
    """Base exception for all gatekeep errors."""


class AuthorizationDenied(AuthzError):  # noqa: N818
    """A policy denied the principal's action.

    Raised only where the caller opted into fail-fast handling:
    ``decide_or_raise``, ``run_or_raise`` and the framework integrations.
    Everywhere else a denial is returned as a ``Denied`` value.

    Attributes:
        reason: The reason carried by the ``Denied`` decision, unchanged.
        principal: The principal that was denied.
        action_id: The action that was attempted.

    Example::

        try:
            decide_or_raise(PostPolicy, user, "delete_post", {"post": post})
        except AuthorizationDenied as exc:
            print(exc.reason)  # e.g. "unauthorized"
    """

    def __init__(
        self,
        reason: Any,
        *,
        principal: Any = None,
        action_id: str | None = None,
        message: str | None = None,
    ) -> None:
        self.reason = reason
        self.principal = principal
        self.action_id = action_id
        if message is None:
            message = f"Principal {principal!r} is not authorized to {action_id}: {reason!r}"
        super().__init__(message)


class ContractViolation(AuthzError):  # noqa: N818
    """A caller or policy broke the authorization contract.

    These are programming errors, never business outcomes. They are
    always raised and never turned into a permit or a deny.
    """


class InvalidDecisionError(ContractViolation):
    """A policy returned something other than ``Permitted`` or ``Denied``.

    Attributes:
        value: The offending return value.
        policy: The policy that produced it, if known.
    """

    def __init__(self, value: Any, *, policy: Any = None) -> None:
        self.value = value
        self.policy = policy
        where = f" from policy {policy!r}" if policy is not None else ""
        super().__init__(
            f"Expected Permitted or Denied(reason){where}, got {value!r}"
        )


class NonExhaustivePolicyError(ContractViolation):
    """No rule of a rule set matched and no catch-all was declared.

    Attributes:
        policy: The rule set that ran out of rules.
        action_id: The action being decided.
    """

    def __init__(self, *, policy: Any, action_id: Any) -> None:
        self.policy = policy
        self.action_id = action_id
        super().__init__(
            f"No rule in {policy!r} matched action {action_id!r}; "
            f"declare a catch-all with otherwise()"
        )


class MissingActionIdError(ContractViolation):
    """``authorize``/``run`` could not resolve an action identifier."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "No action_id set on the Action and none passed to authorize()/run()"
        )


class MissingPolicyError(ContractViolation):
    """``authorize``/``run`` was called on an Action with no bound policy."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Action has no policy bound; use initialize(policy)")


class ScopeContractError(ContractViolation):
    """A scope returned something other than a SQLAlchemy ``Select``."""


class NoScopeError(AuthzError):
    """No scope available for an entity in the statement.

    Raised when configured with ``on_missing_scope="raise"`` instead of
    the default deny-by-default (WHERE FALSE) behavior.

    Attributes:
        entity: Name of the entity with no scope.
    """

    def __init__(self, *, entity: str) -> None:
        self.entity = entity
        super().__init__(f"No authz scope defined for {entity}")
