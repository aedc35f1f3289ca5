"""Audit logging for policy decisions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from gatekeep.policy._decision import Decision, Denied

__all__ = ["describe_policy", "log_policy_decision", "log_run_event", "log_scope_fallback"]

logger = logging.getLogger("gatekeep")


def describe_policy(policy: Any) -> str:
    """Return a short human-readable name for *policy* (used in logs)."""
    name = getattr(policy, "name", None)
    if isinstance(name, str) and name:
        return name
    name = getattr(policy, "__name__", None)
    if isinstance(name, str):
        return name
    return type(policy).__name__


def log_policy_decision(
    *,
    policy: Any,
    principal: Any,
    action_id: str,
    params: Mapping[str, Any],
    decision: Decision,
) -> None:
    """Log a policy decision.

    Logging levels:
    - INFO: Summary (policy, action, outcome)
    - DEBUG: Detailed (principal, params keys, denial reason)

    Example::

        log_policy_decision(
            policy=PostPolicy,
            principal=current_user,
            action_id="delete_post",
            params={"post": post},
            decision=Denied("unauthorized"),
        )
    """
    policy_name = describe_policy(policy)
    outcome = "denied" if isinstance(decision, Denied) else "permitted"

    logger.info("Policy decision: %s.%s -> %s", policy_name, action_id, outcome)

    if logger.isEnabledFor(logging.DEBUG):
        detail = f" reason={decision.reason!r}" if isinstance(decision, Denied) else ""
        logger.debug(
            "Decision detail for %s.%s: principal=%r params=%s%s",
            policy_name,
            action_id,
            principal,
            list(params),
            detail,
        )


def log_run_event(*, action_id: str | None, event: str) -> None:
    """Log a DEBUG event from ``run`` (skipped job, ignored overrides)."""
    logging.getLogger("gatekeep.run").debug("run %s: %s", action_id, event)


def log_scope_fallback(*, entity: str) -> None:
    """Log that ``scope_query`` applied deny-by-default for *entity*."""
    logger.warning("No authz scope for %s, deny-by-default applied", entity)
