"""Decision values — the two possible outcomes of a policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeGuard

from gatekeep.exceptions import InvalidDecisionError

__all__ = [
    "PERMITTED",
    "Decision",
    "Denied",
    "Permitted",
    "ensure_decision",
    "is_decision",
]


@dataclass(frozen=True)
class Permitted:
    """The policy allows the action. Carries no payload.

    All instances compare equal; use the :data:`PERMITTED` constant.
    """

    def __repr__(self) -> str:
        return "Permitted()"


@dataclass(frozen=True, slots=True)
class Denied:
    """The policy refuses the action.

    Attributes:
        reason: Opaque application value explaining the denial. gatekeep
            never inspects or transforms it.

    Example::

        Denied("unauthorized")
        Denied({"code": "not_owner", "post_id": 7})
    """

    reason: Any


Decision = Permitted | Denied

PERMITTED = Permitted()


def is_decision(value: object) -> TypeGuard[Decision]:
    """Return ``True`` if *value* is a ``Permitted`` or ``Denied`` instance."""
    return isinstance(value, (Permitted, Denied))


def ensure_decision(value: object, *, policy: Any = None) -> Decision:
    """Return *value* unchanged if it is a well-formed decision.

    Nothing is coerced: ``True``, ``False``, ``None`` and the ``Permitted``
    / ``Denied`` classes themselves are all rejected.

    Args:
        value: Whatever the decision function returned.
        policy: The policy that produced *value* (for the error message).

    Raises:
        InvalidDecisionError: If *value* is not a decision.
    """
    if not is_decision(value):
        raise InvalidDecisionError(value, policy=policy)
    return value
