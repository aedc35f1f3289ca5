"""@policy decorator — turn a decision function into a Policy."""

from __future__ import annotations

from collections.abc import Callable
from typing import overload

from gatekeep._types import DecideFn
from gatekeep.policy._base import FunctionPolicy

__all__ = ["policy"]


@overload
def policy(fn: DecideFn, /) -> FunctionPolicy: ...


@overload
def policy(
    *, name: str | None = None, description: str | None = None
) -> Callable[[DecideFn], FunctionPolicy]: ...


def policy(
    fn: DecideFn | None = None,
    /,
    *,
    name: str | None = None,
    description: str | None = None,
) -> FunctionPolicy | Callable[[DecideFn], FunctionPolicy]:
    """Decorator that wraps a decision function into a :class:`FunctionPolicy`.

    The decorated function receives ``(principal, action_id, params)`` and
    must return ``Permitted()`` or ``Denied(reason)``. The returned policy
    is still callable with the same signature and additionally exposes the
    ``decide_or_fail`` / ``decide_or_raise`` / ``decide_or_bool`` wrappers.

    Can be used bare or with arguments.

    Args:
        fn: The decision function (when used bare).
        name: Policy name for logs. Defaults to the function name.
        description: Defaults to the function docstring.

    Example::

        @policy
        def post_policy(principal, action_id, params):
            \"\"\"Admins may do anything; owners may delete their posts.\"\"\"
            if principal.role == "admin":
                return PERMITTED
            if action_id == "delete_post" and params["post"].owner_id == principal.id:
                return PERMITTED
            return Denied("unauthorized")

        post_policy.decide_or_bool(user, "delete_post", {"post": post})
    """

    def decorator(func: DecideFn) -> FunctionPolicy:
        return FunctionPolicy(
            func,
            name=name or getattr(func, "__name__", ""),
            description=description if description is not None else (func.__doc__ or ""),
        )

    if fn is not None:
        return decorator(fn)
    return decorator
