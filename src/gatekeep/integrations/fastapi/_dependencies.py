"""FastAPI dependencies for gatekeep authorization."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from fastapi import Depends, Request

from gatekeep._types import ActionId
from gatekeep.action._action import Action, initialize
from gatekeep.exceptions import AuthorizationDenied
from gatekeep.integrations._request import request_params
from gatekeep.policy._decision import Denied

__all__ = ["ActionDep", "get_principal"]

_VALID_SOURCES: set[str] = {"path", "query"}


# ---------------------------------------------------------------------------
# Sentinel dependency for DI-based configuration
# ---------------------------------------------------------------------------


def get_principal(request: Request) -> Any:
    """Sentinel dependency — override via ``app.dependency_overrides[get_principal]``.

    Raises ``NotImplementedError`` if not overridden, ensuring users
    configure their principal provider before using ``ActionDep``.

    Example::

        from gatekeep.integrations.fastapi import get_principal

        app.dependency_overrides[get_principal] = my_get_current_user
    """
    raise NotImplementedError(
        "Override get_principal via app.dependency_overrides[get_principal]. "
        "See gatekeep docs for configuration guide."
    )


# ---------------------------------------------------------------------------
# Dependency builder
# ---------------------------------------------------------------------------


def _collect(request: Request, sources: tuple[str, ...]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for source in sources:
        if source == "path":
            data.update(request.path_params)
        elif source == "query":
            data.update(request.query_params)
    return data


def _make_dependency(
    policy: Any,
    action_id: ActionId,
    *,
    sources: tuple[str, ...],
    options: Mapping[str, Any],
    raise_on_denied: bool,
) -> Callable[..., Any]:
    """Build the async dependency function for a given policy/action."""

    async def _resolve(request: Request, principal: Any = Depends(get_principal)) -> Action:
        action = initialize(policy).set_principal(principal).set_options(options)
        action = action.set_params(request_params(action.options, _collect(request, sources)))
        action = await action.authorize_async(action_id)
        request.state.authz_action = action

        decision = action.authorization_result
        if raise_on_denied and isinstance(decision, Denied):
            raise AuthorizationDenied(
                decision.reason, principal=principal, action_id=action.action_id
            )
        return action

    return _resolve


def ActionDep(
    policy: Any,
    action_id: ActionId,
    *,
    params_from: Iterable[str] = ("path",),
    options: Mapping[str, Any] | None = None,
    raise_on_denied: bool = True,
) -> Any:
    """FastAPI dependency that authorizes the request as an :class:`Action`.

    Builds an Action bound to *policy* with the principal from
    :func:`get_principal`, the request data named by *params_from* as
    params, and *options*; authorizes it for *action_id* and stores it on
    ``request.state.authz_action``.

    On ``Denied`` raises :class:`AuthorizationDenied` (mapped to a 4xx by
    :func:`install_error_handlers`), unless ``raise_on_denied=False``, in
    which case the denied Action is returned for the route to handle.

    Args:
        policy: The policy to authorize against.
        action_id: The action identifier.
        params_from: Request data merged into params: ``"path"`` and/or
            ``"query"``.
        options: Options set on the Action. ``"params_key"`` nests request
            data under that key.
        raise_on_denied: Raise on denial instead of returning the Action.

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        @app.delete("/posts/{post_id}")
        async def delete_post(
            action: Action = ActionDep(PostPolicy, "delete_post"),
        ) -> dict:
            return action.run(lambda a: repo.delete(a.params["post_id"]))
    """
    sources = tuple(params_from)
    unknown = set(sources) - _VALID_SOURCES
    if unknown:
        raise ValueError(
            f"params_from entries must be in {_VALID_SOURCES!r}, got {sorted(unknown)!r}"
        )
    dep_fn = _make_dependency(
        policy,
        action_id,
        sources=sources,
        options=dict(options or {}),
        raise_on_denied=raise_on_denied,
    )
    return Depends(dep_fn)
