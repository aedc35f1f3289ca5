"""scope_query() — narrow SELECT statements to what a principal may see."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy import Select, false

from gatekeep.config._config import AuthzConfig, get_global_config
from gatekeep.exceptions import NoScopeError, ScopeContractError

__all__ = ["SCOPE_ATTRIBUTE", "ScopeFn", "scope_query"]

# Classmethod name looked up on mapped entities.
SCOPE_ATTRIBUTE = "authz_scope"

ScopeFn = Callable[[Select[Any], Any, Mapping[str, Any]], Select[Any]]


def _checked(result: object, source: str) -> Select[Any]:
    if not isinstance(result, Select):
        raise ScopeContractError(
            f"Scope {source} must return a sqlalchemy Select, got {type(result).__name__}"
        )
    return result


def scope_query(
    stmt: Select[Any],
    principal: Any,
    params: Mapping[str, Any] | None = None,
    *,
    scope: ScopeFn | None = None,
    config: AuthzConfig | None = None,
) -> Select[Any]:
    """Restrict a SQLAlchemy SELECT to rows visible to *principal*.

    With an explicit *scope*, that callable receives
    ``(stmt, principal, params)`` and returns the narrowed statement.
    Otherwise each entity in the statement is asked for its
    ``authz_scope`` classmethod with the same arguments.

    Entities without a scope are handled per ``on_missing_scope``:
    ``"deny"`` adds ``WHERE false``, ``"raise"`` raises ``NoScopeError``.

    Args:
        stmt: A SQLAlchemy 2.0 Select statement.
        principal: The acting entity.
        params: Contextual data forwarded to the scope.
        scope: Optional scope callable overriding the entity scopes.
        config: Optional config. Defaults to the global config.

    Returns:
        A new Select with the scopes applied.

    Raises:
        ScopeContractError: If a scope returns anything but a Select.
        NoScopeError: If an entity has no scope and
            ``on_missing_scope="raise"``.

    Example::

        class Post(Base):
            ...

            @classmethod
            def authz_scope(cls, stmt, principal, params):
                if principal.role == "admin":
                    return stmt
                return stmt.where(cls.owner_id == principal.id)

        stmt = scope_query(select(Post), current_user)
    """
    effective_params: Mapping[str, Any] = dict(params) if params is not None else {}

    if scope is not None:
        return _checked(scope(stmt, principal, effective_params), repr(scope))

    cfg = config if config is not None else get_global_config()

    desc_list: list[dict[str, Any]] = stmt.column_descriptions
    for desc in desc_list:
        entity: type | None = desc.get("entity")
        if entity is None:
            continue

        entity_scope = getattr(entity, SCOPE_ATTRIBUTE, None)
        if entity_scope is None:
            if cfg.on_missing_scope == "raise":
                raise NoScopeError(entity=entity.__name__)
            if cfg.log_policy_decisions:
                from gatekeep._audit import log_scope_fallback

                log_scope_fallback(entity=entity.__name__)
            stmt = stmt.where(false())
            continue

        stmt = _checked(
            entity_scope(stmt, principal, effective_params),
            f"{entity.__name__}.{SCOPE_ATTRIBUTE}",
        )

    return stmt
