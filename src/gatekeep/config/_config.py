"""Layered configuration for gatekeep."""

from __future__ import annotations

from dataclasses import dataclass, replace

from gatekeep._types import OnMissingScope

__all__ = [
    "AuthzConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]

_VALID_MISSING_SCOPE: set[str] = {"deny", "raise"}


@dataclass(frozen=True, slots=True)
class AuthzConfig:
    """Layered configuration with merge semantics (global -> call site).

    Attributes:
        log_policy_decisions: Log every decision on the ``gatekeep`` logger.
        on_missing_scope: Behavior of ``scope_query`` when an entity has
            no scope. ``"deny"`` appends WHERE FALSE, ``"raise"`` raises
            ``NoScopeError``.
        denied_status_code: HTTP status the framework integrations use
            for ``AuthorizationDenied``.
        expose_denial_reason: Whether the integrations include the
            denial reason in the error response body.

    Example::

        config = AuthzConfig(on_missing_scope="raise")
        merged = config.merge(denied_status_code=404)
    """

    log_policy_decisions: bool = False
    on_missing_scope: OnMissingScope = "deny"
    denied_status_code: int = 403
    expose_denial_reason: bool = True

    def __post_init__(self) -> None:
        if self.on_missing_scope not in _VALID_MISSING_SCOPE:
            raise ValueError(
                f"on_missing_scope must be one of {_VALID_MISSING_SCOPE!r}, "
                f"got {self.on_missing_scope!r}"
            )
        if not 400 <= self.denied_status_code <= 499:
            raise ValueError(
                f"denied_status_code must be a 4xx status, got {self.denied_status_code!r}"
            )

    def merge(
        self,
        *,
        log_policy_decisions: bool | None = None,
        on_missing_scope: OnMissingScope | None = None,
        denied_status_code: int | None = None,
        expose_denial_reason: bool | None = None,
    ) -> AuthzConfig:
        """Return a copy with every override that is not ``None`` applied.

        The copy is validated like a freshly constructed config, so an
        out-of-range override raises ``ValueError``.

        Example::

            app_cfg = AuthzConfig().merge(denied_status_code=404)
        """
        overrides = {
            "log_policy_decisions": log_policy_decisions,
            "on_missing_scope": on_missing_scope,
            "denied_status_code": denied_status_code,
            "expose_denial_reason": expose_denial_reason,
        }
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


# Process-wide defaults read by the wrappers, scope_query and the integrations.
_global_config = AuthzConfig()


def get_global_config() -> AuthzConfig:
    """Return the process-wide config."""
    return _global_config


def configure(
    *,
    log_policy_decisions: bool | None = None,
    on_missing_scope: OnMissingScope | None = None,
    denied_status_code: int | None = None,
    expose_denial_reason: bool | None = None,
) -> AuthzConfig:
    """Merge overrides into the process-wide config and return the result.

    Arguments left as ``None`` keep their current value.

    Example::

        configure(log_policy_decisions=True, denied_status_code=404)
    """
    _set_global_config(
        _global_config.merge(
            log_policy_decisions=log_policy_decisions,
            on_missing_scope=on_missing_scope,
            denied_status_code=denied_status_code,
            expose_denial_reason=expose_denial_reason,
        )
    )
    return _global_config


def _set_global_config(cfg: AuthzConfig) -> None:
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    _set_global_config(AuthzConfig())
