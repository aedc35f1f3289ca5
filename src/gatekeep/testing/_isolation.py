"""Isolation utilities for global gatekeep state in tests."""

from __future__ import annotations

import contextlib
from collections.abc import Generator

from gatekeep.config._config import (
    AuthzConfig,
    _set_global_config,  # pyright: ignore[reportPrivateUsage]
    get_global_config,
)

__all__ = ["isolated_authz"]


@contextlib.contextmanager
def isolated_authz(*, config: AuthzConfig | None = None) -> Generator[AuthzConfig, None, None]:
    """Context manager that provides isolated global gatekeep config.

    Saves the current global config, installs *config* (or the defaults),
    yields it, and restores the original on exit, even if the body raises.

    Example::

        with isolated_authz(config=AuthzConfig(log_policy_decisions=True)) as cfg:
            ...  # global config is isolated here
        # Original config is restored
    """
    saved_config = get_global_config()
    effective = config if config is not None else AuthzConfig()
    try:
        _set_global_config(effective)
        yield effective
    finally:
        _set_global_config(saved_config)
