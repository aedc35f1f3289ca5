"""Configuration module for gatekeep."""

from __future__ import annotations

from gatekeep.config._config import AuthzConfig, configure, get_global_config

__all__ = ["AuthzConfig", "configure", "get_global_config"]
