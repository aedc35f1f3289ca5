"""Helpers shared by the framework integrations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from gatekeep.config._config import AuthzConfig
from gatekeep.exceptions import AuthorizationDenied

__all__ = ["PARAMS_KEY_OPTION", "denial_body", "request_params"]

# Action option naming the params key request data is nested under.
PARAMS_KEY_OPTION = "params_key"


def request_params(options: Mapping[str, Any], data: Mapping[str, Any]) -> dict[str, Any]:
    """Shape request *data* into params according to the Action *options*.

    Example::

        request_params({}, {"post_id": "7"})                    # {"post_id": "7"}
        request_params({"params_key": "path"}, {"post_id": "7"})  # {"path": {"post_id": "7"}}
    """
    key = options.get(PARAMS_KEY_OPTION)
    if key:
        return {key: dict(data)}
    return dict(data)


def denial_body(exc: AuthorizationDenied, config: AuthzConfig) -> dict[str, Any]:
    body: dict[str, Any] = {"detail": "Forbidden"}
    if config.expose_denial_reason:
        body["reason"] = str(exc.reason)
    return body
