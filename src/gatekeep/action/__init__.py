"""Composable action — accumulate, authorize, and run guarded work."""

from gatekeep.action._action import (
    Action,
    initialize,
    set_action_id,
    set_option,
    set_options,
    set_params,
    set_principal,
)
from gatekeep.action._run import authorize, authorize_async, run, run_async, run_or_raise

__all__ = [
    "Action",
    "authorize",
    "authorize_async",
    "initialize",
    "run",
    "run_async",
    "run_or_raise",
    "set_action_id",
    "set_option",
    "set_options",
    "set_params",
    "set_principal",
]
