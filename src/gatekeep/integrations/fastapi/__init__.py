"""FastAPI integration for gatekeep."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install gatekeep[fastapi]"
    ) from exc

from gatekeep.integrations.fastapi._dependencies import ActionDep, get_principal
from gatekeep.integrations.fastapi._errors import install_error_handlers

__all__ = ["ActionDep", "get_principal", "install_error_handlers"]
