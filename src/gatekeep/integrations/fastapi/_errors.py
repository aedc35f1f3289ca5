"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from gatekeep.config._config import AuthzConfig, get_global_config
from gatekeep.exceptions import AuthorizationDenied, ContractViolation
from gatekeep.integrations._request import denial_body

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI, *, config: AuthzConfig | None = None) -> None:
    """Install exception handlers for gatekeep errors on a FastAPI app.

    Converts authorization exceptions into HTTP responses:

    - ``AuthorizationDenied`` -> ``denied_status_code`` (403 by default)
    - ``ContractViolation`` -> 500 Internal Server Error

    Args:
        app: The FastAPI application instance.
        config: Optional config. Defaults to the global config at
            request time.

    Example::

        from fastapi import FastAPI
        from gatekeep.integrations.fastapi import install_error_handlers

        app = FastAPI()
        install_error_handlers(app)
    """

    @app.exception_handler(AuthorizationDenied)
    async def authz_denied_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: AuthorizationDenied
    ) -> JSONResponse:
        cfg = config if config is not None else get_global_config()
        return JSONResponse(
            status_code=cfg.denied_status_code,
            content=denial_body(exc, cfg),
        )

    @app.exception_handler(ContractViolation)
    async def contract_violation_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: ContractViolation
    ) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc)},
        )
