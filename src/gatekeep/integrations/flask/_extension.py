"""Flask extension for gatekeep authorization."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from flask import Flask, current_app, g, jsonify, request

from gatekeep._types import ActionId
from gatekeep.action._action import Action, initialize
from gatekeep.config._config import AuthzConfig, get_global_config
from gatekeep.exceptions import AuthorizationDenied, ContractViolation
from gatekeep.integrations._request import denial_body, request_params
from gatekeep.policy._decision import Denied

__all__ = ["AuthzExtension"]


def _effective_config() -> AuthzConfig:
    cfg: AuthzConfig | None = current_app.extensions["gatekeep"]["config"]
    return cfg if cfg is not None else get_global_config()


class AuthzExtension:
    """Flask extension that builds and authorizes request-scoped Actions.

    Registers error handlers for gatekeep exceptions and provides
    :meth:`action` / :meth:`authorize` helpers that pre-populate an
    :class:`Action` with the current principal and the route's
    ``view_args``.

    Pass the app later through ``init_app()`` when using an app factory.

    Args:
        app: Flask application to bind now. When omitted, call ``init_app()``
            later.
        principal_provider: A callable ``() -> principal`` called within
            request context.
        options: Options set on every Action built by the extension.
        config: Config for the error handlers. Falls back to the global config.

    Example::

        from flask import Flask
        from gatekeep.integrations.flask import AuthzExtension

        app = Flask(__name__)
        authz = AuthzExtension(app, principal_provider=lambda: get_current_user())

        @app.delete("/posts/<int:post_id>")
        def delete_post(post_id: int):
            action = authz.authorize(PostPolicy, "delete_post")
            return action.run(lambda a: repo.delete(a.params["post_id"]))
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        principal_provider: Callable[[], Any],
        options: Mapping[str, Any] | None = None,
        config: AuthzConfig | None = None,
    ) -> None:
        self._principal_provider = principal_provider
        self._options = dict(options or {})
        self._config = config

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Bind the extension to *app*.

        Stores configuration on ``app.extensions["gatekeep"]`` and
        registers error handlers for authorization exceptions.

        Example::

            authz = AuthzExtension(principal_provider=lambda: get_current_user())
            app = Flask(__name__)
            authz.init_app(app)
        """
        app.extensions["gatekeep"] = {
            "principal_provider": self._principal_provider,
            "options": self._options,
            "config": self._config,
        }

        @app.errorhandler(AuthorizationDenied)
        def handle_authz_denied(exc: AuthorizationDenied):  # pyright: ignore[reportUnusedFunction]
            cfg = _effective_config()
            return jsonify(denial_body(exc, cfg)), cfg.denied_status_code

        @app.errorhandler(ContractViolation)
        def handle_contract_violation(exc: ContractViolation):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 500

    def action(self, policy: Any) -> Action:
        """Build an unauthorized Action for the current request.

        Must be called within a Flask request context. The principal comes
        from ``principal_provider`` and the params from ``request.view_args``.
        """
        ext_state: dict[str, Any] = current_app.extensions["gatekeep"]

        provider: Callable[[], Any] = ext_state["principal_provider"]
        action = initialize(policy).set_principal(provider()).set_options(ext_state["options"])
        return action.set_params(request_params(action.options, request.view_args or {}))

    def authorize(self, policy: Any, action_id: ActionId, **params: Any) -> Action:
        """Authorize the current request and store the Action on ``g.authz_action``.

        Extra keyword arguments are merged over the request params.

        Raises:
            AuthorizationDenied: When the policy denies.

        Example::

            @app.get("/posts/<int:post_id>/edit")
            def edit_post(post_id: int):
                authz.authorize(PostPolicy, "edit_post", post=load_post(post_id))
                ...
        """
        action = self.action(policy).authorize(action_id, params)
        g.authz_action = action

        decision = action.authorization_result
        if isinstance(decision, Denied):
            raise AuthorizationDenied(
                decision.reason, principal=action.principal, action_id=action.action_id
            )
        return action
