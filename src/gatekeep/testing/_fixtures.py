"""Pytest fixtures for testing gatekeep policies."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from gatekeep.config._config import AuthzConfig
from gatekeep.testing._jobs import RecordingJob

__all__ = ["authz_config", "isolated_authz_state", "recording_job"]


@pytest.fixture()
def authz_config() -> AuthzConfig:
    """Provide a default ``AuthzConfig`` for testing.

    Example::

        def test_with_config(authz_config):
            assert authz_config.denied_status_code == 403
    """
    return AuthzConfig()


@pytest.fixture()
def recording_job() -> RecordingJob:
    """Provide a fresh :class:`RecordingJob` returning ``None``."""
    return RecordingJob()


@pytest.fixture()
def isolated_authz_state() -> Generator[AuthzConfig, None, None]:
    """Pytest fixture that isolates global gatekeep config for each test.

    Example::

        def test_logging(isolated_authz_state):
            configure(log_policy_decisions=True)  # undone after the test
    """
    from gatekeep.testing._isolation import isolated_authz

    with isolated_authz() as cfg:
        yield cfg
