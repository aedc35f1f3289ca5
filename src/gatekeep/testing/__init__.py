"""gatekeep testing utilities — mock principals, assertions, and fixtures.

Provides test helpers for verifying policies and guarded actions:

- **MockPrincipal / factories**: Lightweight principals for tests.
- **Assertion helpers**: ``assert_permitted``, ``assert_denied``.
- **RecordingJob**: A job that counts and records its invocations.
- **Fixtures**: ``authz_config``, ``recording_job``, ``isolated_authz_state``.

Example::

    from gatekeep.testing import RecordingJob, assert_denied, make_user

    def test_strangers_cannot_delete(post):
        assert_denied(PostPolicy, make_user(id=2), "delete_post", {"post": post})
"""

from gatekeep.testing._actors import MockPrincipal, make_admin, make_anonymous, make_user
from gatekeep.testing._assertions import assert_denied, assert_permitted
from gatekeep.testing._fixtures import authz_config, isolated_authz_state, recording_job
from gatekeep.testing._isolation import isolated_authz
from gatekeep.testing._jobs import RecordingJob

__all__ = [
    "MockPrincipal",
    "RecordingJob",
    "assert_denied",
    "assert_permitted",
    "authz_config",
    "isolated_authz",
    "isolated_authz_state",
    "make_admin",
    "make_anonymous",
    "make_user",
    "recording_job",
]
