"""Import fixtures from gatekeep.testing for test discovery."""

from gatekeep.testing._fixtures import authz_config, isolated_authz_state, recording_job

__all__ = ["authz_config", "isolated_authz_state", "recording_job"]
