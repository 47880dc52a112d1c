"""Exceptions raised by the deployment driver.

Every failure aborts the run; nothing here is retried.
"""

from __future__ import annotations


class DeployError(Exception):
    """Base class for deployment failures."""


class ConfigError(DeployError):
    """A required setting is missing or malformed."""


class MutableTagError(DeployError):
    """The requested image tag can be overwritten in the registry."""


class BuildError(DeployError):
    """The multi-architecture image build or push failed."""


class ReleaseNotDeclaredError(DeployError):
    """No release record exists yet."""


class MalformedReleaseError(DeployError):
    """The release record exists but does not parse."""


class SSHConnectionError(DeployError):
    """ssh could not connect or authenticate."""


class RemoteCommandError(DeployError):
    """A docker command on the remote host failed."""

    def __init__(self, step: str, returncode: int, output: str) -> None:
        self.step = step
        self.returncode = returncode
        self.output = output
        super().__init__(f"{step} failed with exit status {returncode}: {output.strip()}")


class ArchitectureMismatchError(RemoteCommandError):
    """The published image has no manifest for the host's CPU architecture."""


class VerificationError(DeployError):
    """The deployed service did not answer as expected."""
