"""Errors raised by the provisioning steps.

Every error carries the stage it was raised in so the top level can report
where the run stopped.
"""

from __future__ import annotations

from typing import Optional

from .stage import Stage


class ProvisionError(Exception):
    """Base class for every fatal provisioning failure."""

    default_stage: Optional[Stage] = None

    def __init__(self, message: str, *, stage: Optional[Stage] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage

    def __str__(self) -> str:
        if self.stage is None:
            return self.message
        return f"[{self.stage.value}] {self.message}"


class PrivilegeError(ProvisionError):
    """Not running with root privileges."""

    default_stage = Stage.PREFLIGHT


class DependencyError(ProvisionError):
    """A required utility is missing and could not be installed."""

    default_stage = Stage.PREFLIGHT


class UnsupportedPlatformError(ProvisionError):
    """Host CPU architecture has no matching release artifact."""

    default_stage = Stage.ARCH_DETECT


class FetchError(ProvisionError):
    """A download failed or produced no file."""

    default_stage = Stage.FETCH


class ArtifactIntegrityError(ProvisionError):
    """The release archive does not contain the expected binary."""

    default_stage = Stage.INSTALL


class ConfigurationError(ProvisionError):
    """The rendered collector configuration is unusable."""

    default_stage = Stage.CONFIGURE


class ConfigValidationError(ProvisionError):
    """The collector rejected the rendered configuration."""

    default_stage = Stage.VALIDATE


class ActivationError(ProvisionError):
    """The service did not become active after start."""

    default_stage = Stage.ACTIVATE
