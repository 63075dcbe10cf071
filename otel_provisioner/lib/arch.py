from __future__ import annotations

import logging
import platform
from typing import Optional

from ..errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)

# Release artifact tags published for otelcol-contrib on Linux.
_ARTIFACT_TAGS = {
    "amd64": "linux_amd64",
    "arm64": "linux_arm64",
}


def normalize_arch(machine: str) -> str:
    m = machine.lower()
    return {
        "x86_64": "amd64",
        "amd64": "amd64",
        "aarch64": "arm64",
        "arm64": "arm64",
    }.get(m, m)


def artifact_tag(machine: Optional[str] = None) -> str:
    """Map a CPU identifier (default: this host) to a release artifact tag."""

    machine = machine if machine is not None else platform.machine()
    tag = _ARTIFACT_TAGS.get(normalize_arch(machine))
    if tag is None:
        raise UnsupportedPlatformError(f"Unsupported architecture: {machine or 'unknown'}")
    return tag
