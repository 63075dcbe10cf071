from __future__ import annotations

import logging
import shutil
from typing import Optional, Sequence

from ..errors import DependencyError
from .command import run_cmd

logger = logging.getLogger(__name__)

# Checked in order; the first one present on PATH is used.
PACKAGE_MANAGERS = ("dnf", "yum", "apt-get")


def detect_package_manager() -> Optional[str]:
    for pm in PACKAGE_MANAGERS:
        if shutil.which(pm):
            return pm
    return None


def install_packages(packages: Sequence[str], *, package_manager: Optional[str] = None) -> None:
    if not packages:
        return
    pm = package_manager or detect_package_manager()
    if pm is None:
        raise DependencyError(
            f"No supported package manager found ({', '.join(PACKAGE_MANAGERS)}) "
            f"to install: {', '.join(packages)}"
        )
    run_cmd([pm, "install", "-y", *packages])


def ensure_tools(tools: Sequence[str]) -> list[str]:
    """Install any missing tool via the host package manager.

    Returns the tools that had to be installed.
    """

    missing = [t for t in tools if shutil.which(t) is None]
    if not missing:
        return []

    logger.info("Installing missing tools: %s", ", ".join(missing))
    install_packages(missing)

    still_missing = [t for t in missing if shutil.which(t) is None]
    if still_missing:
        raise DependencyError(f"Tools still missing after install: {', '.join(still_missing)}")
    return missing
