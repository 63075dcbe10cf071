from __future__ import annotations

from enum import Enum


class Stage(str, Enum):
    """Provisioning states, in execution order. ABORTED is terminal."""

    PREFLIGHT = "preflight"
    ARCH_DETECT = "arch_detect"
    FETCH = "fetch"
    INSTALL = "install"
    DIRECTORIES = "directories"
    SERVICE_UNIT = "service_unit"
    CONFIGURE = "configure"
    VALIDATE = "validate"
    ACTIVATE = "activate"
    SUMMARY = "summary"
    ABORTED = "aborted"
