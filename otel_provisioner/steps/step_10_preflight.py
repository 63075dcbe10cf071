from __future__ import annotations

import logging
import os
from typing import Any, Dict

from ..errors import PrivilegeError
from ..lib.pkg import ensure_tools
from ..stage import Stage

logger = logging.getLogger(__name__)


class PreflightStep:
    step_id = "10_preflight"
    stage = Stage.PREFLIGHT

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}

        if os.geteuid() != 0:
            raise PrivilegeError("Please run as root (use sudo)")

        installed = ensure_tools(cfg.get("required_tools") or [])
        state.setdefault("runtime", {})["installed_tools"] = installed

        logger.info("Dependencies OK")
        return state
