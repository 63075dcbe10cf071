from __future__ import annotations

import logging
import platform
from typing import Any, Dict

from ..lib.arch import artifact_tag, normalize_arch
from ..stage import Stage

logger = logging.getLogger(__name__)


class DetectArchStep:
    step_id = "20_detect_arch"
    stage = Stage.ARCH_DETECT

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        machine = platform.machine()
        tag = artifact_tag(machine)

        runtime = state.setdefault("runtime", {})
        runtime["arch"] = normalize_arch(machine)
        runtime["artifact_tag"] = tag

        logger.info("Detected: %s (%s)", machine, tag)
        return state
