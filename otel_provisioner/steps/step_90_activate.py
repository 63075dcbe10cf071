from __future__ import annotations

import logging
import time
from typing import Any, Dict

from ..errors import ActivationError
from ..lib import systemd
from ..lib.prompt import confirm
from ..provision_config import paths_from_state
from ..stage import Stage

logger = logging.getLogger(__name__)


class ActivateStep:
    step_id = "90_activate"
    stage = Stage.ACTIVATE

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        runtime = state.setdefault("runtime", {})
        service = paths_from_state(state).service

        # Never reached unless validation passed in this run.
        if not runtime.get("config_valid"):
            raise ActivationError("Refusing to start: configuration was not validated")

        wanted = cfg.get("start_service")
        if wanted is None:
            wanted = confirm("Do you want to start OTEL Collector now?", default=True)

        if not wanted:
            runtime["service_started"] = False
            logger.info("Service not started. To start manually: sudo systemctl start %s", service)
            return state

        logger.info("Enabling and starting %s", service)
        systemd.enable(service)
        systemd.start(service)

        time.sleep(float(cfg.get("settle_seconds", 3)))

        if not systemd.is_active(service):
            logs = systemd.journal_tail(service, lines=30)
            logger.error("%s failed to start; recent logs:\n%s", service, logs.output)
            raise ActivationError(f"{service} failed to start")

        runtime["service_started"] = True
        logger.info("%s is running\n%s", service, systemd.status(service).output)
        return state
