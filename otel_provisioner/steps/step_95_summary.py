from __future__ import annotations

import logging
from typing import Any, Dict

from ..provision_config import paths_from_state
from ..stage import Stage

logger = logging.getLogger(__name__)


def render_summary(state: Dict[str, Any]) -> str:
    cfg = state.get("config") or {}
    runtime = state.get("runtime") or {}
    paths = paths_from_state(state)
    service = paths.service

    lines = [
        "Installation Summary",
        f"Binary      : {paths.binary_path}",
        f"Version     : {runtime.get('installed_version', 'unknown')}",
        f"Config      : {paths.config_path}",
        f"Service     : {paths.unit_name}",
        f"Started     : {'yes' if runtime.get('service_started') else 'no'}",
        f"Backend     : {cfg.get('backend_endpoint')}",
        f"Service Name: {runtime.get('hostname')}",
        "",
        "Useful Commands:",
        f"  sudo systemctl status {service}",
        f"  sudo systemctl restart {service}",
        f"  sudo journalctl -u {service} -f",
        "  curl http://localhost:8888/metrics",
        f"  {paths.binary_path} --version",
    ]
    return "\n".join(lines)


class SummaryStep:
    step_id = "95_summary"
    stage = Stage.SUMMARY

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("%s", render_summary(state))
        return state
