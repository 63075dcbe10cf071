from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib import systemd
from ..provision_config import paths_from_state
from ..stage import Stage

logger = logging.getLogger(__name__)


class WriteServiceUnitStep:
    step_id = "60_write_service_unit"
    stage = Stage.SERVICE_UNIT

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        paths = paths_from_state(state)

        contents = systemd.render_unit(paths.binary_path, paths.config_path)
        changed = systemd.write_unit(paths.unit_path, contents)
        systemd.daemon_reload()

        state.setdefault("runtime", {})["unit_changed"] = changed
        logger.info("Systemd service created: %s", paths.unit_path)
        return state
