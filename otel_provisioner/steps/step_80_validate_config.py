from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import ConfigValidationError
from ..lib.command import run_cmd
from ..provision_config import paths_from_state
from ..stage import Stage

logger = logging.getLogger(__name__)


class ValidateConfigStep:
    step_id = "80_validate_config"
    stage = Stage.VALIDATE

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        paths = paths_from_state(state)

        r = run_cmd(
            [str(paths.binary_path), f"--config={paths.config_path}", "validate"],
            check=False,
        )
        if r.returncode != 0:
            raise ConfigValidationError(
                f"Configuration validation failed ({r.returncode}); config file: {paths.config_path}\n{r.output}"
            )

        state.setdefault("runtime", {})["config_valid"] = True
        logger.info("Configuration is valid")
        return state
