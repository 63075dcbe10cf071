from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..provision_config import paths_from_state
from ..stage import Stage

logger = logging.getLogger(__name__)


class CreateDirectoriesStep:
    step_id = "50_create_directories"
    stage = Stage.DIRECTORIES

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        paths = paths_from_state(state)
        created = []
        for d in (Path(paths.config_dir), Path(paths.log_dir)):
            if not d.is_dir():
                created.append(str(d))
            d.mkdir(parents=True, exist_ok=True)

        state.setdefault("runtime", {})["created_dirs"] = created
        logger.info("Directories ready: %s, %s", paths.config_dir, paths.log_dir)
        return state
