from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.net import download_file, human_size
from ..provision_config import paths_from_state
from ..stage import Stage

logger = logging.getLogger(__name__)


def archive_name(version: str, tag: str) -> str:
    return f"otelcol-contrib_{version}_{tag}.tar.gz"


class FetchReleaseStep:
    step_id = "30_fetch_release"
    stage = Stage.FETCH

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        runtime = state.setdefault("runtime", {})
        tag = runtime.get("artifact_tag")
        if not tag:
            raise RuntimeError("runtime.artifact_tag missing; run arch detection first")

        version = str(cfg["version"])
        paths = paths_from_state(state)
        dest = Path(paths.download_dir) / archive_name(version, tag)

        # Stale artifact from an earlier run.
        if dest.exists():
            logger.info("Removing stale %s", dest)
            dest.unlink()

        url = str(cfg["release_url_template"]).format(version=version, arch=tag)
        logger.info("Downloading OTEL Collector v%s from %s", version, url)
        download_file(url, dest, timeout=float(cfg["download_timeout"]))

        size = dest.stat().st_size
        runtime["archive_path"] = str(dest)
        runtime["archive_size"] = size
        runtime["download_url"] = url

        logger.info("Download completed (%s)", human_size(size))
        return state
