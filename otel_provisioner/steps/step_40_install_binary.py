from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict

from ..errors import ArtifactIntegrityError
from ..lib.command import run_cmd
from ..provision_config import paths_from_state
from ..stage import Stage

logger = logging.getLogger(__name__)


class InstallBinaryStep:
    step_id = "40_install_binary"
    stage = Stage.INSTALL

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        runtime = state.setdefault("runtime", {})
        archive = runtime.get("archive_path")
        if not archive:
            raise RuntimeError("runtime.archive_path missing; run fetch first")

        paths = paths_from_state(state)
        archive_path = Path(archive)

        # Extract into a private directory so a leftover binary in the
        # download dir can never pass for the freshly extracted one.
        staging = Path(tempfile.mkdtemp(prefix="otelcol-", dir=paths.download_dir))
        try:
            run_cmd(["tar", "-xzf", str(archive_path), "-C", str(staging)])

            extracted = staging / paths.binary_name
            if not extracted.is_file():
                raise ArtifactIntegrityError(
                    f"Binary not found after extraction: {paths.binary_name} (archive {archive_path.name})"
                )

            target = paths.binary_path
            target.parent.mkdir(parents=True, exist_ok=True)
            # Writing over a running binary fails with ETXTBSY; rename into place instead.
            incoming = target.with_name(f".{target.name}.new")
            try:
                shutil.copyfile(extracted, incoming)
                os.chmod(incoming, 0o755)
                os.replace(incoming, target)
            finally:
                incoming.unlink(missing_ok=True)
        finally:
            shutil.rmtree(staging, ignore_errors=True)

        archive_path.unlink(missing_ok=True)

        r = run_cmd([str(target), "--version"])
        installed = (r.stdout.strip().splitlines() or [""])[0]
        runtime["binary_path"] = str(target)
        runtime["installed_version"] = installed

        logger.info("Installed: %s", installed)
        return state
