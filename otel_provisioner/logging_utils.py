from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .lib.env import DEFAULT_LOG_PATH

_HANDLER_NAMES = ("otel-provisioner-file", "otel-provisioner-console")


def configure_logging(
    log_path: Optional[str] = DEFAULT_LOG_PATH,
    *,
    verbose: bool = False,
) -> Optional[str]:
    """Send progress to the terminal and a full record to log_path.

    The console gets bare messages at INFO (DEBUG with verbose); the file
    always gets DEBUG with timestamps, so captured command output lands there.
    An unwritable log_path (typically a non-root run about to fail preflight)
    leaves console logging only.

    Calling it again replaces the handlers it installed earlier.
    Returns the log file in use, or None.
    """

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        if h.get_name() in _HANDLER_NAMES:
            root.removeHandler(h)
            h.close()

    console = logging.StreamHandler(sys.stderr)
    console.set_name("otel-provisioner-console")
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(console)

    if log_path is None:
        return None

    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("Cannot write log file %s (%s); logging to console only", log_path, e)
        return None

    file_handler.set_name("otel-provisioner-file")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    root.addHandler(file_handler)
    return log_path
