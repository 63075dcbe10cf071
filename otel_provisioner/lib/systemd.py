from __future__ import annotations

import logging
from pathlib import Path

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

UNIT_TEMPLATE = """\
[Unit]
Description=OpenTelemetry Collector Contrib
Documentation=https://github.com/open-telemetry/opentelemetry-collector
After=network-online.target docker.service
Wants=network-online.target

[Service]
Type=simple
User=root
ExecStart={binary_path} --config={config_path}
Restart=on-failure
RestartSec=10
StandardOutput=journal
StandardError=journal
SyslogIdentifier=otelcol

[Install]
WantedBy=multi-user.target
"""


def render_unit(binary_path: Path, config_path: Path) -> str:
    return UNIT_TEMPLATE.format(binary_path=binary_path, config_path=config_path)


def write_unit(unit_path: Path, contents: str) -> bool:
    """Overwrite the unit file unconditionally. Returns True if the content changed."""

    previous = unit_path.read_text(encoding="utf-8") if unit_path.exists() else None
    unit_path.parent.mkdir(parents=True, exist_ok=True)
    unit_path.write_text(contents, encoding="utf-8")
    changed = previous != contents
    logger.info("Wrote %s (%s)", unit_path, "changed" if changed else "unchanged")
    return changed


def daemon_reload() -> None:
    run_cmd(["systemctl", "daemon-reload"])


def enable(service: str) -> None:
    run_cmd(["systemctl", "enable", service])


def start(service: str) -> None:
    run_cmd(["systemctl", "start", service])


def is_active(service: str) -> bool:
    r = run_cmd(["systemctl", "is-active", "--quiet", service], check=False)
    return r.returncode == 0


def status(service: str) -> CmdResult:
    # systemctl status exits non-zero for inactive units; callers only display it.
    return run_cmd(["systemctl", "status", service, "--no-pager", "-l"], check=False)


def journal_tail(service: str, lines: int = 30) -> CmdResult:
    return run_cmd(["journalctl", "-u", service, "-n", str(lines), "--no-pager"], check=False)
