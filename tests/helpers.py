from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from otel_provisioner.lib.command import CmdResult
from otel_provisioner.pipeline import ensure_defaults
from otel_provisioner.provision_config import ProvisionConfig

ENDPOINT = "https://otel.example.com:4318"
SERVICE_NAME = "checkout"

TEMPLATE = """\
receivers:
  otlp:
    protocols:
      grpc:
        endpoint: 0.0.0.0:4317
processors:
  resource:
    attributes:
      - key: host.name
        value: PLACEHOLDER_HOSTNAME
        action: upsert
exporters:
  otlphttp:
    endpoint: PLACEHOLDER_ENDPOINT
service:
  pipelines:
    traces:
      receivers: [otlp]
      processors: [resource]
      exporters: [otlphttp]
"""


def tmp_paths(root: Path) -> Dict[str, str]:
    return {
        "binary_dir": str(root / "usr/local/bin"),
        "config_dir": str(root / "etc/otelcol-contrib"),
        "log_dir": str(root / "var/log/otel-install"),
        "unit_dir": str(root / "etc/systemd/system"),
        "download_dir": str(root / "tmp"),
    }


def make_config(root: Path, **overrides: Any) -> ProvisionConfig:
    raw: Dict[str, Any] = {
        "backend_endpoint": ENDPOINT,
        "service_name": SERVICE_NAME,
        "settle_seconds": 0,
        "paths": tmp_paths(root),
    }
    raw.update(overrides)
    return ProvisionConfig(raw=raw)


def make_state(root: Path, **overrides: Any) -> Dict[str, Any]:
    return ensure_defaults({"config": make_config(root, **overrides).to_state()})


def ok(argv, stdout: str = "", returncode: int = 0, stderr: str = "") -> CmdResult:
    return CmdResult(argv=list(argv), returncode=returncode, stdout=stdout, stderr=stderr)


def drop_handlers() -> None:
    """Remove the root handlers installed by configure_logging."""

    root = logging.getLogger()
    for h in list(root.handlers):
        if (h.get_name() or "").startswith("otel-provisioner-"):
            root.removeHandler(h)
            h.close()
