from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Paths:
    binary_dir: str = "/usr/local/bin"
    binary_name: str = "otelcol-contrib"
    config_dir: str = "/etc/otelcol-contrib"
    config_file: str = "config.yaml"
    log_dir: str = "/var/log/otel-install"
    unit_dir: str = "/etc/systemd/system"
    unit_name: str = "otelcol-contrib.service"
    download_dir: str = "/tmp"

    @property
    def binary_path(self) -> Path:
        return Path(self.binary_dir) / self.binary_name

    @property
    def config_path(self) -> Path:
        return Path(self.config_dir) / self.config_file

    @property
    def unit_path(self) -> Path:
        return Path(self.unit_dir) / self.unit_name

    @property
    def service(self) -> str:
        """Unit name without the .service suffix, as systemctl/journalctl accept it."""
        return self.unit_name[: -len(".service")] if self.unit_name.endswith(".service") else self.unit_name

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "Paths":
        if raw is not None and not isinstance(raw, Mapping):
            raise ValueError(f"paths must be a mapping, got {type(raw).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = set(raw or {}) - known
        if unknown:
            raise ValueError(f"Unknown path setting(s): {', '.join(sorted(unknown))}")
        return cls(**{k: str(v) for k, v in (raw or {}).items() if v is not None})

    def as_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


PATHS = Paths()
DEFAULT_LOG_PATH = str(Path(PATHS.log_dir) / "provisioner.log")
