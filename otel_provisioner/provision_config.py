from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .lib.env import Paths

DEFAULT_VERSION = "0.143.1"
DEFAULT_CONFIG_TEMPLATE_URL = "https://raw.githubusercontent.com/yaumialfadha/otel-config/main/config.yaml"
DEFAULT_RELEASE_URL_TEMPLATE = (
    "https://github.com/open-telemetry/opentelemetry-collector-releases/releases/download/"
    "v{version}/otelcol-contrib_{version}_{arch}.tar.gz"
)
UNSET = "CHANGEME"


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any]

    @property
    def version(self) -> str:
        return str(self.raw.get("version") or DEFAULT_VERSION)

    @property
    def config_template_url(self) -> str:
        return str(self.raw.get("config_template_url") or DEFAULT_CONFIG_TEMPLATE_URL)

    @property
    def backend_endpoint(self) -> str:
        return str(self.raw.get("backend_endpoint") or UNSET)

    @property
    def service_name(self) -> str:
        return str(self.raw.get("service_name") or UNSET)

    @property
    def release_url_template(self) -> str:
        return str(self.raw.get("release_url_template") or DEFAULT_RELEASE_URL_TEMPLATE)

    @property
    def required_tools(self) -> List[str]:
        tools = self.raw.get("required_tools")
        if tools is None:
            return ["tar", "gzip"]
        if not isinstance(tools, list):
            raise ValueError(f"required_tools must be a list, got {type(tools).__name__}")
        return [str(t) for t in tools]

    @property
    def start_service(self) -> Optional[bool]:
        v = self.raw.get("start_service")
        return None if v is None else bool(v)

    @property
    def settle_seconds(self) -> float:
        v = self.raw.get("settle_seconds")
        return 3.0 if v is None else float(v)

    @property
    def download_timeout(self) -> float:
        v = self.raw.get("download_timeout")
        return 300.0 if v is None else float(v)

    @property
    def metadata_timeout(self) -> float:
        v = self.raw.get("metadata_timeout")
        return 2.0 if v is None else float(v)

    @property
    def strict_placeholders(self) -> bool:
        return bool(self.raw.get("strict_placeholders", False))

    @property
    def paths(self) -> Paths:
        return Paths.from_mapping(self.raw.get("paths"))

    def with_overrides(self, **overrides: Any) -> "ProvisionConfig":
        raw = dict(self.raw)
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return ProvisionConfig(raw=raw)

    def validate(self) -> "ProvisionConfig":
        """Resolve every setting once so bad values fail before anything runs."""
        try:
            self.to_state()
        except TypeError as e:
            raise ValueError(str(e)) from e
        return self

    def to_state(self) -> Dict[str, Any]:
        """Resolved settings as the plain dict steps read from state['config']."""
        return {
            "version": self.version,
            "config_template_url": self.config_template_url,
            "backend_endpoint": self.backend_endpoint,
            "service_name": self.service_name,
            "release_url_template": self.release_url_template,
            "required_tools": self.required_tools,
            "start_service": self.start_service,
            "settle_seconds": self.settle_seconds,
            "download_timeout": self.download_timeout,
            "metadata_timeout": self.metadata_timeout,
            "strict_placeholders": self.strict_placeholders,
            "paths": self.paths.as_dict(),
        }


def load_provision_config(path: Optional[str]) -> ProvisionConfig:
    if path is None:
        return ProvisionConfig(raw={})

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("provisioner config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{path} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    return ProvisionConfig(raw=raw).validate()


def paths_from_state(state: Dict[str, Any]) -> Paths:
    cfg = state.get("config") or {}
    return Paths.from_mapping(cfg.get("paths"))
