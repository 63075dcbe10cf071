from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from ..errors import ConfigurationError, FetchError
from ..lib.metadata import ResolvedHostname, resolve_hostname
from ..lib.net import download_file
from ..lib.template import (
    PLACEHOLDER_ENDPOINT,
    PLACEHOLDER_HOSTNAME,
    Substitution,
    substitute,
    unresolved,
)
from ..provision_config import paths_from_state
from ..stage import Stage

logger = logging.getLogger(__name__)


class ConfigureStep:
    step_id = "70_configure"
    stage = Stage.CONFIGURE

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = paths_from_state(state)
        config_path = paths.config_path
        # The live config is only replaced once the rendered text passes every check.
        incoming = config_path.with_name(f".{config_path.name}.download")

        try:
            resolved, result = self._render(cfg, incoming)
            os.replace(incoming, config_path)
        finally:
            incoming.unlink(missing_ok=True)

        runtime = state.setdefault("runtime", {})
        runtime["config_path"] = str(config_path)
        runtime["hostname"] = resolved.hostname
        runtime["hostname_source"] = resolved.source
        runtime["instance_id"] = resolved.instance_id
        runtime["placeholder_counts"] = result.counts

        logger.info(
            "Configuration setup complete (backend=%s, hostname=%s)", cfg["backend_endpoint"], resolved.hostname
        )
        return state

    def _render(self, cfg: Dict[str, Any], incoming: Path) -> Tuple[ResolvedHostname, Substitution]:
        url = str(cfg["config_template_url"])
        logger.info("Downloading config template from %s", url)
        try:
            download_file(url, incoming, timeout=float(cfg["download_timeout"]))
        except FetchError as e:
            raise FetchError(f"Failed to download config: {e.message}", stage=self.stage) from e

        resolved = resolve_hostname(
            str(cfg["service_name"]),
            timeout=float(cfg["metadata_timeout"]),
        )

        result = substitute(
            incoming.read_text(encoding="utf-8"),
            {
                PLACEHOLDER_ENDPOINT: str(cfg["backend_endpoint"]),
                PLACEHOLDER_HOSTNAME: resolved.hostname,
            },
        )

        if result.missing:
            msg = f"Config template has no {', '.join(result.missing)} token(s): {url}"
            if cfg.get("strict_placeholders"):
                raise ConfigurationError(msg)
            logger.warning(msg)

        leftover = unresolved(result.text, [PLACEHOLDER_ENDPOINT, PLACEHOLDER_HOSTNAME])
        if leftover:
            raise ConfigurationError(f"Unresolved placeholder(s) after substitution: {', '.join(leftover)}")

        try:
            parsed = yaml.safe_load(result.text)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Config template is not valid YAML: {e}") from e
        if not isinstance(parsed, dict):
            raise ConfigurationError(f"Config template must be a YAML mapping: {url}")

        incoming.write_text(result.text, encoding="utf-8")
        return resolved, result
