from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .errors import ProvisionError
from .lib.env import DEFAULT_LOG_PATH
from .logging_utils import configure_logging
from .pipeline import ensure_defaults, run_pipeline
from .provision_config import ProvisionConfig, load_provision_config
from .steps import (
    ActivateStep,
    ConfigureStep,
    CreateDirectoriesStep,
    DetectArchStep,
    FetchReleaseStep,
    InstallBinaryStep,
    PreflightStep,
    SummaryStep,
    ValidateConfigStep,
    WriteServiceUnitStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        PreflightStep(),
        DetectArchStep(),
        FetchReleaseStep(),
        InstallBinaryStep(),
        CreateDirectoriesStep(),
        WriteServiceUnitStep(),
        ConfigureStep(),
        ValidateConfigStep(),
        ActivateStep(),
        SummaryStep(),
    ]


def run(
    config: ProvisionConfig,
    *,
    log_path: Optional[str] = DEFAULT_LOG_PATH,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Run the provisioning sequence once and return the final state."""

    state = ensure_defaults({"config": config.to_state()})
    state["execution"]["log_path"] = configure_logging(log_path, verbose=verbose)

    logger.info("Installing OpenTelemetry Collector v%s", config.version)
    result = run_pipeline(state=state, steps=build_steps())
    result.state["execution"]["summary"] = {"ran_steps": result.ran_steps}
    return result.state


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="otel-provisioner")
    p.add_argument("--config", default=None, help="Path to provisioner config (yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to provisioner log")
    p.add_argument("--verbose", action="store_true", help="Show command output on the console")
    p.add_argument("--collector-version", default=None, help="otelcol-contrib release version")
    p.add_argument("--endpoint", default=None, help="Backend endpoint for PLACEHOLDER_ENDPOINT")
    p.add_argument("--service-name", default=None, help="Hostname prefix for PLACEHOLDER_HOSTNAME")
    p.add_argument("--config-url", default=None, help="URL of the collector config template")
    start = p.add_mutually_exclusive_group()
    start.add_argument("--yes", dest="start_service", action="store_const", const=True,
                       help="Enable and start the service without asking")
    start.add_argument("--no-start", dest="start_service", action="store_const", const=False,
                       help="Install only; do not start the service")

    args = p.parse_args(argv)

    try:
        config = load_provision_config(args.config).with_overrides(
            version=args.collector_version,
            backend_endpoint=args.endpoint,
            service_name=args.service_name,
            config_template_url=args.config_url,
            start_service=args.start_service,
        ).validate()
    except (OSError, ValueError) as e:
        p.exit(1, f"{p.prog}: invalid config: {e}\n")

    try:
        run(config, log_path=args.log, verbose=args.verbose)
    except ProvisionError as e:
        logger.error("Provisioning aborted: %s", e)
        logger.debug("Provisioning failure details", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
