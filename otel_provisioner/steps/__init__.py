from .step_10_preflight import PreflightStep
from .step_20_detect_arch import DetectArchStep
from .step_30_fetch_release import FetchReleaseStep
from .step_40_install_binary import InstallBinaryStep
from .step_50_create_directories import CreateDirectoriesStep
from .step_60_write_service_unit import WriteServiceUnitStep
from .step_70_configure import ConfigureStep
from .step_80_validate_config import ValidateConfigStep
from .step_90_activate import ActivateStep
from .step_95_summary import SummaryStep

__all__ = [
    "PreflightStep",
    "DetectArchStep",
    "FetchReleaseStep",
    "InstallBinaryStep",
    "CreateDirectoriesStep",
    "WriteServiceUnitStep",
    "ConfigureStep",
    "ValidateConfigStep",
    "ActivateStep",
    "SummaryStep",
]
