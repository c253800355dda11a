from .step_10_check_dependencies import CheckDependenciesStep
from .step_20_resolve_platform import ResolvePlatformStep
from .step_30_fetch_metadata import FetchMetadataStep
from .step_40_detect_local_version import DetectLocalVersionStep
from .step_50_compare_versions import CompareVersionsStep
from .step_60_prepare_workdir import PrepareWorkdirStep
from .step_70_download import DownloadStep
from .step_75_verify_checksum import VerifyChecksumStep
from .step_80_accept_license import AcceptLicenseStep
from .step_85_install import InstallStep
from .step_90_start_server import StartServerStep

__all__ = [
    "CheckDependenciesStep",
    "ResolvePlatformStep",
    "FetchMetadataStep",
    "DetectLocalVersionStep",
    "CompareVersionsStep",
    "PrepareWorkdirStep",
    "DownloadStep",
    "VerifyChecksumStep",
    "AcceptLicenseStep",
    "InstallStep",
    "StartServerStep",
]
