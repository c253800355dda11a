from __future__ import annotations


class UpdaterError(RuntimeError):
    """Fatal updater failure. Every subclass terminates the run with exit code 1."""

    kind = "UpdaterError"
    exit_code = 1


class DependencyMissing(UpdaterError):
    kind = "DependencyMissing"


class PlatformUnsupported(UpdaterError):
    kind = "PlatformUnsupported"


class NetworkFailure(UpdaterError):
    kind = "NetworkFailure"


class ChecksumMismatch(UpdaterError):
    kind = "ChecksumMismatch"


class InstallPathConflict(UpdaterError):
    kind = "InstallPathConflict"


class UpdateInProgress(InstallPathConflict):
    """Another updater run holds the install directory lock."""

    kind = "UpdateInProgress"


class LicenseDeclined(UpdaterError):
    kind = "LicenseDeclined"


class ConfigError(UpdaterError):
    kind = "ConfigError"
