from __future__ import annotations

import logging
import platform
from typing import Optional

from ..errors import PlatformUnsupported

logger = logging.getLogger(__name__)

_OS_KEYS = {
    "darwin": "macos",
    "linux": "linux",
    "freebsd": "freebsd",
}


def normalize_arch(machine: str) -> str:
    m = machine.lower()
    return "x86_64" if m in ("x86_64", "amd64") else "x86"


def resolve_platform_key(system: Optional[str] = None, machine: Optional[str] = None) -> str:
    """Map OS and CPU architecture to the metadata key, e.g. "linux.x86_64".

    macOS builds are universal, so no architecture suffix is added there.
    """

    system = platform.system() if system is None else system
    os_key = _OS_KEYS.get(system.lower())
    if os_key is None:
        raise PlatformUnsupported(
            f"Could not detect operating system ({system or 'unknown'}). If you run Linux, FreeBSD, "
            "or macOS and get this error, please open an issue on Github."
        )

    if os_key == "macos":
        return os_key

    machine = platform.machine() if machine is None else machine
    key = f"{os_key}.{normalize_arch(machine)}"
    logger.debug("Platform: system=%s machine=%s key=%s", system, machine, key)
    return key
