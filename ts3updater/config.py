from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from . import __version__
from .errors import ConfigError

DEFAULT_METADATA_URL = "https://www.teamspeak.com/versions/server.json"
DEFAULT_CHECKSUM_TOOLS = ["sha256sum", "shasum", "sha256", "hashlib"]


@dataclass(frozen=True)
class UpdaterConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def metadata_url(self) -> str:
        return str(self.raw.get("metadata_url") or DEFAULT_METADATA_URL)

    @property
    def install_dir(self) -> Path:
        return Path(str(self.raw.get("install_dir") or "."))

    @property
    def archive_name(self) -> str:
        return str(self.raw.get("archive_name") or "teamspeak.tar.bz2")

    @property
    def start_script(self) -> str:
        return str(self.raw.get("start_script") or "ts3server_startscript.sh")

    @property
    def pid_file(self) -> str:
        return str(self.raw.get("pid_file") or "ts3server.pid")

    @property
    def license_marker(self) -> str:
        return str(self.raw.get("license_marker") or ".ts3server_license_accepted")

    @property
    def changelog_file(self) -> str:
        return str(self.raw.get("changelog_file") or "CHANGELOG")

    @property
    def log_glob(self) -> str:
        return str(self.raw.get("log_glob") or "logs/*")

    @property
    def state_file(self) -> str:
        return str(self.raw.get("state_file") or ".ts3updater.json")

    @property
    def required_tools(self) -> List[str]:
        tools = self.raw.get("required_tools")
        return ["tar"] if tools is None else [str(t) for t in tools]

    @property
    def checksum_tools(self) -> List[str]:
        tools = self.raw.get("checksum_tools")
        return list(DEFAULT_CHECKSUM_TOOLS) if tools is None else [str(t) for t in tools]

    @property
    def http_timeout(self) -> float:
        return float(((self.raw.get("http") or {}).get("timeout")) or 60)

    @property
    def http_retries(self) -> int:
        return int(((self.raw.get("http") or {}).get("retries")) or 0)

    @property
    def user_agent(self) -> str:
        return str(((self.raw.get("http") or {}).get("user_agent")) or f"ts3updater/{__version__}")

    def with_overrides(self, **overrides: Any) -> "UpdaterConfig":
        raw = dict(self.raw)
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return UpdaterConfig(raw=raw)


def load_config(path: Optional[str]) -> UpdaterConfig:
    """Load the YAML config file, or defaults when no path is given."""

    if path is None:
        return UpdaterConfig()

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("Config file must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must contain a mapping/object: {path}")

    return UpdaterConfig(raw=raw)
