from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import yaml

from .config import UpdaterConfig
from .lib.service import is_installed, is_running

logger = logging.getLogger(__name__)

MANIFEST_VERSION = 1


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def load_state(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}

    fmt = _detect_format(path)
    data: Any
    if fmt in {"yaml", "yml"}:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(path.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def save_state(path: Path, state: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    fmt = _detect_format(path)
    tmp = path.with_name(path.name + ".tmp")
    if fmt in {"yaml", "yml"}:
        tmp.write_text(yaml.safe_dump(state, sort_keys=False), encoding="utf-8")
    else:
        tmp.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    tmp.replace(path)


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with defaults (without overriding stored values)."""

    state.setdefault("manifest_version", MANIFEST_VERSION)
    state.setdefault("installed_version", None)
    state.setdefault("installed_at", None)
    state.setdefault("platform_key", None)
    state.setdefault("license_accepted", False)
    return state


def read_install_state(install_dir: Path, cfg: UpdaterConfig) -> Dict[str, Any]:
    """Snapshot of everything persisted about the installation.

    Combines the manifest with the server's own marker files so the rest of
    the run never probes the filesystem for them.
    """

    manifest_path = install_dir / cfg.state_file
    try:
        manifest = ensure_defaults(load_state(manifest_path))
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable install manifest %s: %s", manifest_path, e)
        manifest = ensure_defaults({})

    snapshot = {
        "install_dir": str(install_dir),
        "installed": is_installed(install_dir, cfg.start_script),
        "server_running": is_running(install_dir, cfg.pid_file),
        "license_accepted": bool(manifest["license_accepted"]) or (install_dir / cfg.license_marker).exists(),
        "manifest": manifest,
    }
    logger.debug("Install state: %s", snapshot)
    return snapshot


def record_install(install_dir: Path, cfg: UpdaterConfig, *, version: str, platform_key: str) -> Dict[str, Any]:
    """Persist the result of a successful extraction."""

    (install_dir / cfg.license_marker).touch()

    manifest_path = install_dir / cfg.state_file
    try:
        manifest = ensure_defaults(load_state(manifest_path))
    except (OSError, ValueError, yaml.YAMLError):
        manifest = ensure_defaults({})
    manifest.update(
        {
            "installed_version": version,
            "installed_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "platform_key": platform_key,
            "license_accepted": True,
        }
    )
    save_state(manifest_path, manifest)
    logger.info("Recorded installed version %s in %s", version, manifest_path)
    return manifest
