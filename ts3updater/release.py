from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .errors import NetworkFailure


@dataclass(frozen=True)
class Release:
    version: str
    mirrors: Tuple[Tuple[str, str], ...]
    checksum: str

    @property
    def mirror_urls(self) -> List[str]:
        return [url for _, url in self.mirrors]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "mirrors": dict(self.mirrors),
            "checksum": self.checksum,
        }


def select_platform(document: Any, platform_key: str) -> Dict[str, Any]:
    """Narrow the metadata document to the object at a dotted key."""

    node = document
    for part in platform_key.split("."):
        if not isinstance(node, dict) or part not in node:
            raise NetworkFailure(f"Metadata has no entry for platform '{platform_key}'")
        node = node[part]
    if not isinstance(node, dict):
        raise NetworkFailure(f"Metadata entry for platform '{platform_key}' is not an object")
    return node


def parse_release(entry: Dict[str, Any]) -> Release:
    version = entry.get("version")
    mirrors = entry.get("mirrors")
    checksum = entry.get("checksum")

    if not isinstance(version, str) or not version:
        raise NetworkFailure("Metadata entry has no version")
    if not isinstance(mirrors, dict):
        raise NetworkFailure("Metadata entry has no mirror list")
    if not isinstance(checksum, str) or not checksum:
        raise NetworkFailure("Metadata entry has no checksum")

    # dict preserves the order the mirrors were listed in the document
    return Release(
        version=version,
        mirrors=tuple((str(name), str(url)) for name, url in mirrors.items()),
        checksum=checksum.strip().lower(),
    )


def release_from_document(document: Any, platform_key: str) -> Release:
    return parse_release(select_platform(document, platform_key))
