from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ManifestNotFound:
    searched: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class InvalidManifestVersion:
    manifest: str
    value: str


@dataclass(frozen=True, slots=True)
class ManifestWriteFailed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class RuleNotApplicable:
    version: str
    reason: str


DiscoveryError = ManifestNotFound | InvalidManifestVersion
