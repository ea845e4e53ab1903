"""Version discovery and bump rules."""

from .errors import (
    DiscoveryError,
    InvalidManifestVersion,
    ManifestNotFound,
    ManifestWriteFailed,
    RuleNotApplicable,
)
from .manifests import PackageManager, PackageVersion, discover_version, write_version
from .semver import ConventionalRule, Pre, Rule, Version, bump, parse_version

__all__ = [
    # errors
    "DiscoveryError",
    "InvalidManifestVersion",
    "ManifestNotFound",
    "ManifestWriteFailed",
    "RuleNotApplicable",
    # manifests
    "PackageManager",
    "PackageVersion",
    "discover_version",
    "write_version",
    # semver
    "ConventionalRule",
    "Pre",
    "Rule",
    "Version",
    "bump",
    "parse_version",
]
