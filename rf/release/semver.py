"""Semantic versions and the bump rules applied to them.

`bump` is pure: no manifest is read or written here.

Versions with major component 0 are pre-stable, so requests are demoted one
severity level: Major bumps the minor component and Minor bumps the patch
component. Patch is unaffected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Literal

from rf.core.result import Err, Ok, Result
from rf.release.errors import RuleNotApplicable

__all__ = [
    "ConventionalRule",
    "Pre",
    "Rule",
    "Version",
    "bump",
    "parse_version",
]

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)
_LABEL_RE = re.compile(rf"^{_IDENT}$")
_COUNTER_RE = re.compile(r"^\d+$")

ConventionalRule = Literal["major", "minor", "patch"]


@dataclass(frozen=True, slots=True)
class Pre:
    """Labelled prerelease increment.

    `fallback` is the ordinary bump applied first when the version has no
    prerelease yet (normally derived from conventional commits).
    """

    label: str
    fallback: ConventionalRule = "patch"


Rule = Literal["major", "minor", "patch", "release"] | Pre


@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int
    patch: int
    pre: str = ""
    build: str = ""

    @property
    def is_prerelease(self) -> bool:
        return bool(self.pre)

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            out += f"-{self.pre}"
        if self.build:
            out += f"+{self.build}"
        return out


def parse_version(text: str) -> Version | None:
    """Parse a strict SemVer 2.0.0 string (no leading `v`)."""
    m = _SEMVER_RE.match(text.strip())
    if m is None:
        return None
    return Version(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        pre=m.group(4) or "",
        build=m.group(5) or "",
    )


def bump(version: Version, rule: Rule) -> Result[Version, RuleNotApplicable]:
    """Apply `rule` to `version`, incrementing and resetting the right components."""
    is_0 = version.major == 0
    match rule:
        case "major" if not is_0:
            return Ok(replace(version, major=version.major + 1, minor=0, patch=0, pre=""))
        case "minor" if not is_0:
            return Ok(replace(version, minor=version.minor + 1, patch=0, pre=""))
        case "major":
            return Ok(replace(version, minor=version.minor + 1, patch=0, pre=""))
        case "patch" | "minor":
            return Ok(replace(version, patch=version.patch + 1, pre=""))
        case "release":
            return Ok(replace(version, pre=""))
        case Pre(label=label, fallback=fallback):
            return _bump_pre(version, label, fallback)
        case _:
            raise AssertionError(f"unexpected bump rule: {rule}")


def _bump_pre(
    version: Version, label: str, fallback: ConventionalRule
) -> Result[Version, RuleNotApplicable]:
    if _LABEL_RE.match(label) is None:
        return Err(
            RuleNotApplicable(
                version=str(version),
                reason=f"{label!r} is not a valid prerelease label",
            )
        )

    if not version.is_prerelease:
        bumped = bump(version, fallback)
        if isinstance(bumped, Err):
            return bumped
        return Ok(replace(bumped.value, pre=f"{label}.0"))

    parts = version.pre.split(".")
    if len(parts) != 2:
        return Err(
            RuleNotApplicable(
                version=str(version),
                reason="A prerelease version already exists but could not be incremented",
            )
        )

    existing_label, counter = parts
    if existing_label != label:
        return Ok(replace(version, pre=f"{label}.0"))

    if _COUNTER_RE.match(counter) is None:
        return Err(
            RuleNotApplicable(
                version=str(version),
                reason=f"prerelease counter {counter!r} is not a number",
            )
        )
    return Ok(replace(version, pre=f"{label}.{int(counter) + 1}"))
