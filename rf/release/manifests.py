"""Project manifests that carry the authoritative version string.

One adapter per ecosystem. `MANIFEST_PROBE_ORDER` is an ordered list, not a
set: when several manifests coexist the first adapter that yields a version
wins (Cargo, then Python, then JavaScript).
"""

from __future__ import annotations

import json
import re
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from rf.core.result import Err, Ok, Result
from rf.core.structured import as_str_dict, get_str, get_table
from rf.platform.files import atomic_write_text
from rf.release.errors import (
    DiscoveryError,
    InvalidManifestVersion,
    ManifestNotFound,
    ManifestWriteFailed,
)
from rf.release.semver import Version, parse_version

__all__ = [
    "CargoManifest",
    "MANIFEST_PROBE_ORDER",
    "ManifestAdapter",
    "PackageJsonManifest",
    "PackageManager",
    "PackageVersion",
    "PyprojectManifest",
    "discover_version",
    "write_version",
]


class PackageManager(Enum):
    CARGO = "Cargo.toml"
    PYTHON = "pyproject.toml"
    JAVASCRIPT = "package.json"


class ManifestAdapter(Protocol):
    """Read/write contract for one manifest format."""

    manager: PackageManager

    def get_version(self, path: Path) -> str | None:
        """Return the version string, or None if the file is absent or has none."""
        ...

    def set_version(self, path: Path, version: str) -> Result[None, ManifestWriteFailed]: ...


@dataclass(frozen=True, slots=True)
class PackageVersion:
    """A discovered version and the manifest it was read from."""

    version: Version
    manager: PackageManager

    @property
    def file_name(self) -> str:
        return self.manager.value

    def __str__(self) -> str:
        return str(self.version)


# Indent, quote style, trailing comment and CRLF endings survive the rewrite.
_VERSION_LINE = re.compile(
    r"""(?m)^([ \t]*version\s*=\s*)(["'])[^"'\n]*\2"""
    r"""([ \t]*(?:#[^\r\n]*)?\r?)$"""
)
_TABLE_START = re.compile(r"(?m)^[ \t]*\[")


def _read_toml(path: Path) -> dict[str, object] | None:
    try:
        data: object = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return None
    return as_str_dict(data)


def _replace_table_version(text: str, header: str, version: str) -> str | None:
    """Rewrite the `version` value inside the `[header]` table only.

    Returns None when the table or its version key is missing.
    """
    name = r"[ \t]*\.[ \t]*".join(re.escape(part) for part in header.split("."))
    head = re.search(rf"(?m)^[ \t]*\[[ \t]*{name}[ \t]*\][ \t]*(?:#[^\r\n]*)?\r?$", text)
    if head is None:
        return None
    start = head.end()
    nxt = _TABLE_START.search(text, start)
    end = nxt.start() if nxt is not None else len(text)

    body = text[start:end]
    m = _VERSION_LINE.search(body)
    if m is None:
        return None
    quote = m.group(2)
    line = f"{m.group(1)}{quote}{version}{quote}{m.group(3)}"
    return text[:start] + body[: m.start()] + line + body[m.end() :] + text[end:]


def _write(path: Path, content: str) -> Result[None, ManifestWriteFailed]:
    try:
        atomic_write_text(path, content, encoding="utf-8")
    except OSError as e:
        return Err(ManifestWriteFailed(path=path, reason=str(e)))
    return Ok(None)


def _read_text(path: Path) -> Result[str, ManifestWriteFailed]:
    try:
        return Ok(path.read_bytes().decode("utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestWriteFailed(path=path, reason=f"failed to read: {e}"))


_JSON_STRING = re.compile(r'"(?:[^"\\]|\\.)*"')
_JSON_STRING_VALUE = re.compile(r'\s*:\s*("(?:[^"\\]|\\.)*")')


def _top_level_version_span(text: str) -> tuple[int, int] | None:
    """Span of the quoted value of the root object's `"version"` key.

    Walks the text tracking nesting depth and skipping string contents, so
    `"version"` keys of nested objects are never matched.
    """
    depth = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            s = _JSON_STRING.match(text, i)
            if s is None:
                return None
            if depth == 1 and s.group() == '"version"':
                value = _JSON_STRING_VALUE.match(text, s.end())
                if value is not None:
                    return value.span(1)
            i = s.end()
            continue
        if ch in "{[":
            depth += 1
        elif ch in "}]":
            depth -= 1
        i += 1
    return None


class CargoManifest:
    manager = PackageManager.CARGO

    def get_version(self, path: Path) -> str | None:
        data = _read_toml(path)
        if data is None:
            return None
        package = get_table(data, "package")
        if package is None:
            return None
        return get_str(package, "version")

    def set_version(self, path: Path, version: str) -> Result[None, ManifestWriteFailed]:
        text = _read_text(path)
        if isinstance(text, Err):
            return text
        out = _replace_table_version(text.value, "package", version)
        if out is None:
            return Err(ManifestWriteFailed(path=path, reason="missing [package] version"))
        return _write(path, out)


class PyprojectManifest:
    """pyproject.toml: Poetry's `[tool.poetry]` table first, then PEP 621 `[project]`."""

    manager = PackageManager.PYTHON
    _TABLES = ("tool.poetry", "project")

    def _lookup(self, data: dict[str, object], dotted: str) -> str | None:
        table: dict[str, object] | None = data
        for part in dotted.split("."):
            if table is None:
                return None
            table = get_table(table, part)
        if table is None:
            return None
        return get_str(table, "version")

    def get_version(self, path: Path) -> str | None:
        data = _read_toml(path)
        if data is None:
            return None
        for dotted in self._TABLES:
            version = self._lookup(data, dotted)
            if version is not None:
                return version
        return None

    def set_version(self, path: Path, version: str) -> Result[None, ManifestWriteFailed]:
        text = _read_text(path)
        if isinstance(text, Err):
            return text
        for dotted in self._TABLES:
            out = _replace_table_version(text.value, dotted, version)
            if out is not None:
                return _write(path, out)
        return Err(
            ManifestWriteFailed(path=path, reason="missing [tool.poetry] or [project] version")
        )


class PackageJsonManifest:
    manager = PackageManager.JAVASCRIPT

    def _load(self, path: Path) -> dict[str, object] | None:
        try:
            obj: object = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            return None
        return as_str_dict(obj)

    def get_version(self, path: Path) -> str | None:
        data = self._load(path)
        if data is None:
            return None
        return get_str(data, "version")

    def set_version(self, path: Path, version: str) -> Result[None, ManifestWriteFailed]:
        """Replace the top-level `"version"` string in place; nothing else is re-serialised."""
        if self._load(path) is None:
            return Err(ManifestWriteFailed(path=path, reason="invalid or unreadable JSON"))
        text = _read_text(path)
        if isinstance(text, Err):
            return text
        span = _top_level_version_span(text.value)
        if span is None:
            return Err(ManifestWriteFailed(path=path, reason='missing top-level "version" string'))
        start, end = span
        return _write(path, text.value[:start] + json.dumps(version) + text.value[end:])


MANIFEST_PROBE_ORDER: tuple[ManifestAdapter, ...] = (
    CargoManifest(),
    PyprojectManifest(),
    PackageJsonManifest(),
)


def discover_version(*, root: Path) -> Result[PackageVersion, DiscoveryError]:
    """Probe manifests under `root` in priority order; the first match wins."""
    for adapter in MANIFEST_PROBE_ORDER:
        raw = adapter.get_version(root / adapter.manager.value)
        if raw is None:
            continue
        version = parse_version(raw)
        if version is None:
            return Err(InvalidManifestVersion(manifest=adapter.manager.value, value=raw))
        return Ok(PackageVersion(version=version, manager=adapter.manager))

    return Err(ManifestNotFound(searched=tuple(a.manager.value for a in MANIFEST_PROBE_ORDER)))


def write_version(
    *, root: Path, package_version: PackageVersion
) -> Result[Path, ManifestWriteFailed]:
    """Write `package_version` back to the manifest it was discovered in."""
    for adapter in MANIFEST_PROBE_ORDER:
        if adapter.manager is package_version.manager:
            path = root / adapter.manager.value
            written = adapter.set_version(path, str(package_version.version))
            if isinstance(written, Err):
                return written
            return Ok(path)
    raise AssertionError(f"no adapter for {package_version.manager}")
