"""docnav.toml loading and version gating."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import Version

from .errors import ConfigError
from .nav.markdown import DEFAULT_EXTENSIONS

CONFIG_FILENAME = "docnav.toml"


@dataclass(frozen=True)
class Metadata:
    name: str
    description: str = ""
    copyright: str = ""


@dataclass(frozen=True)
class Build:
    source: Path
    output: Path


@dataclass(frozen=True)
class Config:
    path: Path
    version_req: SpecifierSet
    metadata: Metadata
    build: Build
    extensions: tuple[str, ...] = field(default=DEFAULT_EXTENSIONS)


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _required_str(table: dict[str, Any], key: str, section: str) -> str:
    value = table.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"[{section}] {key} is required")
    return value.strip()


def load_config(path: Path) -> Config:
    """
    Load docnav.toml.

    Relative build paths are resolved against the directory holding the config.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"could not open config file {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config {path}: {exc}") from exc

    raw_req = data.get("version")
    if not isinstance(raw_req, str):
        raise ConfigError("version is required (e.g. version = \">=0.1\")")
    try:
        version_req = SpecifierSet(raw_req)
    except InvalidSpecifier as exc:
        raise ConfigError(f"invalid version requirement {raw_req!r}") from exc

    meta_raw = _coerce_dict(data.get("metadata"))
    metadata = Metadata(
        name=_required_str(meta_raw, "name", "metadata"),
        description=str(meta_raw.get("description", "")),
        copyright=str(meta_raw.get("copyright", "")),
    )

    base = path.parent
    build_raw = _coerce_dict(data.get("build"))
    build = Build(
        source=base / _required_str(build_raw, "source", "build"),
        output=base / str(build_raw.get("output", "site")),
    )

    format_raw = _coerce_dict(data.get("format"))
    extensions = format_raw.get("extensions", list(DEFAULT_EXTENSIONS))
    if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
        raise ConfigError("[format] extensions must be a list of strings")

    return Config(
        path=path,
        version_req=version_req,
        metadata=metadata,
        build=build,
        extensions=tuple(extensions),
    )


def check_version(config: Config, version: str) -> None:
    """Raise ConfigError if `version` does not satisfy the config's requirement."""
    if not config.version_req.contains(Version(version), prereleases=True):
        raise ConfigError(
            f"version mismatch: current version is v{version}, but config requires {config.version_req}"
        )
