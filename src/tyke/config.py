"""TOML config loading for tyke.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "tyke.toml"


@dataclass
class PackageConfig:
    name: str = "untitled"
    version: str = "0.0.0"


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class LogConfig:
    level: str = "WARNING"


@dataclass
class TykeConfig:
    package: PackageConfig = field(default_factory=PackageConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    log: LogConfig = field(default_factory=LogConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find tyke.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> TykeConfig:
    """Parse a tyke.toml file into a TykeConfig. Raises ValueError on bad values."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = TykeConfig()

    if "package" in data:
        pkg = data["package"]
        config.package = PackageConfig(
            name=pkg.get("name", "untitled"),
            version=pkg.get("version", "0.0.0"),
        )

    if "diagnostics" in data:
        diag = data["diagnostics"]
        config.diagnostics = DiagnosticsConfig(
            color=diag.get("color", True),
        )

    if "log" in data:
        level = str(data["log"].get("level", "WARNING")).upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"{path}: unknown log level '{level.lower()}'")
        config.log = LogConfig(level=level)

    return config


def config_for(path: Path) -> TykeConfig:
    """Config governing ``path``, or defaults when there is none."""
    try:
        return load_config(find_config(path))
    except FileNotFoundError:
        return TykeConfig()
