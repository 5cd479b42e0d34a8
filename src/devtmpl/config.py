"""Configuration system for devtmpl.

Manages generator configuration via an optional devtmpl.toml with typed
dataclasses and defaults matching the command-line defaults.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

import tomli_w

from devtmpl.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

_T = TypeVar("_T")

__all__ = [
    "CONFIG_FILE",
    "DevtmplConfig",
    "GenerateConfig",
    "InputConfig",
    "OutputConfig",
    "default_config",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "devtmpl.toml"


@dataclass
class InputConfig:
    """[input] section."""

    root: str = "yaml"
    extension: str = ".yaml"


@dataclass
class OutputConfig:
    """[output] section."""

    go_dir: str = ""
    summary_path: str = ""
    layout: str = "template.md"
    go_package: str = "templates"
    registry_import: str = "github.com/andig/evcc-config/registry"
    template_dirs: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.template_dirs, list) or not all(
            isinstance(d, str) for d in self.template_dirs
        ):
            raise ConfigError("[output] template_dirs must be a list of directory paths")


@dataclass
class GenerateConfig:
    """[generate] section."""

    go: bool = False
    summary: bool = False


@dataclass
class DevtmplConfig:
    """Root configuration combining all sections."""

    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    generate: GenerateConfig = field(default_factory=GenerateConfig)


_SECTIONS: dict[str, type] = {
    "input": InputConfig,
    "output": OutputConfig,
    "generate": GenerateConfig,
}


def default_config() -> DevtmplConfig:
    """Return a config with all default values."""
    return DevtmplConfig()


def _config_to_dict(config: DevtmplConfig) -> dict[str, object]:
    """Convert DevtmplConfig to a nested dict suitable for TOML serialization."""
    return {name: dict(vars(getattr(config, name))) for name in _SECTIONS}


def save_config(config: DevtmplConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)
    try:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", path)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


def _load_section(cls: type[_T], data: object) -> _T:
    """Load a dataclass section from a dict, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"Config section for {cls.__name__} must be a table")
    known_fields = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
    filtered = {k: v for k, v in data.items() if k in known_fields}
    return cls(**filtered)


def load_config(path: Path) -> DevtmplConfig:
    """Load configuration from a TOML file.

    Missing sections or keys get default values.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    config = DevtmplConfig()
    for name, cls in _SECTIONS.items():
        if name in data:
            setattr(config, name, _load_section(cls, data[name]))

    logger.info("Loaded config from %s", path)
    return config
