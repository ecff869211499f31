"""TOML config loading for jsmatch.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from jsmatch.document import MAX_WIDTH

logger = logging.getLogger(__name__)

CONFIG_NAME = "jsmatch.toml"

DEFAULT_CONFIG_TEXT = (
    "[format]\n"
    f"width = {MAX_WIDTH}\n"
    "\n"
    "[emit]\n"
    "allow_shadowed_bindings = false\n"
)


@dataclass
class FormatConfig:
    width: int = MAX_WIDTH


@dataclass
class EmitConfig:
    allow_shadowed_bindings: bool = False


@dataclass
class JsmatchConfig:
    format: FormatConfig = field(default_factory=FormatConfig)
    emit: EmitConfig = field(default_factory=EmitConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find jsmatch.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            logger.debug("using config %s", candidate)
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> JsmatchConfig:
    """Parse a jsmatch.toml file into a JsmatchConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = JsmatchConfig()

    if "format" in data:
        fmt = data["format"]
        width = fmt.get("width", MAX_WIDTH)
        if not isinstance(width, int) or width <= 0:
            raise ValueError(f"{path}: format.width must be a positive integer")
        config.format = FormatConfig(width=width)

    if "emit" in data:
        emit = data["emit"]
        config.emit = EmitConfig(
            allow_shadowed_bindings=bool(emit.get("allow_shadowed_bindings", False)),
        )

    return config


def discover_config(start_path: Path | None = None) -> JsmatchConfig:
    """Load the nearest jsmatch.toml, or defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        logger.debug("no %s found, using defaults", CONFIG_NAME)
        return JsmatchConfig()
