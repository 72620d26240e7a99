"""Configuration loader for inkmark.

Loads and validates ``inkmark.yaml`` into typed, frozen dataclasses.
Style defaults, raster work splitting, canvas size and logging come from
the config.  The black threshold itself is a fixed constant of the
converter and is deliberately absent here.

Usage::

    from inkmark.configs.loader import load_config
    cfg = load_config()                        # bundled defaults
    cfg = load_config("/custom/inkmark.yaml")  # explicit path
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from inkmark.utils.fs import load_yaml
from inkmark.utils.validators import TOOL_KINDS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "inkmark.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InkConfig:
    """Default ink when the caller has no active tool."""

    tool: str
    color: tuple[int, int, int, int]


@dataclass(frozen=True)
class ShapeConfig:
    """Shape generator style defaults."""

    thickness: float
    opacity: float


@dataclass(frozen=True)
class RasterConfig:
    """Row-range splitting for the threshold pass."""

    rows_per_chunk: int | None
    max_workers: int


@dataclass(frozen=True)
class CanvasConfig:
    """Canvas extent (points) and undo depth."""

    width: float
    height: float
    undo_limit: int


@dataclass(frozen=True)
class LoggingConfig:
    """Arguments for ``setup_logging``."""

    level: str
    file: str | None
    json: bool
    color: bool

    def as_kwargs(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "file": self.file,
            "json": self.json,
            "color": self.color,
        }


@dataclass(frozen=True)
class AppConfig:
    """Top-level configuration."""

    ink: InkConfig
    shapes: ShapeConfig
    raster: RasterConfig
    canvas: CanvasConfig
    logging: LoggingConfig


# ---------------------------------------------------------------------------
# Section parsers
# ---------------------------------------------------------------------------


def _parse_ink(data: dict[str, Any]) -> InkConfig:
    tool = str(data.get("tool", "pen"))
    if tool not in TOOL_KINDS:
        raise ConfigError(f"ink.tool must be one of {TOOL_KINDS}, got {tool!r}")
    color = tuple(int(c) for c in data["color"])
    if len(color) != 4 or any(not 0 <= c <= 255 for c in color):
        raise ConfigError(f"ink.color must be 4 channels in [0, 255], got {list(color)}")
    return InkConfig(tool=tool, color=color)


def _parse_shapes(data: dict[str, Any]) -> ShapeConfig:
    thickness = float(data["thickness"])
    opacity = float(data.get("opacity", 1.0))
    if thickness < 0:
        raise ConfigError(f"shapes.thickness must be >= 0, got {thickness}")
    if not 0.0 <= opacity <= 1.0:
        raise ConfigError(f"shapes.opacity must be in [0, 1], got {opacity}")
    return ShapeConfig(thickness=thickness, opacity=opacity)


def _parse_raster(data: dict[str, Any]) -> RasterConfig:
    rows = data.get("rows_per_chunk")
    rows = None if rows is None else int(rows)
    workers = int(data.get("max_workers", 1))
    if rows is not None and rows < 1:
        raise ConfigError(f"raster.rows_per_chunk must be >= 1 or null, got {rows}")
    if workers < 1:
        raise ConfigError(f"raster.max_workers must be >= 1, got {workers}")
    return RasterConfig(rows_per_chunk=rows, max_workers=workers)


def _parse_canvas(data: dict[str, Any]) -> CanvasConfig:
    width = float(data["width"])
    height = float(data["height"])
    undo_limit = int(data.get("undo_limit", 0))
    if width <= 0 or height <= 0:
        raise ConfigError(f"canvas size must be positive, got {width} x {height}")
    if undo_limit < 0:
        raise ConfigError(f"canvas.undo_limit must be >= 0, got {undo_limit}")
    return CanvasConfig(width=width, height=height, undo_limit=undo_limit)


def _parse_logging(data: dict[str, Any]) -> LoggingConfig:
    level = str(data.get("level", "INFO")).upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigError(f"logging.level {level!r} is not a logging level")
    file = data.get("file")
    return LoggingConfig(
        level=level,
        file=None if file is None else str(file),
        json=bool(data.get("json", False)),
        color=bool(data.get("color", True)),
    )


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to a config file.  ``None`` loads the bundled ``inkmark.yaml``.

    Returns
    -------
    AppConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.debug("Loading configuration from %s", path)

    data = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")

    try:
        return AppConfig(
            ink=_parse_ink(data["ink"]),
            shapes=_parse_shapes(data["shapes"]),
            raster=_parse_raster(data.get("raster", {})),
            canvas=_parse_canvas(data["canvas"]),
            logging=_parse_logging(data.get("logging", {})),
        )
    except KeyError as e:
        raise ConfigError(f"Missing required config key {e} in {path}") from e
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {path}: {e}") from e
