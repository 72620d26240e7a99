"""Configuration loading and validation."""

from inkmark.configs.loader import (
    AppConfig,
    CanvasConfig,
    ConfigError,
    InkConfig,
    LoggingConfig,
    RasterConfig,
    ShapeConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "CanvasConfig",
    "ConfigError",
    "InkConfig",
    "LoggingConfig",
    "RasterConfig",
    "ShapeConfig",
    "load_config",
]
