"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Geometry value types and aspect sizing (geometry)
    - Atomic I/O and YAML handling (fs)
    - Drawing file schema validation (validators)
    - Unified logging (logging_config)
    - Wall-clock timing (profiler)

No module in utils/ may import from upper layers (ink, raster, media, canvas).

Convenience imports:
    from inkmark.utils import fs, geometry, validators
    from inkmark.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import geometry
from . import logging_config
from . import profiler
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'geometry',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
