"""Unified logging configuration for the CLI and embedding applications.

Provides consistent logging for every inkmark entrypoint:
    - Console and file handlers, file rotation by size or time
    - JSON line output for log shippers
    - Contextual fields (app, command, shape, image) carried per context
    - Warning capture (Python warnings → logging)

Public API:
    setup_logging(**app_cfg.logging, context={"app": "inkmark"})
    get_logger(name)
    push_context(command="threshold")
    pop_context(keys=["command"])

Format examples:
    Human: 2026-03-02T09:14:55.120Z | INFO     | app=inkmark command=shape | Generated star
    JSON: {"t":"2026-03-02T09:14:55.120000+00:00","lvl":"INFO","name":"inkmark.cli","msg":"..."}

Library modules only call ``logging.getLogger(__name__)`` and never configure
handlers themselves; configuration belongs to the application.
Idempotent: repeated setup_logging() calls replace, not duplicate, handlers.
"""

import contextvars
import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_context_var = contextvars.ContextVar('inkmark_log_context', default={})

_configured = False

_LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}
_RESET = '\033[0m'


class ContextFormatter(logging.Formatter):
    """Formatter that appends contextual fields from push_context().

    Parameters
    ----------
    fmt_mode : str
        "human" (default) or "json"
    use_color : bool
        Colorize the level name; ignored unless stderr is a TTY
    """

    def __init__(self, fmt_mode: str = "human", use_color: bool = True):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)

        if self.fmt_mode == "json":
            payload = {
                't': ts.isoformat(),
                'lvl': record.levelname,
                'name': record.name,
                'msg': record.getMessage(),
            }
            payload.update(context)
            if record.exc_info:
                payload['exc'] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"

        parts = [ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z', '|', level, '|']
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()))
            parts.append('|')
        parts.append(record.getMessage())

        line = ' '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "INFO",
    file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger (idempotent).

    Parameters
    ----------
    level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    file : str, optional
        Log file path; None disables file logging
    json : bool
        Write the file handler in JSON lines, default False
    color : bool
        ANSI colors on the console handler, default True
    to_stderr : bool
        Attach a console handler on stderr, default True
    rotate : dict, optional
        - {"mode": "size", "max_bytes": 10_000_000, "backup_count": 3}
        - {"mode": "time", "when": "D", "interval": 1, "backup_count": 7}
    capture_warnings : bool
        Route Python warnings into logging, default True
    quiet_libs : list[str], optional
        Loggers pinned to WARNING (e.g. ["PIL"])
    context : dict, optional
        Initial contextual fields

    Returns
    -------
    list[logging.Handler]
        Handlers attached to the root logger.

    Raises
    ------
    ValueError
        If ``level`` is not a logging level name.

    Examples
    --------
    >>> setup_logging(level="DEBUG", file="logs/inkmark.log",
    ...               rotate={"mode": "size", "max_bytes": 1_000_000},
    ...               context={"app": "inkmark"})
    """
    global _configured

    levelno = logging.getLevelName(level.upper())
    if not isinstance(levelno, int):
        raise ValueError(f"Unknown log level: {level}")

    root = logging.getLogger()
    if _configured:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

    root.setLevel(levelno)

    handlers: List[logging.Handler] = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", use_color=color))
        handlers.append(console)

    if file:
        handlers.append(_create_file_handler(file, rotate, json))

    for handler in handlers:
        root.addHandler(handler)

    if context:
        push_context(**context)

    for lib in quiet_libs or ():
        logging.getLogger(lib).setLevel(logging.WARNING)

    if capture_warnings:
        logging.captureWarnings(True)

    _configured = True
    return handlers


def _create_file_handler(
    file: str,
    rotate: Optional[Dict[str, Any]],
    json_format: bool,
) -> logging.Handler:
    """File handler with optional rotation; parent directories are created."""
    path = Path(file)
    path.parent.mkdir(parents=True, exist_ok=True)

    if rotate:
        mode = rotate.get('mode', 'size')
        if mode == 'size':
            handler = logging.handlers.RotatingFileHandler(
                path,
                maxBytes=rotate.get('max_bytes', 10_000_000),
                backupCount=rotate.get('backup_count', 3),
            )
        elif mode == 'time':
            handler = logging.handlers.TimedRotatingFileHandler(
                path,
                when=rotate.get('when', 'D'),
                interval=rotate.get('interval', 1),
                backupCount=rotate.get('backup_count', 7),
            )
        else:
            raise ValueError(f"Unknown rotation mode: {mode}. Use 'size' or 'time'.")
    else:
        handler = logging.FileHandler(path)

    handler.setFormatter(
        ContextFormatter("json" if json_format else "human", use_color=False)
    )
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the named logger (typically ``__name__``)."""
    return logging.getLogger(name)


def push_context(**kwargs) -> None:
    """Add contextual fields to all subsequent records in this context.

    Examples
    --------
    >>> push_context(app="inkmark")
    >>> push_context(command="shape", shape="star")
    """
    _context_var.set({**_context_var.get(), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; None clears all of them."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get())
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)