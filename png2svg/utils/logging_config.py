"""Logging setup shared by the png2svg CLI and library callers.

One call to setup_logging() installs:
    - a stderr console handler (human lines, ANSI level colors on a tty)
    - an optional log file, plain or size-rotated, as human lines or JSON lines

Every record carries the fields pushed with push_context(). The CLI pushes
app=png2svg once; batch conversion pushes file=<input> around each image,
so a batch log reads:

    2026-10-18T13:45:12.345Z | INFO     | app=png2svg file=a.png | 16x16 image, 240 opaque pixels
    {"t": "2026-10-18T13:45:12.345000+00:00", "lvl": "INFO", "logger": "png2svg.vectorizer.convert", "app": "png2svg", "file": "a.png", "msg": "..."}

Timestamps are UTC. Calling setup_logging() again replaces the handlers it
installed before instead of stacking new ones.
"""

import contextvars
import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


_fields: contextvars.ContextVar = contextvars.ContextVar('png2svg_log_fields', default={})

# Owned by setup_logging; foreign handlers on the root logger are left alone
_handlers: List[logging.Handler] = []

_LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}
_RESET = '\033[0m'


class ContextFormatter(logging.Formatter):
    """Render records with the current context fields.

    Parameters
    ----------
    json_lines : bool
        One JSON object per record instead of the ``|``-separated line
    color : bool
        Color the level name; ignored unless stderr is a terminal
    """

    def __init__(self, json_lines: bool = False, color: bool = False):
        super().__init__()
        self.json_lines = json_lines
        self.color = color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created, tz=timezone.utc)
        fields = _fields.get()

        if self.json_lines:
            entry: Dict[str, Any] = {
                't': when.isoformat(),
                'lvl': record.levelname,
                'logger': record.name,
            }
            entry.update(fields)
            entry['msg'] = record.getMessage()
            if record.exc_info:
                entry['exc'] = self.formatException(record.exc_info)
            return json.dumps(entry)

        level = f"{record.levelname:8s}"
        if self.color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"

        stamp = when.strftime('%Y-%m-%dT%H:%M:%S.') + f"{when.microsecond // 1000:03d}Z"
        columns = [stamp, level]
        if fields:
            columns.append(' '.join(f"{k}={v}" for k, v in fields.items()))
        columns.append(record.getMessage())

        text = ' | '.join(columns)
        if record.exc_info:
            text += '\n' + self.formatException(record.exc_info)
        return text


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    max_bytes: int = 0,
    backup_count: int = 3,
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Configure the root logger for a conversion run.

    Parameters
    ----------
    log_level : str
        "DEBUG" shows per-image progress; "INFO" shows sizes and totals
    log_file : str, optional
        Also append records to this file; parent directories are created
    json : bool
        Write the log file as JSON lines (console stays human-readable)
    color : bool
        Color level names on the console
    to_stderr : bool
        Install the console handler
    max_bytes : int
        Rotate the log file when it reaches this size; 0 never rotates
    backup_count : int
        Rotated files kept next to the log file
    capture_warnings : bool
        Route ``warnings.warn`` through logging
    quiet_libs : list[str], optional
        Logger names capped at WARNING (e.g. ``["PIL"]``)
    context : dict, optional
        Fields pushed before returning (e.g. ``{"app": "png2svg"}``)

    Returns
    -------
    dict
        ``{"handlers": [...]}``, the handlers now installed

    Raises
    ------
    ValueError
        If log_level is not a logging level name
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root = logging.getLogger()
    while _handlers:
        old = _handlers.pop()
        root.removeHandler(old)
        old.close()
    root.setLevel(level)

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter(color=color))
        _handlers.append(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        if max_bytes > 0:
            sink = logging.handlers.RotatingFileHandler(
                log_file, maxBytes=max_bytes, backupCount=backup_count
            )
        else:
            sink = logging.FileHandler(log_file)
        sink.setFormatter(ContextFormatter(json_lines=json))
        _handlers.append(sink)

    for handler in _handlers:
        root.addHandler(handler)

    for lib in quiet_libs or []:
        logging.getLogger(lib).setLevel(logging.WARNING)

    if capture_warnings:
        route_warnings()

    if context:
        push_context(**context)

    return {'handlers': list(_handlers)}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def push_context(**fields) -> None:
    """Attach fields to every following record in this context.

    >>> push_context(file="sprites/hero.png")
    """
    _fields.set({**_fields.get(), **fields})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Drop the named context fields, or all of them when keys is None."""
    if keys is None:
        _fields.set({})
        return
    _fields.set({k: v for k, v in _fields.get().items() if k not in keys})


def route_warnings() -> None:
    """Send ``warnings.warn`` output to the ``py.warnings`` logger."""
    logging.captureWarnings(True)
    logging.getLogger('py.warnings').setLevel(logging.WARNING)
