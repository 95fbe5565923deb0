"""
Logging Configuration for Future Terminal.

One root configuration for the whole process: an optional stderr handler,
an optional log file, a VERBOSE level between DEBUG and INFO, and a
formatter that writes either aligned text or JSON lines.

While curses owns the terminal, anything written to stdout/stderr would
tear the picture, so the dashboard runs with console output disabled and
only writes to a log file when one is requested.

Usage:
    import logging
    from futureterm.logging_config import setup_logging, log_verbose

    setup_logging(verbose=True, log_file="/tmp/futureterm.log", console=False)
    logger = logging.getLogger('futureterm.events')
    log_verbose(logger, "Producer started", tick_interval=0.016)
"""

import os
import sys
import json
import logging
import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any


VERBOSE = 15
logging.addLevelName(VERBOSE, 'VERBOSE')

_TRUTHY = ('1', 'true', 'yes', 'on')


class FeatureArea(Enum):
    """Which part of the program a log line comes from."""
    CORE = 'core'
    EVENTS = 'events'
    WIDGETS = 'widgets'
    STATS = 'stats'
    RENDER = 'render'


# Logger name segment -> area; anything unmatched is CORE
_AREA_BY_SEGMENT = {
    'events': FeatureArea.EVENTS,
    'keymap': FeatureArea.EVENTS,
    'widgets': FeatureArea.WIDGETS,
    'stats': FeatureArea.STATS,
    'tui': FeatureArea.RENDER,
}


@dataclass
class _LogSettings:
    verbose: bool = False
    log_file: Optional[str] = None
    console_enabled: bool = True
    json_format: bool = False
    initialized: bool = False


_settings = _LogSettings()
_settings_lock = threading.RLock()


# =============================================================================
# FORMATTER
# =============================================================================

class TerminalFormatter(logging.Formatter):
    """
    Text lines look like

        2026-01-01 12:00:00.016 INFO     [events]   Producer started | tick_interval=0.016

    Level names are coloured only when the target stream is a tty.
    """

    LEVEL_COLORS = {
        'DEBUG': '36',
        'VERBOSE': '94',
        'INFO': '32',
        'WARNING': '33;1',
        'ERROR': '31',
        'CRITICAL': '31;1',
    }

    def __init__(self, use_colors: bool = True, json_format: bool = False, stream=None):
        super().__init__()
        target = sys.stderr if stream is None else stream
        isatty = getattr(target, 'isatty', None)
        self.use_colors = bool(use_colors and isatty is not None and isatty())
        self.json_format = json_format

    @staticmethod
    def feature_for(logger_name: str) -> FeatureArea:
        """Map a logger name such as 'futureterm.tui.dashboard' to its area."""
        for segment in logger_name.split('.'):
            area = _AREA_BY_SEGMENT.get(segment)
            if area is not None:
                return area
        return FeatureArea.CORE

    def format(self, record: logging.LogRecord) -> str:
        extra = getattr(record, 'extra_data', None) or {}
        area = self.feature_for(record.name).value
        when = datetime.fromtimestamp(record.created)
        trace = self.formatException(record.exc_info) if record.exc_info else None

        if self.json_format:
            payload = {
                'timestamp': when.isoformat(),
                'level': record.levelname,
                'logger': record.name,
                'feature': area,
                'message': record.getMessage(),
            }
            if extra:
                payload['extra'] = extra
            if trace:
                payload['exception'] = trace
            return json.dumps(payload, default=str)

        level = f"{record.levelname:8}"
        if self.use_colors and record.levelname in self.LEVEL_COLORS:
            level = f"\033[{self.LEVEL_COLORS[record.levelname]}m{level}\033[0m"

        line = f"{when:%Y-%m-%d %H:%M:%S}.{when.microsecond // 1000:03d} {level} {'[' + area + ']':10} {record.getMessage()}"
        if extra:
            line += " | " + ", ".join(f"{key}={value}" for key, value in extra.items())
        if trace:
            line += "\n" + trace
        return line


# =============================================================================
# SETUP
# =============================================================================

def _make_handler(handler: logging.Handler, level: int, **formatter_args) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(TerminalFormatter(**formatter_args))
    return handler


def setup_logging(
    verbose: bool = False,
    log_file: Optional[str] = None,
    console: bool = True,
    json_format: bool = False,
) -> None:
    """
    Replace the root logger's handlers.

    Args:
        verbose: Log VERBOSE and above instead of INFO and above
        log_file: Also write to this file, creating its directory
        console: Write to stderr (disable while curses is active)
        json_format: One JSON object per line
    """
    level = VERBOSE if verbose else logging.INFO
    handlers = []
    if console:
        handlers.append(_make_handler(logging.StreamHandler(sys.stderr), level,
                                      json_format=json_format, stream=sys.stderr))
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_make_handler(logging.FileHandler(log_file), level,
                                      use_colors=False, json_format=json_format))
    if not handlers:
        # Keeps the "No handlers could be found" fallback off the terminal
        handlers.append(logging.NullHandler())

    with _settings_lock:
        root = logging.getLogger()
        for old in list(root.handlers):
            root.removeHandler(old)
            old.close()
        root.setLevel(level)
        for handler in handlers:
            root.addHandler(handler)

        _settings.verbose = verbose
        _settings.log_file = log_file
        _settings.console_enabled = console
        _settings.json_format = json_format
        _settings.initialized = True


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').strip().lower() in _TRUTHY


def configure_from_environment(
    console: bool = True,
    verbose: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure logging from FUTURETERM_VERBOSE, FUTURETERM_LOG_FILE and
    FUTURETERM_LOG_JSON. Explicit arguments win over the environment.
    """
    setup_logging(
        verbose=verbose or _env_flag('FUTURETERM_VERBOSE'),
        log_file=log_file or os.environ.get('FUTURETERM_LOG_FILE') or None,
        console=console,
        json_format=_env_flag('FUTURETERM_LOG_JSON'),
    )


def log_verbose(logger: logging.Logger, msg: str, **data: Any) -> None:
    """Log at VERBOSE level; keyword arguments end up after a '|'."""
    if logger.isEnabledFor(VERBOSE):
        logger.log(VERBOSE, msg, extra={'extra_data': data} if data else None)


def get_logging_state() -> Dict[str, Any]:
    """Snapshot of the current configuration."""
    with _settings_lock:
        return asdict(_settings)


__all__ = [
    'VERBOSE',
    'FeatureArea',
    'TerminalFormatter',
    'setup_logging',
    'configure_from_environment',
    'log_verbose',
    'get_logging_state',
]
