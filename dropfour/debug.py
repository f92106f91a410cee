"""
debug.py - Logging for the dropfour rules engine

The grid, the match controller, the environment adapter and the console host all log
through the shared ``debug`` instance. Messages carry a component tag ("grid", "match",
"env", "cli") which can be used to narrow the output to one part of the engine.
"""

import logging
import sys
import time
from enum import Enum
from typing import Dict, Iterable, Optional, Set


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# TRACE has no logging counterpart and is emitted at DEBUG with a prefix
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 1,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}

LOGGER_NAME = "dropfour"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Level, component and file settings in front of a ``logging`` logger."""

    def __init__(self, logger_name: str = LOGGER_NAME):
        self._level = DebugLevel.WARNING
        self._enabled = True
        self._components: Set[str] = set()  # empty means every component
        self._timers: Dict[str, float] = {}

        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(LEVEL_MAP[self._level])
        if not any(getattr(h, "_dropfour_console", False) for h in self._logger.handlers):
            console = logging.StreamHandler(sys.stdout)
            console._dropfour_console = True
            console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            self._logger.addHandler(console)

    @property
    def level(self) -> DebugLevel:
        return self._level

    def configure(self, level: Optional[DebugLevel] = None,
                  enabled: Optional[bool] = None,
                  log_file: Optional[str] = None,
                  components: Optional[Iterable[str]] = None):
        """
        Change any subset of the settings.

        Args:
            level: Most verbose level that is still emitted
            enabled: Master switch for all output
            log_file: Path to append log lines to; an empty string stops file logging
            components: Component tags to let through; empty lets everything through
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            self._replace_file_handler(log_file)

        if components is not None:
            self._components = set(components)

    def _replace_file_handler(self, log_file: str) -> None:
        for handler in self._logger.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                self._logger.removeHandler(handler)
                handler.close()

        if log_file:
            handler = logging.FileHandler(log_file)
            handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
            self._logger.addHandler(handler)

    def _should_log(self, level: DebugLevel, component: Optional[str]) -> bool:
        if not self._enabled or level == DebugLevel.NONE or level.value > self._level.value:
            return False
        return not (component and self._components and component not in self._components)

    def log(self, level: DebugLevel, message: str, component: Optional[str] = None):
        if not self._should_log(level, component):
            return

        if component:
            message = f"[{component}] {message}"
        if level == DebugLevel.TRACE:
            message = f"TRACE: {message}"
        self._logger.log(LEVEL_MAP[level], message)

    def error(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, marker_name: str):
        self._timers[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: Optional[str] = None) -> Optional[float]:
        """
        Stop a timer started with start_timer() and trace the elapsed time.

        Returns:
            Elapsed seconds, or None if the marker was never started
        """
        started = self._timers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.trace(f"{marker_name} took {elapsed:.6f}s", component)
        return elapsed

    def set_from_string(self, level_str: str) -> bool:
        """Set the level by name, as given on the command line."""
        try:
            level = DebugLevel[level_str.upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return False

        self.configure(level=level)
        self.debug(f"Debug level set to {level.name}")
        return True


# Shared instance used across the package
debug = DebugManager()
