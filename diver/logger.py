"""Lightweight leveled logging wrapper.

Every module grabs a named logger through ``get_logger``. The minimum level
comes from the ``DIVER_LOG_LEVEL`` environment variable (default INFO);
``DIVER_LOG_LEVELS`` overrides it per logger, e.g.
``DIVER_LOG_LEVELS="physics=DEBUG,rig=WARN"`` to trace collisions without
the rest of the per-step chatter.
"""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass
from typing import Dict, TextIO

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
_DEFAULT_LEVEL_NAME = os.environ.get("DIVER_LOG_LEVEL", "INFO").upper()
_MIN_LEVEL = _LEVELS.get(_DEFAULT_LEVEL_NAME, 20)


def parse_level_overrides(text: str) -> Dict[str, int]:
    """``"name=LEVEL,..."`` to ``{name: level}``; unknown levels and malformed items are skipped."""
    overrides = {}
    for item in text.split(","):
        name, sep, level = item.partition("=")
        level = level.strip().upper()
        if sep and name.strip() and level in _LEVELS:
            overrides[name.strip()] = _LEVELS[level]
    return overrides


_OVERRIDES = parse_level_overrides(os.environ.get("DIVER_LOG_LEVELS", ""))


@dataclass
class Logger:
    name: str
    stream: TextIO | None = sys.stdout
    min_level: int = _MIN_LEVEL

    def enabled(self, level: str) -> bool:
        return self.stream is not None and _LEVELS[level] >= self.min_level

    def _log(self, level: str, *parts):
        if not self.enabled(level):
            return
        ts = time.strftime("%H:%M:%S")
        msg = " ".join(str(p) for p in parts)
        line = f"[{ts}] {level:<5} {self.name}: {msg}\n"
        try:
            self.stream.write(line)
            self.stream.flush()
        except (OSError, ValueError):
            # Detached or closed stream (pythonw, torn-down test capture).
            return

    def debug(self, *parts):
        self._log("DEBUG", *parts)

    def info(self, *parts):
        self._log("INFO", *parts)

    def warn(self, *parts):
        self._log("WARN", *parts)

    def error(self, *parts):
        self._log("ERROR", *parts)


def get_logger(name: str = "diver", overrides: Dict[str, int] | None = None) -> Logger:
    overrides = _OVERRIDES if overrides is None else overrides
    return Logger(name, min_level=overrides.get(name, _MIN_LEVEL))


__all__ = ["get_logger", "parse_level_overrides", "Logger"]
