"""Helpers for parsing the simple logging settings file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

_LEVEL_MAP: dict[str, int | None] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": None,
}

_LEVEL_KEYS = ("terminal", "file")
_DEFAULT_LEVELS: dict[str, str] = {"terminal": "info", "file": "off"}
_DEFAULT_RETENTION_HOURS = 48


@dataclass(frozen=True)
class LoggingSettings:
    terminal_level: int | None
    file_level: int | None
    retention_hours: int


def _resolve_level(key: str, value: str) -> int | None:
    normalized = value.strip().lower()
    if normalized in _LEVEL_MAP:
        return _LEVEL_MAP[normalized]
    return _LEVEL_MAP[_DEFAULT_LEVELS[key]]


def parse_logging_settings(path: Path) -> LoggingSettings:
    """Parse the human-readable logging settings file.

    Lines look like ``terminal = debug``; ``#`` starts a comment. Unknown
    keys are ignored and unknown levels fall back to the key's default.
    """

    levels: dict[str, int | None] = {
        key: _LEVEL_MAP[_DEFAULT_LEVELS[key]] for key in _LEVEL_KEYS
    }
    retention_hours = _DEFAULT_RETENTION_HOURS

    if path.exists():
        for raw_line in path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = (part.strip() for part in line.split("=", 1))
            normalized_key = key.lower()
            if normalized_key == "retention_hours":
                try:
                    retention_hours = max(0, int(value))
                except ValueError:
                    retention_hours = _DEFAULT_RETENTION_HOURS
            elif normalized_key in _LEVEL_KEYS:
                levels[normalized_key] = _resolve_level(normalized_key, value)

    return LoggingSettings(
        terminal_level=levels["terminal"],
        file_level=levels["file"],
        retention_hours=retention_hours,
    )


__all__ = ["LoggingSettings", "parse_logging_settings"]
