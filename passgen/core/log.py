from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVEL_CHOICES = ("debug", "info", "warning", "error", "critical")
DEFAULT_LOG_LEVEL = "warning"


def resolve_log_level(name: str) -> int:
    level = getattr(logging, name.strip().upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {name!r}")
    return level


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Route library log records to stderr for command-line use.

    Generated values are never logged; records only describe the request
    shape and any fallback path the engines took.
    """
    logging.basicConfig(
        level=resolve_log_level(level),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


__all__ = ["DEFAULT_LOG_LEVEL", "LOG_FORMAT", "LOG_LEVEL_CHOICES", "configure_logging", "resolve_log_level"]
