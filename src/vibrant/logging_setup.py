"""
Logging setup for palette extraction runs.

Console output is colored by level. With a log directory, runs also write a
plain text log and a JSON-lines log carrying the extraction fields that
:func:`vibrant.palette.extract_swatches` attaches to its records.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[41m",
}


class ColoredConsoleFormatter(logging.Formatter):
    """Prefixes each console line with an ANSI-colored level tag."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno, "")
        return f"{color}{record.levelname:8s}\033[0m {super().format(record)}"


class JSONFormatter(logging.Formatter):
    """Writes one JSON object per record.

    Extraction records carry ``image``, ``max_colors``, ``pixels`` and
    ``swatches``; they are copied into the entry when present.
    """

    EXTRA_FIELDS = ("image", "max_colors", "pixels", "swatches")

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key)) for key in self.EXTRA_FIELDS if hasattr(record, key)
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    log_dir: str | Path | None = None,
    level: int | str = logging.INFO,
    name: str = "vibrant",
    console: bool = True,
    file: bool = True,
    json_file: bool = True,
) -> logging.Logger:
    """Configure the ``vibrant`` logger, replacing any previous handlers.

    Args:
        log_dir: Directory for ``vibrant.log`` and ``vibrant.jsonl``. If None,
            only the console handler is installed.
        level: Console level, as an int or a name such as ``"DEBUG"``. File
            handlers always record everything.
        name: Logger name.
        console: Enable the stderr handler.
        file: Enable the text file handler.
        json_file: Enable the JSON-lines handler.

    Returns:
        Configured logger.
    """
    level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if log_dir else level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handlers: list[tuple[logging.Handler, int, logging.Formatter]] = []
    if console:
        # stderr keeps stdout clean for --json output
        handlers.append((
            logging.StreamHandler(sys.stderr),
            level,
            ColoredConsoleFormatter("%(asctime)s %(name)s: %(message)s", datefmt="%H:%M:%S"),
        ))

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        if file:
            handlers.append((
                logging.FileHandler(log_dir / "vibrant.log"),
                logging.DEBUG,
                logging.Formatter("%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"),
            ))
        if json_file:
            handlers.append((
                logging.FileHandler(log_dir / "vibrant.jsonl"),
                logging.DEBUG,
                JSONFormatter(),
            ))

    for handler, handler_level, formatter in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
