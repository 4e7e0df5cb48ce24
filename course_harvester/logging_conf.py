"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any

import structlog

APP_LOGGER = "course_harvester"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# File handlers below the console: (handler name, file name, minimum level)
LOG_FILES = (
    ("harvester_file", "harvester.log", "INFO"),
    ("error_file", "error.log", "ERROR"),
)

_LOGGING_INITIALISED = False


def _file_handler(path: Path, level: str) -> dict[str, Any]:
    return {
        "class": "logging.FileHandler",
        "level": level,
        "filename": str(path),
        "formatter": "json",
        "encoding": "utf-8",
    }


def build_logging_config(log_dir: Path, verbose: bool = False) -> dict[str, Any]:
    """Return the ``dictConfig`` mapping for the harvester loggers.

    Everything is JSON. The console handler writes to stderr so stdout
    carries only progress lines and summaries.
    """

    level = "DEBUG" if verbose else "INFO"
    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "json",
            "stream": "ext://sys.stderr",
        }
    }
    for name, filename, file_level in LOG_FILES:
        handlers[name] = _file_handler(log_dir / filename, file_level)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "fmt": LOG_FORMAT,
            }
        },
        "handlers": handlers,
        "loggers": {
            APP_LOGGER: {
                "handlers": list(handlers),
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(verbose: bool = False, log_dir: Path | None = None) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers once and return the application logger.

    Later calls only adjust the level, so ``--verbose`` still takes effect.
    """

    global _LOGGING_INITIALISED
    if _LOGGING_INITIALISED:
        logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)
        return structlog.get_logger(APP_LOGGER)

    log_dir = log_dir or Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(log_dir, verbose))
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _LOGGING_INITIALISED = True
    return structlog.get_logger(APP_LOGGER)


__all__ = ["build_logging_config", "configure_logging"]
