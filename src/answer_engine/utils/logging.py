"""
Logging for the Answer Engine.

Every module logs through a child of the `answer_engine` logger, so one
setup_logging call configures the whole package. Console output goes to
stderr to keep machine-readable stdout (e.g. `search --json`) clean.
Provider failures are logged at WARNING and never reach callers.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, MutableMapping

if TYPE_CHECKING:
    from answer_engine.config.settings import LoggingSettings


ROOT_LOGGER_NAME = "answer_engine"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _build_handlers(settings: "LoggingSettings | None") -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if settings is None or settings.log_to_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if settings is not None and settings.file_path is not None:
        path = Path(settings.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path,
                maxBytes=settings.max_file_size_mb * 1024 * 1024,
                backupCount=settings.backup_count,
                encoding="utf-8",
            )
        )

    return handlers


def setup_logging(
    settings: "LoggingSettings | None" = None,
    level: str | None = None,
) -> logging.Logger:
    """
    Attach handlers to the package logger.

    Only the first call has an effect until reset_logging() is called.

    Args:
        settings: Level, format and optional rotating file; console-only
            INFO logging when omitted
        level: Overrides the configured level (the CLI's --verbose)

    Returns:
        The `answer_engine` logger
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _configured:
        return root

    level_name = (level or (settings.level if settings else "INFO")).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    formatter = logging.Formatter(
        fmt=settings.format if settings else DEFAULT_FORMAT,
        datefmt=settings.date_format if settings else DEFAULT_DATE_FORMAT,
    )

    root.handlers.clear()
    for handler in _build_handlers(settings):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(numeric_level)
    root.propagate = False
    _configured = True
    return root


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Logger under the package root; pass `__name__`.

    Names outside the package are nested below it, so
    get_logger("tests") is `answer_engine.tests`.
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Close and detach all package handlers so setup_logging can run again."""
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
    _configured = False


class LoggerAdapter(logging.LoggerAdapter):
    """
    Appends `[key=value]` pairs to each message.

    >>> log = LoggerAdapter(get_logger(__name__), {"provider": "news"})
    >>> log.warning("Request failed")   # Request failed [provider=news]
    """

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        if not self.extra:
            return msg, kwargs
        tags = " ".join(f"[{key}={value}]" for key, value in self.extra.items())
        return f"{msg} {tags}", kwargs


def get_logger_with_context(name: str | None = None, **context: Any) -> LoggerAdapter:
    """get_logger() wrapped so every message carries `context`."""
    return LoggerAdapter(get_logger(name), context)
