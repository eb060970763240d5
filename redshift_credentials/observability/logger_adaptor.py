"""Logger adaptor that forwards to loguru.

All modules log through :func:`get_logger`; :func:`configure_logging` installs
the single stderr sink used by the command line tool.
"""

import logging
import sys
from typing import Any, Optional

from loguru import logger as _loguru_logger

from redshift_credentials.constants import LOG_LEVEL

_loggers: dict = {}

LEVEL_ALIASES = {
    "warn": "WARNING",
    "notice": "SUCCESS",
    "fatal": "CRITICAL",
}


class AdaptedLogger:
    """Minimal logger that forwards to loguru. Same .info/.error/.warning/.debug/.exception API."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._log = _loguru_logger.bind(logger_name=name)

    @property
    def name(self) -> str:
        return self._name

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.info(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.warning(msg, *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.debug(msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.exception(msg, *args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.critical(msg, *args, **kwargs)


# Add a Loguru handler for the Python logging system
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = _loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _loguru_logger.opt(depth=depth, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _format_record(record: Any) -> str:
    return "<level>[" + record["level"].name.lower() + "]</level> {message}\n{exception}"


def normalize_level(level: str) -> str:
    """Map a command line level name (``debug``, ``warn``...) to a loguru level."""
    return LEVEL_ALIASES.get(level.lower(), level.upper())


def configure_logging(level: Optional[str] = None, sink: Any = None) -> int:
    """Replace loguru handlers with a single colored sink.

    Args:
        level: Minimum level to emit. Defaults to the ``LOG_LEVEL`` env var.
        sink: Destination for records. Defaults to stderr so that stdout only
            carries the rendered credentials.

    Returns:
        int: The loguru handler id.
    """
    _loguru_logger.remove()
    _loguru_logger.level("DEBUG", color="<light-black>")
    handler_id = _loguru_logger.add(
        sink if sink is not None else sys.stderr,
        level=normalize_level(level or LOG_LEVEL),
        format=_format_record,
        colorize=None,
    )
    # botocore and urllib3 log through the standard library
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.WARNING, force=True)
    return handler_id


def get_logger(name: Optional[str] = None) -> AdaptedLogger:
    if name is None:
        name = "redshift_credentials"
    if name not in _loggers:
        _loggers[name] = AdaptedLogger(name)
    return _loggers[name]


default_logger = get_logger()
