"""Logging setup for the abbr2markup command line.

Only the ``abbr2markup`` package logger is configured, so applications that
embed the library keep full control of the root logger. Library modules log
through ``logging.getLogger(__name__)`` and never add handlers themselves.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "abbr2markup"

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")
    return level


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send abbr2markup log records to stderr and optionally a file.

    Calling this again replaces (and closes) the handlers installed by the
    previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"WARNING"``
    log_file : str, optional
        File that receives the same records, opened for appending
    trace_mode : bool, default False
        Include timestamps and logger names, e.g. to follow stage timings

    Returns
    -------
    logging.Logger
        The configured ``abbr2markup`` logger

    Raises
    ------
    ValueError
        If ``log_level`` is not a known level name

    """
    level = _resolve_level(log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if trace_mode:
        formatter = logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(_PLAIN_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if file_error is not None:
        package_logger.warning("Could not open log file %s: %s", log_file, file_error)
    return package_logger
