"""Logging setup for the govspeak-paste command.

Only the ``govspeak_paste`` logger hierarchy is configured. Handlers a host
application installed on the root logger are left alone, and records from
this package are not passed on to them while the command's handlers are in
place.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "govspeak_paste"

_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_PLAIN_FORMAT = "%(levelname)s: %(message)s"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send ``govspeak_paste`` log records to stderr and, optionally, a file.

    Calling this again replaces (and closes) the handlers installed by the
    previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"INFO"``. Unknown
        names fall back to WARNING.
    log_file : str, optional
        Path of a file that receives the same records, appended to.
    trace_mode : bool, default False
        Prefix records with a timestamp and the emitting logger's name.

    Returns
    -------
    logging.Logger
        The configured package logger.

    """
    level = _resolve_level(log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.setLevel(level)
    package_logger.propagate = False

    formatter = logging.Formatter(
        _TRACE_FORMAT if trace_mode else _PLAIN_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            package_logger.debug("Logging to file: %s", log_file)

    return package_logger
