#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2term/logging_utils.py
"""Logging setup for the md2term command line.

Log records always go to stderr so they never mix with rendered Markdown on
stdout. Two layouts exist: the default ``LEVEL: message`` and, with
``--trace``, timestamped records that carry the logger name. Log files
always use the trace layout.

"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries md2term drives; their records only show up in trace mode
LIBRARY_LOGGERS = ("mistune", "rich")


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name such as ``"info"`` into its numeric value.

    Raises
    ------
    ValueError
        If the name is not a standard logging level

    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")
    return level


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for the CLI.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO"). Ignored in
        trace mode, which always logs at DEBUG.
    log_file : str, optional
        Path to a log file that receives a copy of every record.
    trace_mode : bool, default False
        Log everything, including library loggers, with timestamps and
        logger names.

    Returns
    -------
    logging.Logger
        The ``md2term`` package logger.

    """
    resolved_level = logging.DEBUG if trace_mode else resolve_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    trace_formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(trace_formatter if trace_mode else logging.Formatter(PLAIN_FORMAT))
    root_logger.addHandler(console_handler)

    library_level = resolved_level if trace_mode else max(resolved_level, logging.WARNING)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    package_logger = logging.getLogger("md2term")
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(trace_formatter)
            root_logger.addHandler(file_handler)
            package_logger.info("Logging to file: %s", log_file)

    return package_logger
