#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Root logging setup for the docxcompare command line.

Library modules only create loggers. Handlers are installed here, once per
run, by :func:`docxcompare.cli.main`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(log_level: str, log_file: Optional[str] = None, trace_mode: bool = False) -> logging.Logger:
    """Replace the root logger's handlers with a stderr handler and optional log file.

    Parameters
    ----------
    log_level : str
        Level name, case-insensitive (e.g. "debug", "WARNING")
    log_file : str, optional
        File to append log records to, in addition to stderr
    trace_mode : bool, default False
        Add timestamps and logger names to every record

    Returns
    -------
    logging.Logger
        The root logger

    Raises
    ------
    ValueError
        If ``log_level`` is not a standard level name

    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            file_error = e

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    # Reported only once the console handler is in place
    if file_error is not None:
        root.warning("Could not open log file %s: %s", log_file, file_error)
    elif log_file:
        root.info("Logging to file: %s", log_file)
    return root
