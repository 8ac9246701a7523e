"""Logging setup for the quote tool.

Log records go to stderr or to a rotating log file, never to stdout,
so that a quote printed on stdout stays valid JSON.
"""
from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

# Logging defaults
DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMATTER = "%(asctime)s: %(levelname)s: %(module)s::%(funcName)s: %(message)s"
DEFAULT_LOG_DATETIME = "%y-%m-%d %H:%M:%S"
DEFAULT_LOG_MAXBYTES = int(2e6)  # 2MB


def setup_logging(
    log_filename: str | None = None,
    log_level: int | None = None,
    max_bytes: int | None = None,
) -> None:
    r"""Replace the root logger's handlers with a single stderr or file handler.

    Arguments
    ---------
    log_filename: str, optional
        Path and name of the log file. When None, records are written to stderr.
    log_level: int, optional
        Log level to track. Defaults to DEFAULT_LOG_LEVEL.
    max_bytes: int, optional
        Maximum size of the log file in bytes before it rotates. Defaults to DEFAULT_LOG_MAXBYTES.
    """
    if log_level is None:
        log_level = DEFAULT_LOG_LEVEL
    root_logger = logging.getLogger()
    remove_handlers(root_logger)
    if log_filename is None:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    else:
        log_dir, log_name = prepare_log_path(log_filename)
        if max_bytes is None:
            max_bytes = DEFAULT_LOG_MAXBYTES
        handler = RotatingFileHandler(os.path.join(log_dir, log_name), mode="w", maxBytes=max_bytes)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMATTER, DEFAULT_LOG_DATETIME))
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def prepare_log_path(log_filename: str) -> tuple[str, str]:
    """Split filename into path and name. Postpend ".log" extension if necessary. Make dir if necessary.

    Arguments
    ---------
    log_filename: str
        Path and name of the log file.

    Returns
    -------
    tuple[str, str]
        The directory and the file name of the log file.
    """
    log_dir, log_name = os.path.split(log_filename)
    if not log_name.endswith(".log"):
        log_name += ".log"
    if log_dir == "":
        log_dir = os.path.join(os.getcwd(), ".logging")
    os.makedirs(log_dir, exist_ok=True)
    return log_dir, log_name


def remove_handlers(logger: logging.Logger) -> None:
    """Remove and close all handlers on the logger."""
    while logger.handlers:
        handler = logger.handlers[0]
        logger.removeHandler(handler)
        handler.close()
