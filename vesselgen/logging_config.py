"""
Logging for the 'vesselgen' namespace.

Library modules only create loggers; `setup_logging` is called once by the CLI.
Diagnostics go to stderr so that command output on stdout stays clean.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# chatty at DEBUG, only their warnings are relevant here
_QUIET_LOGGERS = ("trimesh", "matplotlib")


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the 'vesselgen' logger.

    Args:
        level: level for vesselgen messages (logging.DEBUG with `vesselgen -v`)
        log_file: optional path; receives the same records as stderr

    Returns:
        The configured 'vesselgen' logger. Calling again replaces its handlers.
    """
    logger = logging.getLogger("vesselgen")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger
