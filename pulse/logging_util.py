"""
Logging helpers shared by every Content Pulse module.
"""

import logging
import sys

from pulse.config import DEBUG

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: int | None = None) -> logging.Logger:
    """
    Set up a logger with consistent formatting.

    Args:
        name: Name of the logger (typically __name__ from the calling module).
        level: Logging level. Defaults to DEBUG when the DEBUG env flag is set, else INFO.

    Returns:
        Configured logger instance.
    """
    if level is None:
        level = logging.DEBUG if DEBUG else logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding handlers multiple times
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(console_handler)

    return logger


def set_level(level: int) -> None:
    """Change the level of every logger created under the pulse namespace."""
    for name, logger in logging.root.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (name == "pulse" or name.startswith("pulse.")):
            logger.setLevel(level)
