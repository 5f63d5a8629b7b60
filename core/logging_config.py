"""
Logging setup for the Pomodoro Timer application.
Installs a colored console handler on the root logger.
"""

import logging
from typing import Union

from colorlog import ColoredFormatter


LOG_FORMAT = (
    "%(green)s%(asctime)s%(reset)s [%(blue)s%(name)s%(reset)s] "
    "%(log_color)s%(levelname)s%(reset)s - %(message)s"
)

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def setup_logging(level: Union[str, int] = logging.WARNING) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        level: Level name ("INFO", "debug", ...) or logging constant.

    Returns:
        The configured root logger.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Avoid duplicate handlers when called twice
    if root_logger.handlers:
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColoredFormatter(
            LOG_FORMAT,
            datefmt="%H:%M:%S",
            log_colors=LOG_COLORS,
        )
    )
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).debug(
        "Logging initialized at %s", logging.getLevelName(level)
    )
    return root_logger
