# hello_app/core/logger.py
"""
Central logging configuration for the hello service and its tooling.
"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str = "hello-app", level: str | None = None) -> logging.Logger:
    """
    Returns a configured logger instance.

    `level` should come from validated settings. Without it the logger
    keeps its current level, INFO on first use.
    """

    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level)
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    # Avoid duplicate logs
    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
