"""Shared logger and console logging setup."""

import logging
import sys

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

logger = logging.getLogger("mongo-restore")


def log_success(message: str) -> None:
    """Log a line tagged with the SUCCESS level."""
    logger.log(SUCCESS, message)


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a stdout handler to the package logger.

    App-managed pattern: the package logger owns its handler and does not
    propagate, so repeated calls never duplicate output.
    """
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    formatter = logging.Formatter(
        '%(asctime)s - [%(name)s] - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
