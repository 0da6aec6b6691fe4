"""
Logging configuration for carfinder.

One stdout handler on the "carfinder" logger, level taken from LOG_LEVEL.
"""
import logging
import sys

from carfinder.config import LOG_LEVEL

logger = logging.getLogger("carfinder")
logger.setLevel(LOG_LEVEL)

if not logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(console_handler)

logger.propagate = False


def get_logger(name: str | None = None) -> logging.Logger:
    """Child logger under 'carfinder' (e.g. get_logger("tools") -> carfinder.tools)."""
    if name:
        return logging.getLogger(f"carfinder.{name}")
    return logger
