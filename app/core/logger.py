"""
Logging configuration for the institute backend.
One console handler on the root logger; modules log through logging.getLogger(__name__).
"""
import logging
import sys
from typing import Union


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Configure the root logger with a single stdout handler.

    Args:
        level: Logging level name or number (default: INFO)

    Returns:
        The configured root logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Remove handlers installed by an earlier call to avoid duplicate lines
    for handler in list(root.handlers):
        if getattr(handler, "_institute_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._institute_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    return root
