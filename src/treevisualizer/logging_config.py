"""
Logging Configuration
Sets up the 'treevisualizer' logger namespace for the application.

The level can be given explicitly or through the TREEVISUALIZER_LOG_LEVEL
environment variable (e.g. TREEVISUALIZER_LOG_LEVEL=DEBUG).
"""
import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "TREEVISUALIZER_LOG_LEVEL"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def level_from_env(default: int = logging.INFO) -> int:
    """Resolve a level name from the environment, ignoring unknown names."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler (and optionally a file handler) to the package logger.

    Args:
        level: Logging level; defaults to the environment setting, then INFO.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = level_from_env()

    logger = logging.getLogger("treevisualizer")
    logger.setLevel(level)

    # Re-running setup must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized at level {logging.getLevelName(level)}.")
    return logger
