"""
Logging configuration for the sync pipeline.
"""

import logging
import sys

# Create logger
logger = logging.getLogger('indie_sync')
logger.setLevel(logging.INFO)

# Console handler with formatting
console = logging.StreamHandler(sys.stdout)
console.setLevel(logging.DEBUG)

formatter = logging.Formatter(
    '%(asctime)s | %(levelname)-5s | %(name)s | %(message)s',
    datefmt='%H:%M:%S'
)
console.setFormatter(formatter)

logger.addHandler(console)


def set_level(level: str):
    """Set the package log level by name (DEBUG, INFO, ...)."""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


# Component-specific loggers
def get_logger(name):
    """Get a child logger for a specific component."""
    return logger.getChild(name)
