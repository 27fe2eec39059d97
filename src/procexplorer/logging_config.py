"""
Logging configuration for procexplorer.

Records are routed through Textual's handler so they appear in the devtools
console (``textual console``) instead of being written over the UI.
"""

import logging

from textual.logging import TextualHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING") -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Unknown names
            fall back to WARNING.
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    handler = TextualHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.basicConfig(level=log_level, handlers=[handler], force=True)
