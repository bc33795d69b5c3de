"""
Logging setup shared by all modules.
"""

import logging
import sys

from dayplan.core.config import get_settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a logger with the application's handler and level attached.

    Calling this repeatedly with the same name returns the same logger
    without stacking handlers.
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(get_settings().LOG_LEVEL.upper())
    return log


logger = setup_logger("dayplan")
