# ==============================================================================
# GEOASSETS - LOGGING
# ==============================================================================
# Single place that configures the "geoassets" logger hierarchy.
#
# Modules log through logging.getLogger(__name__); applications call
# get_logger() once at startup to attach a console handler.
# ==============================================================================

import logging
import sys


LOGGER_NAME = "geoassets"
LOG_FORMAT = "[%(levelname)s] %(message)s"


def get_logger(name: str = LOGGER_NAME, debug: bool = False) -> logging.Logger:
    """
    Return the package logger, attaching a stdout handler on first use.

    Args:
        name:  Logger name (children of "geoassets" inherit the handler)
        debug: Lower the level to DEBUG
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
