"""Logging helpers.

Library modules only create loggers; handlers are attached by the CLI
through ``configure_logging``.
"""

import logging
import sys

ROOT_LOGGER = "openapi_helpers"
CONSOLE_HANDLER = "openapi_helpers.console"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a console handler writing to the current ``sys.stderr``.

    Calling it again replaces the handler instead of adding a second one.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Prevent duplicate handlers
    for h in list(logger.handlers):
        if h.get_name() == CONSOLE_HANDLER:
            logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(CONSOLE_HANDLER)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(handler)
    return logger
