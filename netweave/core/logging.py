"""Logging setup for the command line.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed by the CLI.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


LOG_FORMAT = "%(message)s"


def setup_logging(debug: bool = False, console: Console | None = None) -> logging.Logger:
    """Route the ``netweave`` loggers to a rich handler."""

    logger = logging.getLogger("netweave")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=debug,
        rich_tracebacks=debug,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
