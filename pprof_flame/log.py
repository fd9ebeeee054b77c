"""
Logging setup for the command line and the MCP server.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "pprof_flame"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a stderr RichHandler to the package logger.

    PPROF_FLAME_LOG_LEVEL wins over `verbose` when set.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get("PPROF_FLAME_LOG_LEVEL")
    if env_level:
        level = logging.getLevelName(env_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger
