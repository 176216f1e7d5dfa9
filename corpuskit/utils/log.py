"""
Logging setup shared by scripts and notebooks using corpuskit.

Library modules only call logging.getLogger(__name__); handlers are
installed here, once, by the application.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: Union[int, str] = logging.INFO,
                  console: Optional[Console] = None,
                  rich_tracebacks: bool = True) -> logging.Logger:
    """
    Route corpuskit logging through a Rich handler.

    Args:
        level: Logging level name or number
        console: Optional Rich console (defaults to stderr)
        rich_tracebacks: Render exceptions with Rich

    Returns:
        The "corpuskit" package logger
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level!r}")
        level = resolved

    handler = RichHandler(
        rich_tracebacks=rich_tracebacks,
        console=console or Console(stderr=True),
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger("corpuskit")
    for old in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
