# tilepath/logging_config.py
"""
Logging setup for applications that embed tilepath.

The library itself only logs through module loggers ("tilepath.core.engine"
reports unresolved positions at WARNING, "tilepath.core.astar" reports every
search outcome at DEBUG). A game or tool that wants to see those lines on
stdout calls configure_logging() once at startup; TILEPATH_LOG_LEVEL picks
the level when none is passed.
"""

import logging
import sys
from typing import Optional

from tilepath.config import resolve_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Optional[int] = None) -> None:
    """Attach a stdout handler to the root logger unless one is already set up."""
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(resolve_settings().log_level if level is None else level)
