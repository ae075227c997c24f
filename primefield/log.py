"""Logger setup for primefield scripts.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached by whoever runs the program.
"""

from __future__ import annotations

import logging

from primefield.config import LOG_LEVEL


def setup_basic_logger(name: str = "primefield", level: int | str | None = None) -> logging.Logger:
    """Return a logger configured with a StreamHandler and a compact formatter."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(LOG_LEVEL if level is None else level)
    ch = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    return logger
