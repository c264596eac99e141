"""Logging utilities (simple wrapper)."""

from __future__ import annotations
import logging
from typing import Optional

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger("ytsearch_cli")
        handler = logging.StreamHandler()
        fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(message)s")
        handler.setFormatter(fmt)
        logger.addHandler(handler)
        _LOGGER = logger
        set_verbose(False)
    return _LOGGER


def set_verbose(verbose: bool) -> None:
    logger = get_logger()
    # Tables and boxes go to stdout; keep stderr quiet unless asked
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    # yt-dlp failures are re-raised and rendered by the command layer
    logger.getChild("yt_dlp").setLevel(logging.DEBUG if verbose else logging.CRITICAL)
