"""Logging helpers for mygit."""

from __future__ import annotations

import logging
import os

from mygit.constants import LOG_LEVEL_ENV


def configure_logging(level: int | None = None) -> None:
    """Configure default logging if no handlers are present.

    Without an explicit level, ``MYGIT_LOG_LEVEL`` is consulted and the
    default is WARNING, so library DEBUG records stay quiet.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    if level is None:
        name = (os.getenv(LOG_LEVEL_ENV) or "WARNING").strip().upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler()],
    )
