from __future__ import annotations

import logging
import os
from typing import Union


def setup_logging(level: Union[str, int, None] = None) -> None:
    """Configure basic logging with a consistent format.

    If ``level`` is None the ``LOG_LEVEL`` environment variable is consulted, defaulting to ``WARNING`` so that
    retry notices stay out of the progress output unless asked for.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
