"""
Invaders utils
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger("invaders")


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Configure the root handler used by the game.

    :param level: Logging level name or number
    :type level: int | str
    """
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.setLevel(level)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value between low and high bounds"""
    return low if value < low else high if value > high else value


def is_finite_number(value) -> bool:
    """True for int/float values that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
