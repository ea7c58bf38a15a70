"""
Axis-aligned rectangle collision.
"""

from __future__ import annotations

from typing import Protocol


class Rect(Protocol):
    """Anything with a position and a size."""

    x: float
    y: float
    width: float
    height: float


def intersects(a: Rect, b: Rect) -> bool:
    """
    Return True if the two rectangles overlap.

    Edges are open: rectangles that only share a border do not intersect.

    :param a: First rectangle
    :type a: Rect

    :param b: Second rectangle
    :type b: Rect

    :return: bool
    """
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )
