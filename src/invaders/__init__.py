"""
Invaders: a single-screen arcade shooter.
"""

from invaders.exceptions import (
    InvadersError,
    InvalidElapsedTime,
    InvalidSettings,
    InvalidWorldState,
)
from invaders.geometry import intersects
from invaders.simulation import Intent, World, create_world, step
from invaders.state import GameState, GameStateMachine

__all__ = [
    "GameState",
    "GameStateMachine",
    "Intent",
    "InvadersError",
    "InvalidElapsedTime",
    "InvalidSettings",
    "InvalidWorldState",
    "World",
    "create_world",
    "intersects",
    "step",
]
