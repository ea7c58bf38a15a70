"""
Invaders entities
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from invaders.constants import (
    BULLET_HEIGHT,
    BULLET_WIDTH,
    ENEMY_BULLET_SPEED,
    FAST_ROWS,
    GAME_HEIGHT,
    GAME_WIDTH,
    INVADER_COLS,
    INVADER_HEIGHT,
    INVADER_ROWS,
    INVADER_SPACING,
    INVADER_SPEED,
    INVADER_START_X,
    INVADER_START_Y,
    INVADER_WIDTH,
    PLAYER_BOTTOM_MARGIN,
    PLAYER_BULLET_SPEED,
    PLAYER_HEIGHT,
    PLAYER_SPEED,
    PLAYER_WIDTH,
    POINTS_FAST,
    POINTS_NORMAL,
)


class InvaderType(str, Enum):
    NORMAL = "normal"
    FAST = "fast"

    @property
    def points(self) -> int:
        return POINTS_FAST if self is InvaderType.FAST else POINTS_NORMAL


@dataclass
class Player:
    """
    Player ship
    """

    x: float
    y: float
    width: float = PLAYER_WIDTH
    height: float = PLAYER_HEIGHT
    speed: float = PLAYER_SPEED
    shoot_cooldown: float = 0.0  # ms, counts down

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass
class Invader:
    """
    Invader entity
    """

    x: float
    y: float
    width: float = INVADER_WIDTH
    height: float = INVADER_HEIGHT
    speed: float = INVADER_SPEED
    alive: bool = True
    type: InvaderType = InvaderType.NORMAL
    row: int = 0
    col: int = 0

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Projectile:
    """
    Bullet entity; negative speed moves up, positive moves down.
    """

    x: float
    y: float
    speed: float
    width: float = BULLET_WIDTH
    height: float = BULLET_HEIGHT

    def advance(self):
        self.y += self.speed


def create_player(
    width: float = GAME_WIDTH, height: float = GAME_HEIGHT
) -> Player:
    """
    Player centred at the bottom of the playfield.

    :param width: Playfield width
    :type width: float

    :param height: Playfield height
    :type height: float

    :return: Player
    """
    return Player(x=width / 2 - PLAYER_WIDTH / 2, y=height - PLAYER_BOTTOM_MARGIN)


def create_invaders() -> list[Invader]:
    """
    Fresh formation in grid order (row by row, left to right).

    :return: list[Invader]
    """
    invaders: list[Invader] = []
    for row in range(INVADER_ROWS):
        invader_type = InvaderType.FAST if row < FAST_ROWS else InvaderType.NORMAL
        for col in range(INVADER_COLS):
            invaders.append(
                Invader(
                    x=INVADER_START_X + col * INVADER_SPACING,
                    y=INVADER_START_Y + row * INVADER_SPACING,
                    type=invader_type,
                    row=row,
                    col=col,
                )
            )
    return invaders


def player_bullet(player: Player) -> Projectile:
    # spawn at the top-center of the ship
    return Projectile(
        x=player.center_x - BULLET_WIDTH / 2,
        y=player.y,
        speed=-PLAYER_BULLET_SPEED,
    )


def enemy_bullet(shooter: Invader) -> Projectile:
    # spawn at the bottom-center of the invader
    return Projectile(
        x=shooter.center_x - BULLET_WIDTH / 2,
        y=shooter.bottom,
        speed=ENEMY_BULLET_SPEED,
    )
