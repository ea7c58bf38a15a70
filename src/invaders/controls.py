"""
Input provider: keyboard and on-screen touch buttons.
"""

from __future__ import annotations

from typing import Hashable

import pygame

from invaders.constants import GAME_HEIGHT, GAME_WIDTH
from invaders.simulation import Intent

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
FIRE_KEYS = (pygame.K_SPACE,)

ACTIONS = ("left", "right", "fire")


def keyboard_intent(pressed) -> Intent:
    """
    Build an intent from the pressed-keys table.

    :param pressed: Result of ``pygame.key.get_pressed()`` or any mapping
        from key code to bool
    """
    return Intent(
        move_left=any(pressed[k] for k in LEFT_KEYS),
        move_right=any(pressed[k] for k in RIGHT_KEYS),
        fire=any(pressed[k] for k in FIRE_KEYS),
    )


def merge_intents(*intents: Intent) -> Intent:
    return Intent(
        move_left=any(i.move_left for i in intents),
        move_right=any(i.move_right for i in intents),
        fire=any(i.fire for i in intents),
    )


class TouchControls:
    """
    Three on-screen buttons (left, right, fire) held down by mouse or finger.

    Button rects are in playfield coordinates; callers convert pointer
    positions before passing them in. Each pointer holds at most one button.
    """

    def __init__(
        self,
        width: float = GAME_WIDTH,
        height: float = GAME_HEIGHT,
        size: int = 64,
        margin: int = 12,
    ):
        top = int(height - size - margin)
        self.buttons: dict[str, pygame.Rect] = {
            "left": pygame.Rect(margin, top, size, size),
            "right": pygame.Rect(margin * 2 + size, top, size, size),
            "fire": pygame.Rect(int(width - size - margin), top, size, size),
        }
        self._held: dict[Hashable, str] = {}

    def button_at(self, pos: tuple[float, float]) -> str | None:
        x, y = pos
        for action, rect in self.buttons.items():
            if rect.collidepoint(int(x), int(y)):
                return action
        return None

    def press(self, pointer: Hashable, pos: tuple[float, float]):
        action = self.button_at(pos)
        if action is not None:
            self._held[pointer] = action

    def release(self, pointer: Hashable):
        self._held.pop(pointer, None)

    def release_all(self):
        self._held.clear()

    def is_held(self, action: str) -> bool:
        return action in self._held.values()

    @property
    def intent(self) -> Intent:
        return Intent(
            move_left=self.is_held("left"),
            move_right=self.is_held("right"),
            fire=self.is_held("fire"),
        )
