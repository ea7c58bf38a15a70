"""
Constants for the game.
"""

from __future__ import annotations

FPS = 60
WINDOW_SIZE = (800, 600)

# Logical playfield; the window is scaled to fit it.
GAME_WIDTH = 800
GAME_HEIGHT = 600

STARTING_LIVES = 3
STARTING_LEVEL = 1

PLAYER_WIDTH = 50
PLAYER_HEIGHT = 40
PLAYER_SPEED = 5
PLAYER_BOTTOM_MARGIN = 60
SHOOT_COOLDOWN_MS = 300.0

INVADER_ROWS = 5
INVADER_COLS = 10
INVADER_WIDTH = 40
INVADER_HEIGHT = 30
INVADER_SPEED = 1
INVADER_START_X = 50
INVADER_START_Y = 50
INVADER_SPACING = 60
FAST_ROWS = 2

INVADER_STEP = 20
INVADER_DROP_DISTANCE = 20
INVADER_MOVE_INTERVAL_MS = 500.0
INVADER_SHOOT_INTERVAL_MS = 1000.0

BULLET_WIDTH = 4
BULLET_HEIGHT = 10
PLAYER_BULLET_SPEED = 8
ENEMY_BULLET_SPEED = 3

POINTS_NORMAL = 10
POINTS_FAST = 20
