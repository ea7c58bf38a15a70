"""
Pygame presentation of a game snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass

import pygame

from invaders.constants import GAME_HEIGHT, GAME_WIDTH
from invaders.controls import TouchControls
from invaders.entities import InvaderType
from invaders.state import GameState, Snapshot

PLAYER_COLOR = (0, 255, 0)
COCKPIT_COLOR = (255, 255, 255)
FAST_COLOR = (255, 0, 0)
NORMAL_COLOR = (255, 255, 0)
EYE_COLOR = (0, 0, 0)
BULLET_COLOR = (0, 255, 0)
ENEMY_BULLET_COLOR = (255, 0, 0)
HUD_COLOR = (220, 220, 220)
BUTTON_COLOR = (60, 60, 60)
BUTTON_HELD_COLOR = (120, 120, 120)
OVERLAY_COLOR = (0, 0, 0, 180)


@dataclass
class Viewport:
    """
    Fits the logical playfield into the window, keeping the aspect ratio.
    """

    width: float = GAME_WIDTH
    height: float = GAME_HEIGHT
    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def fit(self, window_size: tuple[int, int]):
        win_w, win_h = window_size
        if win_w <= 0 or win_h <= 0:
            # minimized window, keep the last usable scale
            return
        self.scale = min(win_w / self.width, win_h / self.height)
        self.offset_x = (win_w - self.width * self.scale) / 2
        self.offset_y = (win_h - self.height * self.scale) / 2

    @property
    def size(self) -> tuple[int, int]:
        return (
            max(1, round(self.width * self.scale)),
            max(1, round(self.height * self.scale)),
        )

    def to_logical(self, pos: tuple[float, float]) -> tuple[float, float]:
        """Convert a window position to playfield coordinates."""
        x, y = pos
        return (
            (x - self.offset_x) / self.scale,
            (y - self.offset_y) / self.scale,
        )


class Drawable:
    """Draws part of a snapshot onto the playfield surface."""

    def draw(self, surface: pygame.Surface, snapshot: Snapshot):
        raise NotImplementedError("Subclasses must implement this method")


class DrawPlayer(Drawable):
    def draw(self, surface: pygame.Surface, snapshot: Snapshot):
        p = snapshot.player
        if p is None:
            return
        pygame.draw.rect(
            surface, PLAYER_COLOR, pygame.Rect(int(p.x), int(p.y), p.width, p.height)
        )
        # cockpit
        pygame.draw.rect(
            surface, COCKPIT_COLOR, pygame.Rect(int(p.x) + 20, int(p.y) - 5, 10, 5)
        )


class DrawInvaders(Drawable):
    def draw(self, surface: pygame.Surface, snapshot: Snapshot):
        for a in snapshot.invaders:
            if not a.alive:
                continue
            x, y = int(a.x), int(a.y)
            color = FAST_COLOR if a.type is InvaderType.FAST else NORMAL_COLOR
            pygame.draw.rect(surface, color, pygame.Rect(x, y, a.width, a.height))
            pygame.draw.rect(surface, EYE_COLOR, pygame.Rect(x + 8, y + 8, 4, 4))
            pygame.draw.rect(surface, EYE_COLOR, pygame.Rect(x + 28, y + 8, 4, 4))


class DrawBullets(Drawable):
    def draw(self, surface: pygame.Surface, snapshot: Snapshot):
        for b in snapshot.bullets:
            pygame.draw.rect(
                surface, BULLET_COLOR, pygame.Rect(int(b.x), int(b.y), b.width, b.height)
            )
        for b in snapshot.enemy_bullets:
            pygame.draw.rect(
                surface,
                ENEMY_BULLET_COLOR,
                pygame.Rect(int(b.x), int(b.y), b.width, b.height),
            )


class DrawHud(Drawable):
    def __init__(self, font: pygame.font.Font):
        self.font = font

    def draw(self, surface: pygame.Surface, snapshot: Snapshot):
        score = self.font.render(f"Score: {snapshot.score}", True, HUD_COLOR)
        lives = self.font.render(f"Lives: {snapshot.lives}", True, HUD_COLOR)
        surface.blit(score, (12, 8))
        surface.blit(lives, (surface.get_width() - lives.get_width() - 12, 8))


class DrawTouchControls(Drawable):
    labels = {"left": "<", "right": ">", "fire": "FIRE"}

    def __init__(self, controls: TouchControls, font: pygame.font.Font):
        self.controls = controls
        self.font = font

    def draw(self, surface: pygame.Surface, snapshot: Snapshot):
        for action, rect in self.controls.buttons.items():
            color = BUTTON_HELD_COLOR if self.controls.is_held(action) else BUTTON_COLOR
            pygame.draw.rect(surface, color, rect, border_radius=8)
            label = self.font.render(self.labels[action], True, HUD_COLOR)
            surface.blit(label, label.get_rect(center=rect.center))


@dataclass
class Screen:
    """
    Overlay shown outside of ``PLAYING`` with one clickable button.
    """

    title: str
    button: str
    show_score: bool = False


SCREENS = {
    GameState.START: Screen("INVADERS", "Start"),
    GameState.GAME_OVER: Screen("GAME OVER", "Restart", show_score=True),
    GameState.GAME_CLEAR: Screen("GAME CLEAR!", "Next stage", show_score=True),
}


class DrawScreen(Drawable):
    def __init__(self, title_font: pygame.font.Font, font: pygame.font.Font):
        self.title_font = title_font
        self.font = font
        self.button_rect = pygame.Rect(0, 0, 200, 50)
        self.button_rect.center = (GAME_WIDTH // 2, GAME_HEIGHT // 2 + 60)

    def draw(self, surface: pygame.Surface, snapshot: Snapshot):
        screen = SCREENS.get(snapshot.state)
        if screen is None:
            return

        shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        shade.fill(OVERLAY_COLOR)
        surface.blit(shade, (0, 0))

        cx, cy = surface.get_width() // 2, surface.get_height() // 2
        title = self.title_font.render(screen.title, True, HUD_COLOR)
        surface.blit(title, title.get_rect(center=(cx, cy - 60)))

        if screen.show_score:
            score = self.font.render(f"Score: {snapshot.score}", True, HUD_COLOR)
            surface.blit(score, score.get_rect(center=(cx, cy)))

        pygame.draw.rect(surface, BUTTON_COLOR, self.button_rect, border_radius=8)
        label = self.font.render(screen.button, True, HUD_COLOR)
        surface.blit(label, label.get_rect(center=self.button_rect.center))


class Renderer:
    """
    Draws snapshots onto a logical surface and scales it to the window.
    """

    def __init__(
        self,
        controls: TouchControls,
        background_color: tuple[int, int, int] = (0, 0, 0),
    ):
        self.background_color = background_color
        self.viewport = Viewport()
        self.surface = pygame.Surface((GAME_WIDTH, GAME_HEIGHT))

        font = pygame.font.Font(None, 32)
        title_font = pygame.font.Font(None, 72)
        self.screen = DrawScreen(title_font, font)
        self.draw_ops: list[Drawable] = [
            DrawPlayer(),
            DrawInvaders(),
            DrawBullets(),
            DrawHud(font),
            DrawTouchControls(controls, font),
            self.screen,
        ]

    def render(self, window: pygame.Surface, snapshot: Snapshot):
        self.surface.fill(self.background_color)
        for op in self.draw_ops:
            op.draw(self.surface, snapshot)

        self.viewport.fit(window.get_size())
        window.fill((0, 0, 0))
        window.blit(
            pygame.transform.scale(self.surface, self.viewport.size),
            (int(self.viewport.offset_x), int(self.viewport.offset_y)),
        )
        pygame.display.flip()
