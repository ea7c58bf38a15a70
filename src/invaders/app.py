"""
Invaders game: pygame frame driver, input routing and screen management.
"""

from __future__ import annotations

import random
from typing import Any

import pygame

from invaders.config import GameSettings
from invaders.controls import TouchControls, keyboard_intent, merge_intents
from invaders.render import Renderer
from invaders.simulation import GameEvent, Intent
from invaders.state import GameState, GameStateMachine
from invaders.utils import configure_logging, logger


class InvaderGame:
    """
    Invader game
    """

    def __init__(self, settings: GameSettings):
        """
        :param settings: Window, renderer and gameplay settings
        :type settings: GameSettings
        """
        logger.debug(f"Initializing {settings.window.title}")
        self.settings = settings
        self._carry_on = True
        self._restart_clock = True

        self.machine = GameStateMachine(rng=random.Random(settings.game.seed))
        self.machine.subscribe(self._on_round_end)
        self.touch = TouchControls()

        pygame.init()
        self._clock = pygame.time.Clock()
        self._screen = self._set_screen()
        self._renderer = Renderer(self.touch, settings.renderer.background_color)

    def _set_screen(self) -> pygame.Surface:
        """
        Set the screen

        :return: pygame.Surface
        :rtype: pygame.Surface
        """
        logger.debug("Setting screen")
        window = self.settings.window
        flags = pygame.RESIZABLE if window.resizable else 0
        screen = pygame.display.set_mode((window.width, window.height), flags)
        pygame.display.set_caption(window.title)
        return screen

    def start_round(self):
        self.touch.release_all()
        self.machine.start_round()
        # the first frame of a round is simulated with no elapsed time
        self._restart_clock = True

    def _on_round_end(self, state: GameState, event: GameEvent):
        self.touch.release_all()
        if state is GameState.GAME_CLEAR:
            logger.info(f"You won! Final score {self.machine.world.score}")
        else:
            logger.info(f"You lost! Final score {self.machine.world.score} ({event})")

    def _logical_pos(self, pos: tuple[float, float]) -> tuple[float, float]:
        return self._renderer.viewport.to_logical(pos)

    def _press(self, pointer, pos: tuple[float, float]):
        pos = self._logical_pos(pos)
        if self.machine.state is not GameState.PLAYING:
            x, y = pos
            if self._renderer.screen.button_rect.collidepoint(int(x), int(y)):
                self.start_round()
            return
        self.touch.press(pointer, pos)

    def handle_events(self):
        """
        Handle the events
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.debug("Quitting the game")
                self._carry_on = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._carry_on = False
                elif (
                    event.key in (pygame.K_RETURN, pygame.K_KP_ENTER)
                    and self.machine.state is not GameState.PLAYING
                ):
                    self.start_round()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._press("mouse", event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.touch.release("mouse")
            elif event.type == pygame.FINGERDOWN:
                w, h = self._screen.get_size()
                self._press(("finger", event.finger_id), (event.x * w, event.y * h))
            elif event.type == pygame.FINGERUP:
                self.touch.release(("finger", event.finger_id))
            elif event.type == pygame.WINDOWFOCUSLOST:
                self.touch.release_all()

    def current_intent(self) -> Intent:
        return merge_intents(
            keyboard_intent(pygame.key.get_pressed()), self.touch.intent
        )

    def handle_game_logic(self, elapsed_ms: float):
        """
        Advance the round by one frame
        """
        self.machine.tick(self.current_intent(), elapsed_ms)

    def draw_stuff(self):
        """
        Draw the stuff
        """
        self._renderer.render(self._screen, self.machine.snapshot())

    def run(self):
        """
        Run the game
        """
        logger.debug("Running the game")
        fps = self.settings.game.fps

        try:
            while self._carry_on:
                elapsed = self._clock.tick(fps)
                self.handle_events()
                if self._restart_clock:
                    elapsed = 0
                    self._restart_clock = False

                self.handle_game_logic(elapsed)
                self.draw_stuff()
        except Exception:
            logger.exception("Game loop crashed")
            raise
        finally:
            pygame.quit()


def run(settings_data: dict[str, Any] | None = None):
    """
    Main entry point for Invaders.

    - Builds the settings from a plain dictionary (defaults when omitted).
    - Configures logging from the settings.
    - Opens the window on the start screen and runs the game loop.
    """
    settings = GameSettings.from_dict(settings_data)
    configure_logging(settings.logging.level)

    logger.info("Starting Invaders...")
    logger.info(settings.to_dict())
    InvaderGame(settings).run()


if __name__ == "__main__":
    run()
