"""
Round lifecycle: start -> playing -> game over / game clear.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from invaders.constants import (
    GAME_HEIGHT,
    GAME_WIDTH,
    STARTING_LEVEL,
    STARTING_LIVES,
)
from invaders.entities import Invader, Player, Projectile
from invaders.simulation import (
    GameEvent,
    Intent,
    RandomSource,
    RoundCleared,
    RoundOver,
    SystemPipeline,
    World,
    create_world,
    step,
)
from invaders.utils import logger


class GameState(str, Enum):
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    GAME_CLEAR = "game_clear"

    @property
    def terminal(self) -> bool:
        return self in (GameState.GAME_OVER, GameState.GAME_CLEAR)


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only copy of what the presentation layer needs after a frame.
    """

    state: GameState
    player: Player | None
    invaders: tuple[Invader, ...]
    bullets: tuple[Projectile, ...]
    enemy_bullets: tuple[Projectile, ...]
    score: int
    lives: int
    level: int


Listener = Callable[[GameState, GameEvent], None]


class GameStateMachine:
    """
    Owns the current round and decides whether frames are simulated.

    Listeners are called once for every transition into ``GAME_OVER`` or
    ``GAME_CLEAR`` with the new state and the event that caused it.
    """

    def __init__(
        self,
        width: float = GAME_WIDTH,
        height: float = GAME_HEIGHT,
        rng: RandomSource | None = None,
        pipeline: SystemPipeline | None = None,
    ):
        self.width = width
        self.height = height
        self.rng = rng
        self.pipeline = pipeline
        self.state = GameState.START
        self.world: World | None = None
        self.last_outcome: GameEvent | None = None
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a round-end listener.

        :param listener: Called as listener(state, event)
        :type listener: Listener

        :return: Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start_round(self):
        """
        Reset score, lives and entities and enter ``PLAYING``.
        """
        self.world = create_world(self.width, self.height)
        self.last_outcome = None
        self.state = GameState.PLAYING
        logger.debug(
            f"Round started with {len(self.world.invaders)} invaders "
            f"and {self.world.lives} lives"
        )

    def tick(self, intent: Intent, elapsed_ms: float) -> list[GameEvent]:
        """
        Simulate one frame if a round is being played.

        :param intent: Input snapshot for the frame
        :type intent: Intent

        :param elapsed_ms: Time since the previous frame, in milliseconds
        :type elapsed_ms: float

        :return: Events raised during the frame, empty when not playing
        """
        if self.state is not GameState.PLAYING:
            return []

        self.world, events = step(
            self.world, intent, elapsed_ms, rng=self.rng, pipeline=self.pipeline
        )

        for event in events:
            if isinstance(event, RoundOver):
                self._finish(GameState.GAME_OVER, event)
            elif isinstance(event, RoundCleared):
                self._finish(GameState.GAME_CLEAR, event)
        return events

    def _finish(self, state: GameState, event: GameEvent):
        if self.state is not GameState.PLAYING:
            return
        self.state = state
        self.last_outcome = event
        logger.debug(f"Round finished: {state.value} ({event})")
        for listener in list(self._listeners):
            listener(state, event)

    def snapshot(self) -> Snapshot:
        w = self.world
        if w is None:
            return Snapshot(
                self.state, None, (), (), (), 0, STARTING_LIVES, STARTING_LEVEL
            )
        return Snapshot(
            state=self.state,
            player=replace(w.player),
            invaders=tuple(replace(i) for i in w.invaders),
            bullets=tuple(replace(b) for b in w.bullets),
            enemy_bullets=tuple(replace(b) for b in w.enemy_bullets),
            score=w.score,
            lives=w.lives,
            level=w.level,
        )
