"""
Invaders frame simulation.

One frame is a pipeline of small systems ordered by ``order``; each one reads
and mutates the round state held by the tick context:

- ``PlayerSystem`` moves the ship and spawns player bullets
- ``BulletMoveSystem`` advances and culls player bullets
- ``InvaderSystem`` marches the formation and picks a shooter
- ``EnemyBulletMoveSystem`` advances and culls enemy bullets
- ``BulletInvaderCollisionSystem``, ``BulletPlayerCollisionSystem`` and
  ``InvasionSystem`` resolve hits in that priority
- ``ClearSystem`` ends the round once the formation is gone

Every system is disabled once the round has ended, so a frame emits at most
one terminal event.
"""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol, Sequence

from mini_arcade_core.scenes.systems import SystemPhase, SystemPipeline

from invaders.constants import (
    GAME_HEIGHT,
    GAME_WIDTH,
    INVADER_DROP_DISTANCE,
    INVADER_MOVE_INTERVAL_MS,
    INVADER_SHOOT_INTERVAL_MS,
    INVADER_STEP,
    SHOOT_COOLDOWN_MS,
    STARTING_LEVEL,
    STARTING_LIVES,
)
from invaders.entities import (
    Invader,
    Player,
    Projectile,
    create_invaders,
    create_player,
    enemy_bullet,
    player_bullet,
)
from invaders.exceptions import InvalidElapsedTime, InvalidWorldState
from invaders.geometry import intersects
from invaders.utils import clamp, is_finite_number, logger


@dataclass
class World:
    """
    Round state: everything that survives from one frame to the next.
    """

    width: float
    height: float
    player: Player
    invaders: list[Invader] = field(default_factory=list)
    bullets: list[Projectile] = field(default_factory=list)
    enemy_bullets: list[Projectile] = field(default_factory=list)
    score: int = 0
    lives: int = STARTING_LIVES
    level: int = STARTING_LEVEL
    direction: int = 1  # 1 for right, -1 for left
    drop_distance: float = INVADER_DROP_DISTANCE
    move_timer: float = 0.0
    shoot_timer: float = 0.0

    @property
    def alive_invaders(self) -> list[Invader]:
        return [i for i in self.invaders if i.alive]


def create_world(width: float = GAME_WIDTH, height: float = GAME_HEIGHT) -> World:
    """
    Build the initial state of a round.

    :param width: Playfield width
    :type width: float

    :param height: Playfield height
    :type height: float

    :return: World
    """
    return World(
        width=width,
        height=height,
        player=create_player(width, height),
        invaders=create_invaders(),
    )


@dataclass(frozen=True)
class Intent:
    """
    Input snapshot for one frame.
    """

    move_left: bool = False
    move_right: bool = False
    fire: bool = False


class RoundOverReason(str, Enum):
    LIVES_EXHAUSTED = "lives_exhausted"
    INVASION = "invasion"


@dataclass(frozen=True)
class GameEvent:
    """Base class of everything a frame can report."""


@dataclass(frozen=True)
class PlayerFired(GameEvent):
    x: float
    y: float


@dataclass(frozen=True)
class InvaderFired(GameEvent):
    row: int
    col: int


@dataclass(frozen=True)
class ScoreChanged(GameEvent):
    points: int
    score: int


@dataclass(frozen=True)
class LifeLost(GameEvent):
    lives: int


@dataclass(frozen=True)
class RoundOver(GameEvent):
    reason: RoundOverReason
    score: int


@dataclass(frozen=True)
class RoundCleared(GameEvent):
    score: int


class RandomSource(Protocol):
    def choice(self, seq: Sequence): ...


@dataclass
class TickContext:
    """
    Per-frame context shared by the systems.
    """

    world: World
    intent: Intent
    dt: float  # ms
    rng: RandomSource
    events: list[GameEvent] = field(default_factory=list)
    outcome: GameEvent | None = None

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def emit(self, event: GameEvent):
        self.events.append(event)

    def end_round(self, event: GameEvent):
        """Record the terminal event; only the first one counts."""
        if self.outcome is not None:
            return
        self.outcome = event
        self.events.append(event)
        logger.debug(f"Round ended: {event}")


class RoundSystem:
    """
    Simulation-phase system that stops running once the round has ended.
    """

    phase = SystemPhase.SIMULATION

    def enabled(self, ctx: TickContext) -> bool:
        return not ctx.finished


@dataclass
class PlayerSystem(RoundSystem):
    """
    Move the ship from the intent, tick the gun cooldown and fire.
    """

    name: str = "invaders_player"
    order: int = 10

    cooldown: float = SHOOT_COOLDOWN_MS

    def step(self, ctx: TickContext):
        w = ctx.world
        player = w.player
        it = ctx.intent

        # left and right are independent, both apply when both are held
        if it.move_left:
            player.x -= player.speed
        if it.move_right:
            player.x += player.speed
        player.x = clamp(player.x, 0.0, w.width - player.width)

        if player.shoot_cooldown > 0:
            player.shoot_cooldown -= ctx.dt

        if it.fire and player.shoot_cooldown <= 0:
            bullet = player_bullet(player)
            w.bullets.append(bullet)
            player.shoot_cooldown = self.cooldown
            ctx.emit(PlayerFired(bullet.x, bullet.y))


@dataclass
class BulletMoveSystem(RoundSystem):
    """Moves player bullets up and drops those above the playfield."""

    name: str = "invaders_bullet_move"
    order: int = 20

    def step(self, ctx: TickContext):
        bullets = ctx.world.bullets
        for i in range(len(bullets) - 1, -1, -1):
            b = bullets[i]
            b.advance()
            if b.y + b.height < 0:
                del bullets[i]


@dataclass
class InvaderSystem(RoundSystem):
    """
    March the formation on a fixed tick:
    - If any alive invader touches the wall it is heading to -> reverse
      direction and drop everyone down (once per tick)
    - Move every alive invader one step sideways
    A second timer picks a random alive invader to shoot.
    """

    name: str = "invaders_formation"
    order: int = 30

    move_interval: float = INVADER_MOVE_INTERVAL_MS
    shoot_interval: float = INVADER_SHOOT_INTERVAL_MS
    step_x: float = INVADER_STEP

    def step(self, ctx: TickContext):
        w = ctx.world

        w.move_timer += ctx.dt
        if w.move_timer > self.move_interval:
            w.move_timer = 0.0
            self._march(w)

        w.shoot_timer += ctx.dt
        if w.shoot_timer > self.shoot_interval:
            w.shoot_timer = 0.0
            self._shoot(ctx)

    def _march(self, w: World):
        alive = w.alive_invaders

        if any(self._at_edge(w, a) for a in alive):
            w.direction *= -1
            for a in alive:
                a.y += w.drop_distance

        for a in alive:
            a.x += w.direction * self.step_x

    def _at_edge(self, w: World, a: Invader) -> bool:
        if w.direction == -1:
            return a.x <= 0
        return a.x >= w.width - a.width

    def _shoot(self, ctx: TickContext):
        alive = ctx.world.alive_invaders
        if not alive:
            return

        shooter = ctx.rng.choice(alive)
        ctx.world.enemy_bullets.append(enemy_bullet(shooter))
        ctx.emit(InvaderFired(shooter.row, shooter.col))
        logger.debug(f"Invader at row {shooter.row} col {shooter.col} fired.")


@dataclass
class EnemyBulletMoveSystem(RoundSystem):
    """Moves enemy bullets down and drops those below the playfield."""

    name: str = "invaders_enemy_bullet_move"
    order: int = 40

    def step(self, ctx: TickContext):
        bullets = ctx.world.enemy_bullets
        for i in range(len(bullets) - 1, -1, -1):
            b = bullets[i]
            b.advance()
            if b.y >= ctx.world.height:
                del bullets[i]


@dataclass
class BulletInvaderCollisionSystem(RoundSystem):
    """Kills the first invader (grid order) each player bullet touches."""

    name: str = "invaders_bullet_invader_collision"
    order: int = 50

    def step(self, ctx: TickContext):
        w = ctx.world
        bullets = w.bullets

        # newest first, so deleting index i never shifts unvisited bullets
        for i in range(len(bullets) - 1, -1, -1):
            bullet = bullets[i]
            for invader in w.invaders:
                if not invader.alive or not intersects(bullet, invader):
                    continue

                invader.alive = False
                del bullets[i]

                points = invader.type.points
                w.score += points
                ctx.emit(ScoreChanged(points, w.score))
                logger.debug(
                    f"Invader at row {invader.row} col {invader.col} destroyed, "
                    f"score {w.score}"
                )
                break


@dataclass
class BulletPlayerCollisionSystem(RoundSystem):
    """At most one enemy bullet hits the player per frame."""

    name: str = "invaders_bullet_player_collision"
    order: int = 51

    def step(self, ctx: TickContext):
        w = ctx.world
        bullets = w.enemy_bullets

        for i in range(len(bullets) - 1, -1, -1):
            if not intersects(bullets[i], w.player):
                continue

            del bullets[i]
            w.lives = max(0, w.lives - 1)
            ctx.emit(LifeLost(w.lives))
            logger.debug(f"Player hit, {w.lives} lives left")

            if w.lives == 0:
                ctx.end_round(RoundOver(RoundOverReason.LIVES_EXHAUSTED, w.score))
            break


@dataclass
class InvasionSystem(RoundSystem):
    """Game over once any invader reaches the player's row."""

    name: str = "invaders_invasion"
    order: int = 52

    def step(self, ctx: TickContext):
        w = ctx.world
        for invader in w.invaders:
            if invader.alive and invader.bottom >= w.player.y:
                ctx.end_round(RoundOver(RoundOverReason.INVASION, w.score))
                return


@dataclass
class ClearSystem(RoundSystem):
    name: str = "invaders_clear"
    order: int = 60

    def step(self, ctx: TickContext):
        if not any(i.alive for i in ctx.world.invaders):
            ctx.end_round(RoundCleared(ctx.world.score))


def default_systems() -> list[RoundSystem]:
    return [
        PlayerSystem(),
        BulletMoveSystem(),
        InvaderSystem(),
        EnemyBulletMoveSystem(),
        BulletInvaderCollisionSystem(),
        BulletPlayerCollisionSystem(),
        InvasionSystem(),
        ClearSystem(),
    ]


def build_pipeline(systems: Iterable | None = None) -> SystemPipeline:
    """
    Pipeline sorted by phase and order; the standard frame when no systems
    are given.
    """
    pipeline = SystemPipeline()
    pipeline.extend(default_systems() if systems is None else systems)
    return pipeline


_DEFAULT_PIPELINE = build_pipeline()


def _check_preconditions(world: World, elapsed_ms: float):
    if not is_finite_number(elapsed_ms) or elapsed_ms < 0:
        raise InvalidElapsedTime(
            f"elapsed_ms must be a finite number >= 0, got {elapsed_ms!r}"
        )
    positioned = [("player", world.player)]
    positioned += [("invader", i) for i in world.invaders if i.alive]
    positioned += [("bullet", b) for b in world.bullets]
    positioned += [("enemy bullet", b) for b in world.enemy_bullets]
    for kind, entity in positioned:
        if not (is_finite_number(entity.x) and is_finite_number(entity.y)):
            raise InvalidWorldState(
                f"{kind} position must be finite, got ({entity.x!r}, {entity.y!r})"
            )


def step(
    world: World,
    intent: Intent,
    elapsed_ms: float,
    rng: RandomSource | None = None,
    pipeline: SystemPipeline | None = None,
) -> tuple[World, list[GameEvent]]:
    """
    Advance a round by one frame.

    The given world is left untouched; the advanced copy is returned together
    with the events raised during the frame.

    :param world: Round state before the frame
    :type world: World

    :param intent: Input snapshot for the frame
    :type intent: Intent

    :param elapsed_ms: Time since the previous frame, in milliseconds
    :type elapsed_ms: float

    :param rng: Source used to pick the shooting invader
    :type rng: RandomSource | None

    :param pipeline: Systems to run, defaults to the standard frame
    :type pipeline: SystemPipeline | None

    :raise InvalidElapsedTime: If elapsed_ms is negative or not finite
    :raise InvalidWorldState: If any live entity position is not finite

    :return: tuple[World, list[GameEvent]]
    """
    _check_preconditions(world, elapsed_ms)

    ctx = TickContext(
        world=copy.deepcopy(world),
        intent=intent,
        dt=float(elapsed_ms),
        rng=rng if rng is not None else random,
    )
    (pipeline or _DEFAULT_PIPELINE).step(ctx)
    return ctx.world, ctx.events
