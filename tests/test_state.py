"""
Tests for the round lifecycle.
"""

import dataclasses
import random
import unittest

from invaders.entities import Projectile
from invaders.simulation import (
    Intent,
    RoundCleared,
    RoundOver,
    RoundOverReason,
    create_world,
)
from invaders.state import GameState, GameStateMachine

NO_INPUT = Intent()


class TestStartRound(unittest.TestCase):

    def test_initial_state_is_start(self):
        machine = GameStateMachine()
        self.assertIs(machine.state, GameState.START)
        self.assertIsNone(machine.world)

    def test_tick_before_start_does_nothing(self):
        machine = GameStateMachine()
        self.assertEqual(machine.tick(Intent(fire=True), 16), [])
        self.assertIs(machine.state, GameState.START)
        self.assertIsNone(machine.world)

    def test_start_round_resets_everything(self):
        machine = GameStateMachine()
        machine.start_round()
        w = machine.world

        self.assertIs(machine.state, GameState.PLAYING)
        self.assertEqual((w.score, w.lives, w.level), (0, 3, 1))
        self.assertEqual(len(w.invaders), 50)
        self.assertTrue(all(i.alive for i in w.invaders))
        self.assertEqual((w.bullets, w.enemy_bullets), ([], []))
        self.assertEqual(w.direction, 1)
        self.assertEqual((w.move_timer, w.shoot_timer), (0, 0))

    def test_start_round_twice_is_identical(self):
        machine = GameStateMachine()
        machine.start_round()
        first = machine.world
        machine.start_round()
        self.assertEqual(machine.world, first)
        self.assertEqual(machine.world, create_world())

    def test_restart_after_game_over(self):
        machine = GameStateMachine()
        machine.start_round()
        machine.world.score = 40
        machine.world.invaders[40].y = 510
        machine.tick(NO_INPUT, 16)
        self.assertIs(machine.state, GameState.GAME_OVER)

        machine.start_round()

        self.assertIs(machine.state, GameState.PLAYING)
        self.assertEqual(machine.world.score, 0)
        self.assertIsNone(machine.last_outcome)


class TestTransitions(unittest.TestCase):

    def setUp(self):
        self.machine = GameStateMachine(rng=random.Random(0))
        self.calls = []
        self.machine.subscribe(lambda state, event: self.calls.append((state, event)))
        self.machine.start_round()

    def test_playing_self_loop(self):
        for _ in range(10):
            self.machine.tick(NO_INPUT, 16)
        self.assertIs(self.machine.state, GameState.PLAYING)
        self.assertEqual(self.calls, [])

    def test_scenario_c_last_life_is_game_over(self):
        self.machine.world.lives = 1
        self.machine.world.enemy_bullets.append(Projectile(x=400, y=550, speed=3))

        self.machine.tick(NO_INPUT, 16)

        self.assertEqual(self.machine.world.lives, 0)
        self.assertIs(self.machine.state, GameState.GAME_OVER)
        expected = RoundOver(RoundOverReason.LIVES_EXHAUSTED, 0)
        self.assertEqual(self.calls, [(GameState.GAME_OVER, expected)])
        self.assertEqual(self.machine.last_outcome, expected)

    def test_scenario_d_cleared_formation_is_game_clear(self):
        for invader in self.machine.world.invaders:
            invader.alive = False

        self.machine.tick(NO_INPUT, 16)

        self.assertIs(self.machine.state, GameState.GAME_CLEAR)
        self.assertEqual(self.calls, [(GameState.GAME_CLEAR, RoundCleared(0))])

    def test_notification_is_sent_once(self):
        self.machine.world.invaders[40].y = 510
        self.machine.tick(NO_INPUT, 16)
        # further frames are not simulated once the round is over
        self.assertEqual(self.machine.tick(NO_INPUT, 16), [])
        self.assertEqual(self.machine.tick(NO_INPUT, 16), [])

        self.assertEqual(len(self.calls), 1)
        self.assertIs(self.machine.state, GameState.GAME_OVER)

    def test_terminal_states(self):
        self.assertFalse(GameState.START.terminal)
        self.assertFalse(GameState.PLAYING.terminal)
        self.assertTrue(GameState.GAME_OVER.terminal)
        self.assertTrue(GameState.GAME_CLEAR.terminal)

    def test_unsubscribe(self):
        other = []
        unsubscribe = self.machine.subscribe(lambda s, e: other.append(s))
        unsubscribe()
        self.machine.world.invaders[40].y = 510
        self.machine.tick(NO_INPUT, 16)
        self.assertEqual(other, [])
        self.assertEqual(len(self.calls), 1)

    def test_unsubscribe_twice_is_harmless(self):
        unsubscribe = self.machine.subscribe(lambda s, e: None)
        unsubscribe()
        unsubscribe()
        self.machine.world.invaders[40].y = 510
        self.machine.tick(NO_INPUT, 16)
        self.assertEqual(len(self.calls), 1)

    def test_lives_never_negative_over_a_long_round(self):
        while self.machine.state is GameState.PLAYING:
            self.machine.tick(NO_INPUT, 16)
            self.assertGreaterEqual(self.machine.world.lives, 0)
            if self.machine.world.lives == 0:
                self.assertIs(self.machine.state, GameState.GAME_OVER)
        self.assertEqual(len(self.calls), 1)


class TestSnapshot(unittest.TestCase):

    def test_snapshot_before_start(self):
        snapshot = GameStateMachine().snapshot()
        self.assertIs(snapshot.state, GameState.START)
        self.assertIsNone(snapshot.player)
        self.assertEqual(snapshot.invaders, ())
        self.assertEqual((snapshot.score, snapshot.lives, snapshot.level), (0, 3, 1))

    def test_snapshot_contents(self):
        machine = GameStateMachine()
        machine.start_round()
        machine.tick(Intent(fire=True), 16)

        snapshot = machine.snapshot()

        self.assertIs(snapshot.state, GameState.PLAYING)
        self.assertEqual(len(snapshot.invaders), 50)
        self.assertEqual(len(snapshot.bullets), 1)
        self.assertEqual(snapshot.enemy_bullets, ())
        self.assertEqual((snapshot.score, snapshot.lives, snapshot.level), (0, 3, 1))

    def test_snapshot_is_detached_from_world(self):
        machine = GameStateMachine()
        machine.start_round()
        snapshot = machine.snapshot()

        snapshot.player.x = 0
        snapshot.invaders[0].alive = False

        self.assertEqual(machine.world.player.x, 375)
        self.assertTrue(machine.world.invaders[0].alive)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            snapshot.score = 100


if __name__ == "__main__":
    unittest.main()
