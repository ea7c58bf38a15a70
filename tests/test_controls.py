"""
Tests for the input provider; no window is opened.
"""

import unittest
from collections import defaultdict

import pygame

from invaders.controls import TouchControls, keyboard_intent, merge_intents
from invaders.simulation import Intent


def pressed(*keys):
    table = defaultdict(bool)
    for key in keys:
        table[key] = True
    return table


class TestKeyboard(unittest.TestCase):

    def test_no_keys(self):
        self.assertEqual(keyboard_intent(pressed()), Intent())

    def test_arrows_and_space(self):
        intent = keyboard_intent(pressed(pygame.K_LEFT, pygame.K_RIGHT, pygame.K_SPACE))
        self.assertEqual(intent, Intent(move_left=True, move_right=True, fire=True))

    def test_alternative_movement_keys(self):
        self.assertTrue(keyboard_intent(pressed(pygame.K_a)).move_left)
        self.assertTrue(keyboard_intent(pressed(pygame.K_d)).move_right)


class TestMerge(unittest.TestCase):

    def test_merge_ors_every_signal(self):
        merged = merge_intents(Intent(move_left=True), Intent(fire=True))
        self.assertEqual(merged, Intent(move_left=True, fire=True))


class TestTouchControls(unittest.TestCase):

    def setUp(self):
        self.controls = TouchControls(800, 600)

    def test_buttons_sit_at_bottom_of_playfield(self):
        for rect in self.controls.buttons.values():
            self.assertLessEqual(rect.bottom, 600)
            self.assertGreaterEqual(rect.left, 0)
            self.assertLessEqual(rect.right, 800)

    def test_press_and_release(self):
        left = self.controls.buttons["left"]
        self.controls.press("mouse", left.center)
        self.assertEqual(self.controls.intent, Intent(move_left=True))

        self.controls.release("mouse")
        self.assertEqual(self.controls.intent, Intent())

    def test_press_outside_buttons(self):
        self.controls.press("mouse", (400, 100))
        self.assertEqual(self.controls.intent, Intent())

    def test_multiple_pointers(self):
        self.controls.press(("finger", 1), self.controls.buttons["right"].center)
        self.controls.press(("finger", 2), self.controls.buttons["fire"].center)
        self.assertEqual(self.controls.intent, Intent(move_right=True, fire=True))

        self.controls.release(("finger", 1))
        self.assertEqual(self.controls.intent, Intent(fire=True))

        self.controls.release_all()
        self.assertEqual(self.controls.intent, Intent())

    def test_releasing_unknown_pointer_is_harmless(self):
        self.controls.release("nobody")
        self.assertEqual(self.controls.intent, Intent())


if __name__ == "__main__":
    unittest.main()
