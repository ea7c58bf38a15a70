"""
Tests for entity construction.
"""

import unittest

from invaders.entities import (
    InvaderType,
    Projectile,
    create_invaders,
    create_player,
    enemy_bullet,
    player_bullet,
)


class TestFactories(unittest.TestCase):

    def test_player_starts_centred_at_bottom(self):
        player = create_player(800, 600)
        self.assertEqual(player.x, 375)
        self.assertEqual(player.y, 540)
        self.assertEqual((player.width, player.height), (50, 40))
        self.assertEqual(player.shoot_cooldown, 0)

    def test_formation_is_five_by_ten(self):
        invaders = create_invaders()
        self.assertEqual(len(invaders), 50)
        self.assertTrue(all(i.alive for i in invaders))

    def test_formation_is_in_grid_order(self):
        invaders = create_invaders()
        self.assertEqual((invaders[0].x, invaders[0].y), (50, 50))
        self.assertEqual((invaders[1].x, invaders[1].y), (110, 50))
        self.assertEqual((invaders[10].x, invaders[10].y), (50, 110))
        self.assertEqual((invaders[49].row, invaders[49].col), (4, 9))

    def test_top_two_rows_are_fast(self):
        invaders = create_invaders()
        for invader in invaders:
            expected = InvaderType.FAST if invader.row < 2 else InvaderType.NORMAL
            self.assertIs(invader.type, expected)

    def test_points(self):
        self.assertEqual(InvaderType.FAST.points, 20)
        self.assertEqual(InvaderType.NORMAL.points, 10)


class TestProjectiles(unittest.TestCase):

    def test_player_bullet_leaves_from_ship_center(self):
        bullet = player_bullet(create_player(800, 600))
        self.assertEqual((bullet.x, bullet.y), (398, 540))
        self.assertLess(bullet.speed, 0)

    def test_enemy_bullet_leaves_from_invader_bottom(self):
        shooter = create_invaders()[0]
        bullet = enemy_bullet(shooter)
        self.assertEqual((bullet.x, bullet.y), (68, 80))
        self.assertGreater(bullet.speed, 0)

    def test_advance_uses_signed_speed(self):
        up = Projectile(x=0, y=100, speed=-8)
        down = Projectile(x=0, y=100, speed=3)
        up.advance()
        down.advance()
        self.assertEqual(up.y, 92)
        self.assertEqual(down.y, 103)


if __name__ == "__main__":
    unittest.main()
