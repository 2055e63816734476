import random
import shutil
import tempfile
import unittest
from pathlib import Path

from areena.bots import BOT_NAMES, create_new_bot_player, create_unique_bot_players
from areena.config import GameConfig, load_cfg
from areena.player_classes import PlayerClass
from areena.utils import calculate_vector, find_random_alive_target, randomize_attributes


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_default_file_matches_defaults(self):
        self.assertEqual(load_cfg(), GameConfig())

    def test_yaml_overrides(self):
        path = self.tmp / "cfg.yml"
        path.write_text("fps: 60\nmax_ticks: 100\noutro_seconds: 1\n")
        cfg = load_cfg(path)
        self.assertEqual(cfg.fps, 60)
        self.assertEqual(cfg.max_ticks, 100)
        self.assertEqual(cfg.outro_ticks, 60)
        self.assertEqual(cfg.screen_width, GameConfig().screen_width)

    def test_unknown_key_is_rejected(self):
        path = self.tmp / "cfg.yml"
        path.write_text("fps: 60\nframes_per_second: 30\n")
        with self.assertRaisesRegex(ValueError, "frames_per_second"):
            load_cfg(path)

    def test_empty_file_gives_defaults(self):
        path = self.tmp / "cfg.yml"
        path.write_text("")
        self.assertEqual(load_cfg(path), GameConfig())


class TestUtils(unittest.TestCase):
    def test_calculate_vector(self):
        vector = calculate_vector(0, 0, 3, 4)
        self.assertAlmostEqual(vector.x, 0.6)
        self.assertAlmostEqual(vector.y, 0.8)
        self.assertAlmostEqual(vector.distance, 5)

    def test_calculate_vector_same_point(self):
        self.assertEqual(tuple(calculate_vector(2, 2, 2, 2)), (0.0, 0.0, 0.0))

    def test_randomize_attributes_band(self):
        class Stats:
            speed = 10.0
            damage = 5.0

        rng = random.Random(2)
        for _ in range(100):
            stats = Stats()
            randomize_attributes(stats, ["speed", "damage"], rng=rng)
            self.assertTrue(8.0 <= stats.speed <= 12.0)
            self.assertTrue(4.0 <= stats.damage <= 6.0)

    def test_find_random_alive_target(self):
        class Dummy:
            def __init__(self, dead):
                self.dead = dead

            def is_dead(self):
                return self.dead

        me, alive, dead = Dummy(False), Dummy(False), Dummy(True)
        self.assertIs(find_random_alive_target([me, alive, dead], exclude=me), alive)
        self.assertIsNone(find_random_alive_target([me, dead], exclude=me))


class TestBots(unittest.TestCase):
    def test_new_bot_player(self):
        bot = create_new_bot_player(random.Random(1))
        self.assertTrue(bot.name.endswith("(BOT)"))
        self.assertIn(bot.player_class, list(PlayerClass))
        self.assertEqual(len(bot.id), 8)
        self.assertTrue(bot.avatar_url.startswith("https://"))

    def test_unique_bots(self):
        bots = create_unique_bot_players(10, random.Random(4))
        self.assertEqual(len({b.name for b in bots}), 10)
        self.assertEqual(len({b.avatar_url for b in bots}), 10)
        self.assertEqual(len({b.id for b in bots}), 10)

    def test_more_bots_than_names(self):
        bots = create_unique_bot_players(len(BOT_NAMES) + 5, random.Random(4))
        self.assertEqual(len(bots), len(BOT_NAMES) + 5)
        self.assertEqual(len({b.id for b in bots}), len(bots))


if __name__ == "__main__":
    unittest.main()
