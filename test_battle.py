import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import random
import unittest

from areena.arena import Arena
from areena.config import GameConfig
from areena.player_classes import PlayerClass
from battle import play_out


def make_duel(damage=30):
    arena = Arena(GameConfig(), rng=random.Random(3))
    arena.spawn_fighter("a", "Alice", PlayerClass.WARRIOR, randomize=False, overrides={"damage": damage})
    arena.spawn_fighter("b", "Bob", PlayerClass.WARRIOR, randomize=False, overrides={"damage": damage})
    return arena


class TestPlayOut(unittest.TestCase):
    def setUp(self):
        self.frames = 0

    def show_frame(self, frame):
        self.frames += 1
        return True

    def test_zero_outro_still_plays_the_match(self):
        arena = make_duel()
        self.assertTrue(play_out(arena, max_ticks=5000, outro_ticks=0, show_frame=self.show_frame))
        self.assertIsNotNone(arena.winner())
        self.assertGreater(self.frames, 0)
        self.assertEqual(self.frames, arena.tick_count)

    def test_outro_adds_frames_after_the_last_kill(self):
        fight = make_duel()
        play_out(fight, max_ticks=5000, outro_ticks=0, show_frame=lambda frame: True)

        arena = make_duel()
        play_out(arena, max_ticks=5000, outro_ticks=7, show_frame=self.show_frame)
        self.assertEqual(self.frames, fight.tick_count + 7)

    def test_timeout_skips_the_outro(self):
        arena = make_duel(damage=0)
        play_out(arena, max_ticks=50, outro_ticks=30, show_frame=self.show_frame)
        self.assertEqual(self.frames, 50)
        self.assertEqual(len(arena.alive_fighters()), 2)

    def test_closing_the_window_stops_early(self):
        arena = make_duel()
        self.assertFalse(play_out(arena, max_ticks=5000, outro_ticks=30, show_frame=lambda frame: False))
        self.assertEqual(arena.tick_count, 1)


if __name__ == "__main__":
    unittest.main()
