# battle.py
import argparse
import asyncio
import json
import logging
import os
import random
import sys
from pathlib import Path

from areena.avatars import load_avatars
from areena.bots import create_unique_bot_players
from areena.config import load_cfg
from areena.game_runner import GameRunner

INPUT_FILE_DIRECTORY = Path("input")
RENDER_DIRECTORY = Path("render")

log = logging.getLogger("areena.battle")


def make_runner(args) -> GameRunner:
    cfg = load_cfg(args.config)
    rng = random.Random(args.seed)  # seed None -> fresh randomness every run
    runner = GameRunner(cfg, rng=rng)
    runner.initialize_game()
    for bot in create_unique_bot_players(args.bots, rng):
        runner.add_player(bot)
    return runner


async def export(args) -> int:
    runner = make_runner(args)
    for player in runner.get_current_players_with_classes():
        log.info("%s joins as %s", player.name, player.player_class.value)
    result = await runner.run_game(args.input_dir, args.output_dir, args.locale)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.succeeded else 1


def play_out(arena, max_ticks: int, outro_ticks: int, show_frame) -> bool:
    """Tick the arena to the end plus the outro, handing every frame to ``show_frame``.

    ``show_frame`` returns False to stop early. Returns False when stopped that way.
    """
    outro_left = outro_ticks
    while True:
        if arena.is_match_over():
            if outro_left <= 0:
                break
            outro_left -= 1
        elif arena.is_match_over(max_ticks):
            break  # timed out, nothing to linger on
        arena.tick()
        if not show_frame(arena.render()):
            return False
    return True


async def watch(args) -> int:
    import pygame

    runner = make_runner(args)
    arena = runner.build_arena(args.locale)
    await load_avatars(arena.fighters, timeout=runner.config.avatar_timeout)

    pygame.init()
    screen = pygame.display.set_mode((runner.config.screen_width, runner.config.screen_height))
    pygame.display.set_caption("Areena")
    clock = pygame.time.Clock()

    def show_frame(frame) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
        screen.blit(frame, (0, 0))
        pygame.display.flip()
        clock.tick(runner.config.fps)
        return True

    try:
        if not play_out(arena, runner.config.max_ticks, runner.config.outro_ticks, show_frame):
            return 0
    finally:
        pygame.quit()
    winner = arena.winner()
    print(f"WINNER: {winner.name}" if winner else "No winner")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run an Areena bot match")
    parser.add_argument("--bots", type=int, default=6, help="Number of bot fighters")
    parser.add_argument("--config", type=Path, default=None, help="YAML config (defaults to configs/areena.yml)")
    parser.add_argument("--input-dir", type=Path, default=INPUT_FILE_DIRECTORY, help="Where frames are written")
    parser.add_argument("--output-dir", type=Path, default=RENDER_DIRECTORY, help="Where the video is written")
    parser.add_argument("--locale", default="english")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible stats and targeting")
    parser.add_argument("--watch", action="store_true", help="Show the match in a window instead of exporting")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.watch:
        return asyncio.run(watch(args))

    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    return asyncio.run(export(args))


if __name__ == "__main__":
    sys.exit(main())
