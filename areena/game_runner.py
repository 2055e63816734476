# areena/game_runner.py
import asyncio
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional

import pygame

from areena.arena import Arena
from areena.avatars import load_avatars
from areena.config import GameConfig
from areena.encoder import EncodingError, FrameWriter, VideoEncoder
from areena.player_classes import PlayerClass
from areena.utils import log_timer, start_timer

log = logging.getLogger("areena.game_runner")


class RunnerState(str, Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    RUNNING = "running"


class MatchStatus(str, Enum):
    NO_CONTEST = "no_contest"
    WINNER = "winner"
    DRAW = "draw"          # everyone died on the same tick
    TIMEOUT = "timeout"    # tick ceiling reached with several fighters standing
    FAILED = "failed"


@dataclass
class PlayerData:
    id: str
    name: str
    avatar_url: str = ""
    player_class: Optional[PlayerClass] = None
    stats: Optional[dict] = None  # fixed stat overrides, skips randomization

    def __post_init__(self):
        # chat platforms hand out integer ids; lookups always go by string
        self.id = str(self.id)

    @classmethod
    def from_mapping(cls, data):
        if isinstance(data, cls):
            return data
        return cls(
            id=str(data["id"]),
            name=data["name"],
            avatar_url=data.get("avatar_url", data.get("avatarURL", "")),
            player_class=PlayerClass.parse(data["player_class"]) if data.get("player_class") else None,
            stats=data.get("stats"),
        )


class PlayerWithClass(NamedTuple):
    id: str
    name: str
    player_class: PlayerClass


@dataclass
class FighterSummary:
    id: str
    name: str
    player_class: PlayerClass
    health: float
    max_health: float
    alive: bool

    @classmethod
    def from_fighter(cls, fighter):
        return cls(
            id=fighter.id,
            name=fighter.name,
            player_class=fighter.player_class,
            health=fighter.health,
            max_health=fighter.max_health,
            alive=not fighter.is_dead(),
        )


@dataclass
class MatchResult:
    status: MatchStatus
    locale: str = "english"
    winner: Optional[FighterSummary] = None
    survivors: list[FighterSummary] = field(default_factory=list)
    fighters: list[FighterSummary] = field(default_factory=list)
    total_ticks: int = 0
    duration_seconds: float = 0.0
    video_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status not in (MatchStatus.NO_CONTEST, MatchStatus.FAILED)

    def to_dict(self) -> dict:
        def summary(s):
            return {
                "id": s.id,
                "name": s.name,
                "player_class": s.player_class.value,
                "health": round(s.health, 2),
                "alive": s.alive,
            }

        return {
            "status": self.status.value,
            "winner": summary(self.winner) if self.winner else None,
            "survivors": [summary(s) for s in self.survivors],
            "total_ticks": self.total_ticks,
            "duration_seconds": round(self.duration_seconds, 2),
            "video_path": str(self.video_path) if self.video_path else None,
            "error": self.error,
        }


class GameRunner:
    """Collects players for one match, runs it and compiles the video.

    One instance handles one match at a time; ``initialize_game`` resets it for the next one.
    """

    def __init__(self, config: GameConfig = None, encoder: VideoEncoder = None, rng: random.Random = None):
        self.config = config or GameConfig()
        self.encoder = encoder or VideoEncoder(fps=self.config.fps)
        self.rng = rng or random.Random()
        self.state = RunnerState.IDLE
        self.players: dict[str, PlayerData] = {}
        self.arena: Optional[Arena] = None

    # --- registration ---

    def initialize_game(self):
        if self.state == RunnerState.RUNNING:
            raise RuntimeError("Can't reset the game while a match is running")
        self.players = {}
        self.arena = None
        self.state = RunnerState.COLLECTING

    def add_player(self, data) -> bool:
        if self.state == RunnerState.RUNNING:
            log.warning("Ignoring new player while a match is running")
            return False
        player = PlayerData.from_mapping(data)
        if player.id in self.players:
            log.debug("Player %s already in game", player.id)
            return False
        if player.player_class is None:
            player.player_class = self.rng.choice(list(PlayerClass))
        self.players[player.id] = player
        self.state = RunnerState.COLLECTING
        return True

    def set_player_class(self, player_id, player_class) -> bool:
        player = self.players.get(str(player_id))
        new_class = PlayerClass.parse(player_class)
        if player is None or new_class is None:
            log.debug("Can't set class %r for player %s", player_class, player_id)
            return False
        if self.state == RunnerState.RUNNING:
            return False
        player.player_class = new_class
        return True

    def get_player_count(self) -> int:
        return len(self.players)

    def get_current_players_with_classes(self) -> list[PlayerWithClass]:
        return [PlayerWithClass(p.id, p.name, p.player_class) for p in self.players.values()]

    def player_in_game(self, player_id) -> bool:
        return str(player_id) in self.players

    def is_full(self) -> bool:
        return len(self.players) >= self.config.max_player_count

    # --- match ---

    def build_arena(self, locale: str = "english") -> Arena:
        arena = Arena(self.config, locale=locale, rng=self.rng)
        for player in self.players.values():
            arena.spawn_fighter(
                player.id,
                player.name,
                player.player_class,
                avatar_url=player.avatar_url,
                randomize=player.stats is None,
                overrides=player.stats,
            )
        return arena

    async def run_game(self, input_dir, output_dir, locale: str = "english") -> MatchResult:
        if self.state == RunnerState.RUNNING:
            raise RuntimeError("A match is already running")
        if self.get_player_count() <= 1:
            log.info("Not enough players for a match (%d)", self.get_player_count())
            return MatchResult(MatchStatus.NO_CONTEST, locale=locale)

        self.state = RunnerState.RUNNING
        try:
            self.arena = self.build_arena(locale)
            log.info("Match starting with %d fighters", len(self.arena.fighters))

            start_timer("Loading avatars")
            await load_avatars(self.arena.fighters, timeout=self.config.avatar_timeout)
            log_timer("Loading avatars")

            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(
                None, self.render_match, self.arena, Path(input_dir), Path(output_dir)
            )
        finally:
            self.state = RunnerState.IDLE

    def render_match(self, arena: Arena, input_dir: Path, output_dir: Path) -> MatchResult:
        """Tick the arena to the end, writing one frame per tick, then encode. Blocking."""
        output_path = Path(output_dir) / f"{self.config.render_file_name}.mp4"
        try:
            start_timer("Rendering frames")
            frames = FrameWriter(input_dir)
            while not arena.is_match_over(self.config.max_ticks):
                arena.tick()
                frames.write(arena.render())
            fight_ticks = arena.tick_count
            result = self.build_result(arena, fight_ticks)

            # let the last blow land on screen; nobody is left to fight during the outro
            if result.status != MatchStatus.TIMEOUT:
                for _ in range(self.config.outro_ticks):
                    arena.tick()
                    frames.write(arena.render())
            log_timer("Rendering frames")

            start_timer("Encoding video")
            result.video_path = self.encoder.encode(frames.paths, output_path)
            log_timer("Encoding video")
        except (EncodingError, FloatingPointError, OSError, pygame.error) as e:
            log.exception("Match failed after %d ticks", arena.tick_count)
            output_path.unlink(missing_ok=True)
            return MatchResult(
                MatchStatus.FAILED,
                locale=arena.locale,
                fighters=[FighterSummary.from_fighter(f) for f in arena.fighters],
                total_ticks=arena.tick_count,
                error=str(e),
            )

        if result.winner:
            log.info("WINNER: %s after %d ticks (%.2fs)", result.winner.name, result.total_ticks, result.duration_seconds)
        else:
            log.info("Match ended without a winner: %s", result.status.value)
        return result

    def build_result(self, arena: Arena, total_ticks: int) -> MatchResult:
        alive = arena.alive_fighters()
        if len(alive) == 1:
            status = MatchStatus.WINNER
        elif not alive:
            status = MatchStatus.DRAW
        else:
            status = MatchStatus.TIMEOUT
        winner = arena.winner()
        return MatchResult(
            status,
            locale=arena.locale,
            winner=FighterSummary.from_fighter(winner) if winner else None,
            survivors=[FighterSummary.from_fighter(f) for f in alive],
            fighters=[FighterSummary.from_fighter(f) for f in arena.fighters],
            total_ticks=total_ticks,
            duration_seconds=total_ticks / self.config.fps,
        )
