# areena/arena.py
import logging
import random

import pygame

from areena.config import GameConfig
from areena.effects import BloodStainPool
from areena.fighter import ArenaBounds, Fighter
from areena.player_classes import FIGHTER_RADIUS
from areena.renderer import draw_background, draw_sidebar

log = logging.getLogger("areena.arena")


class Arena:
    """One match worth of fighters and blood stains, advanced and drawn one tick at a time.

    The arena never decides when the match ends; callers poll ``is_match_over``.
    """

    def __init__(self, config: GameConfig = None, locale: str = "english", rng: random.Random = None):
        self.config = config or GameConfig()
        self.locale = locale
        self.rng = rng or random.Random()
        self.bounds = ArenaBounds(
            left=self.config.sidebar_width,
            top=0,
            right=self.config.screen_width,
            bottom=self.config.screen_height,
        )
        self.fighters: list[Fighter] = []
        self.blood_stains = BloodStainPool(
            max_stains=self.config.max_blood_stains,
            lifetime=self.config.blood_stain_lifetime,
        )
        self.tick_count = 0
        self.surface = pygame.Surface((self.config.screen_width, self.config.screen_height))
        self._started = False

    def random_spawn_point(self, radius: float) -> tuple[float, float]:
        left, top, right, bottom = self.bounds
        return (
            self.rng.uniform(left + radius, right - radius),
            self.rng.uniform(top + radius, bottom - radius),
        )

    def add_fighter(self, fighter: Fighter):
        if self._started:
            raise RuntimeError("Fighters can't join an arena that has already ticked")
        fighter.bounds = self.bounds
        fighter.create_blood_stain = self.blood_stains.create
        fighter.constrain_into_arena()
        self.fighters.append(fighter)

    def spawn_fighter(self, player_id, name, player_class, avatar_url="", randomize=True, overrides=None) -> Fighter:
        x, y = self.random_spawn_point(FIGHTER_RADIUS)
        fighter = Fighter(
            id=player_id,
            name=name,
            player_class=player_class,
            x=x,
            y=y,
            bounds=self.bounds,
            rng=self.rng,
            avatar_url=avatar_url,
            randomize=randomize,
            overrides=overrides,
        )
        self.add_fighter(fighter)
        return fighter

    def alive_fighters(self) -> list[Fighter]:
        return [f for f in self.fighters if not f.is_dead()]

    def winner(self):
        alive = self.alive_fighters()
        return alive[0] if len(alive) == 1 else None

    def is_match_over(self, max_ticks: int = None) -> bool:
        if len(self.alive_fighters()) <= 1:
            return True
        return max_ticks is not None and self.tick_count >= max_ticks

    def tick(self):
        self._started = True
        alive_before = {f.id for f in self.alive_fighters()}
        for fighter in self.fighters:
            fighter.advance(self.fighters)
        self.blood_stains.update()
        self.tick_count += 1
        for fighter in self.fighters:
            if fighter.id in alive_before and fighter.is_dead():
                log.debug("%s fell on tick %d", fighter.name, self.tick_count)

    def render(self) -> pygame.Surface:
        draw_background(self.surface, self.config.sidebar_width)
        self.blood_stains.draw(self.surface)
        for fighter in self.fighters:
            fighter.draw(self.surface)
        for fighter in self.fighters:
            fighter.draw_health_bar(self.surface)
        draw_sidebar(self.surface, self.fighters, self.config.sidebar_width, self.locale)
        return self.surface
