# areena/player_classes.py
from dataclasses import dataclass
from enum import Enum

FIGHTER_RADIUS = 16


class PlayerClass(str, Enum):
    WARRIOR = "warrior"
    BERSERKER = "berserker"
    NINJA = "ninja"
    KNIGHT = "knight"
    SPEARMAN = "spearman"

    @classmethod
    def parse(cls, value):
        """Return the matching class for a tag or member, None when unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class ClassStats:
    max_speed: float
    damage: float
    melee_range: float
    melee_cooldown: float  # ticks


CLASS_STATS = {
    PlayerClass.WARRIOR: ClassStats(max_speed=3.0, damage=5, melee_range=FIGHTER_RADIUS * 1.5, melee_cooldown=30),
    PlayerClass.BERSERKER: ClassStats(max_speed=3.4, damage=8, melee_range=FIGHTER_RADIUS * 1.25, melee_cooldown=40),
    PlayerClass.NINJA: ClassStats(max_speed=4.5, damage=3, melee_range=FIGHTER_RADIUS * 1.25, melee_cooldown=16),
    PlayerClass.KNIGHT: ClassStats(max_speed=2.2, damage=6, melee_range=FIGHTER_RADIUS * 1.5, melee_cooldown=32),
    PlayerClass.SPEARMAN: ClassStats(max_speed=2.6, damage=4, melee_range=FIGHTER_RADIUS * 2.75, melee_cooldown=30),
}
