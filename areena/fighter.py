# areena/fighter.py
from dataclasses import dataclass, field
from typing import Callable, NamedTuple, Optional
import math, random

import pygame

from areena.player_classes import CLASS_STATS, FIGHTER_RADIUS, PlayerClass
from areena.renderer import draw_dead_tint, draw_health_bar, make_circular_avatar
from areena.utils import calculate_vector, find_random_alive_target, randomize_attributes

KNOCKBACK_DECAY = 0.85
KNOCKBACK_EPSILON = 0.1
BLEED_CHANCE = 0.07          # per tick at zero health, scales with missing health
HIT_STAIN_JITTER = 4
BLEED_STAIN_SIZE = 6

RANDOMIZED_STATS = ("max_speed", "damage", "melee_range", "melee_cooldown")
OVERRIDABLE_STATS = RANDOMIZED_STATS + ("max_health", "acceleration", "radius")

CreateBloodStain = Callable[[float, float, float], None]


class ArenaBounds(NamedTuple):
    left: float
    top: float
    right: float
    bottom: float


@dataclass(eq=False)
class Fighter:
    id: str
    name: str
    player_class: PlayerClass
    x: float
    y: float
    bounds: ArenaBounds
    create_blood_stain: Optional[CreateBloodStain] = None
    rng: random.Random = field(default_factory=random.Random)
    avatar_url: str = ""
    randomize: bool = True
    overrides: Optional[dict] = None

    radius: int = field(init=False, default=FIGHTER_RADIUS)
    chase_speed: float = field(init=False, default=0.0)
    knockback_x: float = field(init=False, default=0.0)
    knockback_y: float = field(init=False, default=0.0)
    acceleration: float = field(init=False, default=0.1)
    max_speed: float = field(init=False)
    damage: float = field(init=False)
    melee_range: float = field(init=False)
    melee_cooldown: int = field(init=False)
    melee_cooldown_left: int = field(init=False, default=0)
    max_health: float = field(init=False, default=30)
    health: float = field(init=False)
    target_id: Optional[str] = field(init=False, default=None)
    avatar: Optional[pygame.Surface] = field(init=False, default=None, repr=False)

    def __post_init__(self):
        stats = CLASS_STATS[self.player_class]
        self.max_speed = stats.max_speed
        self.damage = stats.damage
        self.melee_range = stats.melee_range
        self.melee_cooldown = stats.melee_cooldown
        if self.randomize:
            randomize_attributes(self, RANDOMIZED_STATS, rng=self.rng)
        for name, value in (self.overrides or {}).items():
            if name not in OVERRIDABLE_STATS:
                raise ValueError(f"Unknown fighter stat: {name}")
            setattr(self, name, value)
        # whole ticks keep the cooldown countdown exact
        self.melee_cooldown = max(1, int(round(self.melee_cooldown)))
        self.health = self.max_health
        self.constrain_into_arena()

    def set_avatar(self, image: pygame.Surface):
        self.avatar = make_circular_avatar(image, self.radius)

    def set_target(self, fighter: "Fighter"):
        self.target_id = fighter.id

    def is_dead(self) -> bool:
        return self.health <= 0

    def resolve_target(self, roster) -> Optional["Fighter"]:
        if self.target_id is None:
            return None
        return next((f for f in roster if f.id == self.target_id), None)

    def apply_damage(self, source_x: float, source_y: float, amount: float):
        vector = calculate_vector(self.x, self.y, source_x, source_y)
        self.knockback_x -= vector.x * amount
        self.knockback_y -= vector.y * amount
        self.chase_speed = 0.0
        if self.create_blood_stain:
            size = amount + self.rng.random() * HIT_STAIN_JITTER
            self.create_blood_stain(self.x, self.y, size)
        self.health = max(self.health - amount, 0)

    def advance(self, roster):
        self.update_knockback()

        others_alive = any(f is not self and not f.is_dead() for f in roster)
        if not self.is_dead() and others_alive:
            self.update_ai(roster)

        self.constrain_into_arena()
        self.update_bleeding()
        self._check_finite()

    def update_ai(self, roster):
        target = self.resolve_target(roster)
        if target is None or target.is_dead():
            target = find_random_alive_target(roster, exclude=self, rng=self.rng)
            self.target_id = target.id if target else None
        if target is None:
            return
        self.move_towards_target(target)
        self.check_target_hit(target)
        self.melee_cooldown_left = max(0, self.melee_cooldown_left - 1)

    def update_knockback(self):
        self.knockback_x *= KNOCKBACK_DECAY
        self.knockback_y *= KNOCKBACK_DECAY
        if abs(self.knockback_x) < KNOCKBACK_EPSILON:
            self.knockback_x = 0.0
        if abs(self.knockback_y) < KNOCKBACK_EPSILON:
            self.knockback_y = 0.0
        self.x += self.knockback_x
        self.y += self.knockback_y

    def in_melee_range(self, target: "Fighter") -> bool:
        vector = calculate_vector(self.x, self.y, target.x, target.y)
        return vector.distance <= self.melee_range + target.radius

    def move_towards_target(self, target: "Fighter"):
        self.chase_speed = min(self.max_speed, self.chase_speed + self.acceleration)
        if not self.in_melee_range(target):
            vector = calculate_vector(self.x, self.y, target.x, target.y)
            self.x += vector.x * self.chase_speed
            self.y += vector.y * self.chase_speed

    def check_target_hit(self, target: "Fighter"):
        if not self.in_melee_range(target):
            return
        self.chase_speed = 0.0
        if self.melee_cooldown_left <= 0:
            target.apply_damage(self.x, self.y, self.damage)
            target.set_target(self)
            self.melee_cooldown_left = self.melee_cooldown

    def constrain_into_arena(self):
        left, top, right, bottom = self.bounds
        self.x = min(max(self.x, left + self.radius), right - self.radius)
        self.y = min(max(self.y, top + self.radius), bottom - self.radius)

    def is_at_edge_of_arena(self) -> bool:
        left, top, right, bottom = self.bounds
        return (
            self.x <= left + self.radius
            or self.x >= right - self.radius
            or self.y <= top + self.radius
            or self.y >= bottom - self.radius
        )

    def update_bleeding(self):
        if not self.create_blood_stain or self.max_health <= 0:
            return
        if (1 - self.health / self.max_health) * BLEED_CHANCE > self.rng.random():
            size = BLEED_STAIN_SIZE + self.rng.random() * HIT_STAIN_JITTER
            self.create_blood_stain(self.x, self.y, size)

    def _check_finite(self):
        values = (self.x, self.y, self.knockback_x, self.knockback_y, self.chase_speed)
        if not all(math.isfinite(v) for v in values):
            raise FloatingPointError(f"{self.name} ({self.id}) left the number line: {values}")

    def draw(self, surface: pygame.Surface):
        if self.avatar is not None:
            surface.blit(self.avatar, (int(self.x - self.radius), int(self.y - self.radius)))
        if self.is_dead():
            draw_dead_tint(surface, self.x, self.y, self.radius)

    def draw_health_bar(self, surface: pygame.Surface):
        draw_health_bar(surface, self.x, self.y, self.radius, self.health, self.max_health)
