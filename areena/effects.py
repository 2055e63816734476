# areena/effects.py
from collections import deque

import pygame

BLOOD_COLOR = (138, 7, 7)
BLOOD_MAX_ALPHA = 200


class BloodStain:
    def __init__(self, x: float, y: float, size: float, lifetime: int):
        self.x = x
        self.y = y
        self.size = size
        self.age = 0
        self.lifetime = lifetime

    def update(self):
        self.age += 1

    def is_faded(self) -> bool:
        return self.age >= self.lifetime

    @property
    def alpha(self) -> int:
        life_ratio = max(0.0, 1 - self.age / self.lifetime)
        return int(BLOOD_MAX_ALPHA * life_ratio)

    def draw(self, surface: pygame.Surface):
        radius = int(self.size)
        if radius < 1 or self.is_faded():
            return
        stain_surface = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(stain_surface, (*BLOOD_COLOR, self.alpha), (radius, radius), radius)
        surface.blit(stain_surface, (int(self.x - radius), int(self.y - radius)))


class BloodStainPool:
    """Active blood stains, oldest first. Capped so a long match can't pile them up forever."""

    def __init__(self, max_stains: int = 400, lifetime: int = 240):
        self.max_stains = max_stains
        self.lifetime = lifetime
        self.stains: deque[BloodStain] = deque()

    def __len__(self):
        return len(self.stains)

    def __iter__(self):
        return iter(self.stains)

    def create(self, x: float, y: float, size: float):
        if self.max_stains <= 0:
            return
        while len(self.stains) >= self.max_stains:
            self.stains.popleft()
        self.stains.append(BloodStain(x, y, size, self.lifetime))

    def update(self):
        for stain in self.stains:
            stain.update()
        # all stains share one lifetime, so the faded ones are always at the front
        while self.stains and self.stains[0].is_faded():
            self.stains.popleft()

    def draw(self, surface: pygame.Surface):
        for stain in self.stains:
            stain.draw(surface)
