# areena/utils.py
import logging
import random
import time
from typing import NamedTuple

import pymunk

log = logging.getLogger("areena.utils")

ATTRIBUTE_VARIANCE = 0.2  # stats land within ±20% of their class seed

_timers: dict[str, float] = {}


class Vector(NamedTuple):
    x: float
    y: float
    distance: float


def calculate_vector(from_x, from_y, to_x, to_y) -> Vector:
    """Unit direction from (from_x, from_y) towards (to_x, to_y) plus the distance between them.

    Coincident points give a zero direction instead of dividing by zero.
    """
    delta = pymunk.Vec2d(to_x - from_x, to_y - from_y)
    distance = delta.length
    if distance == 0:
        return Vector(0.0, 0.0, 0.0)
    direction = delta / distance
    return Vector(direction.x, direction.y, distance)


def randomize_attributes(obj, attributes, rng=None, variance=ATTRIBUTE_VARIANCE):
    rng = rng or random
    for name in attributes:
        base = getattr(obj, name)
        setattr(obj, name, base * rng.uniform(1 - variance, 1 + variance))


def find_random_alive_target(fighters, exclude=None, rng=None):
    rng = rng or random
    candidates = [f for f in fighters if f is not exclude and not f.is_dead()]
    if not candidates:
        return None
    return rng.choice(candidates)


def start_timer(label: str):
    _timers[label] = time.perf_counter()


def log_timer(label: str):
    started = _timers.pop(label, None)
    if started is None:
        return
    log.debug("%s took %.2fs", label, time.perf_counter() - started)
