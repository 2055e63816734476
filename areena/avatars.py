# areena/avatars.py
import asyncio
import io
import logging
from pathlib import PurePosixPath
from urllib.parse import urlparse

import aiohttp
import pygame

from areena.renderer import make_placeholder_avatar

log = logging.getLogger("areena.avatars")

AVATAR_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError, pygame.error, ValueError)


async def fetch_avatar(session: aiohttp.ClientSession, url: str, timeout: float = 10.0) -> pygame.Surface:
    """Load an avatar from an http(s) URL or a local file path."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return pygame.image.load(url)
    async with session.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as resp:
        resp.raise_for_status()
        data = await resp.read()
    # the name hint lets pygame pick the decoder from the extension
    return pygame.image.load(io.BytesIO(data), PurePosixPath(parsed.path).name)


async def load_avatar(session, fighter, timeout: float = 10.0) -> bool:
    """Give a fighter its avatar, falling back to a placeholder. Returns False when the fallback was used."""
    if not fighter.avatar_url:
        fighter.set_avatar(make_placeholder_avatar(fighter.name))
        return False
    try:
        image = await fetch_avatar(session, fighter.avatar_url, timeout)
    except AVATAR_ERRORS as e:
        log.warning("Could not load avatar for %s from %s: %s", fighter.name, fighter.avatar_url, e)
        fighter.set_avatar(make_placeholder_avatar(fighter.name))
        return False
    fighter.set_avatar(image)
    return True


async def load_avatars(fighters, timeout: float = 10.0, session: aiohttp.ClientSession = None) -> int:
    """Load every fighter's avatar concurrently. Returns how many fell back to a placeholder."""
    if session is None:
        async with aiohttp.ClientSession() as own_session:
            return await load_avatars(fighters, timeout, own_session)
    results = await asyncio.gather(*(load_avatar(session, f, timeout) for f in fighters))
    failures = results.count(False)
    if failures:
        log.info("%d/%d avatars replaced with placeholders", failures, len(results))
    return failures
