# areena/bots.py
import random

from areena.game_runner import PlayerData
from areena.player_classes import PlayerClass

BOT_NAMES = [
    "Aardwolf", "AbracMucid", "Ballyhoo", "Biltong", "Blatherskite", "Bourasque",
    "Bumpkin", "Catechectics", "Chimichanga", "Clapboard", "Equinox", "Glomerate",
    "Gumshoe", "Kyjb70Grog", "Lollapalooza", "Macaronic", "Miffedlien96", "Morassyobg",
    "Nincompoop", "Piddling", "Pollywog", "Sassafras", "Sousaphone", "Spodogenous",
    "Succubus", "Svengali", "Threptic", "Umpteenth", "Whorlking420", "Wishywashy",
    "YamorMammee",
]

BOT_AVATAR_URLS = [
    "https://i.imgur.com/icWfRgb.png",
    "https://i.imgur.com/dusE0NZ.jpg",
    "https://i.imgur.com/hhtLmPS.png",
    "https://i.imgur.com/5V79CO5.jpg",
    "https://i.imgur.com/UkoIXoT.png",
    "https://i.imgur.com/tkzd4lr.png",
    "https://i.imgur.com/vgU5h3y.jpg",
    "https://i.imgur.com/vD1ANJZ.jpg",
    "https://i.imgur.com/rBleq5U.png",
    "https://i.imgur.com/M2BmdGT.png",
    "https://i.imgur.com/O7yE9Pr.png",
    "https://i.imgur.com/W5kBNQK.png",
    "https://i.imgur.com/nMT0sS2.jpg",
    "https://i.imgur.com/Aake5He.jpg",
    "https://i.imgur.com/GAsvHsm.png",
]


def botify_name(name: str) -> str:
    return f"{name}(BOT)"


def generate_random_id(rng=None) -> str:
    rng = rng or random
    return str(rng.randrange(10_000_000, 100_000_000))


def create_new_bot_player(rng=None) -> PlayerData:
    rng = rng or random
    return PlayerData(
        id=generate_random_id(rng),
        name=botify_name(rng.choice(BOT_NAMES)),
        avatar_url=rng.choice(BOT_AVATAR_URLS),
        player_class=rng.choice(list(PlayerClass)),
    )


def create_unique_bot_players(count: int, rng=None) -> list[PlayerData]:
    """Bots with distinct names and avatars while the pools last."""
    rng = rng or random
    names, avatars = list(BOT_NAMES), list(BOT_AVATAR_URLS)
    ids = set()
    players = []
    for _ in range(count):
        names = names or list(BOT_NAMES)
        avatars = avatars or list(BOT_AVATAR_URLS)
        name = names.pop(rng.randrange(len(names)))
        avatar = avatars.pop(rng.randrange(len(avatars)))
        player_id = generate_random_id(rng)
        while player_id in ids:
            player_id = generate_random_id(rng)
        ids.add(player_id)
        players.append(PlayerData(
            id=player_id,
            name=botify_name(name),
            avatar_url=avatar,
            player_class=rng.choice(list(PlayerClass)),
        ))
    return players
