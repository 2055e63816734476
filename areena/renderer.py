# areena/renderer.py
import pygame

COLOR_BACKGROUND = (24, 24, 30)
COLOR_ARENA_FLOOR = (196, 170, 126)   # sand
COLOR_ARENA_GRID = (184, 157, 114)
COLOR_SIDEBAR = (36, 36, 44)
COLOR_SIDEBAR_BORDER = (70, 70, 84)
COLOR_TEXT = (235, 235, 235)
COLOR_TEXT_DEAD = (120, 120, 120)
COLOR_HP_BACK = (160, 0, 2)           # #A00002
COLOR_HP_FILL = (0, 204, 13)          # #00CC0D
DEAD_TINT = (255, 0, 0, 128)

PLACEHOLDER_COLORS = [
    (66, 135, 245), (245, 66, 66), (60, 200, 60), (255, 220, 0),
    (180, 60, 255), (255, 140, 0), (0, 220, 220), (255, 105, 180),
]

SIDEBAR_PADDING = 12
SIDEBAR_ROW_HEIGHT = 22
SIDEBAR_TITLES = {
    "english": "Fighters",
    "suomi": "Taistelijat",
}

_fonts: dict[int, pygame.font.Font] = {}


def get_font(size: int) -> pygame.font.Font:
    if size not in _fonts:
        if not pygame.font.get_init():
            pygame.font.init()
        _fonts[size] = pygame.font.Font(None, size)
    return _fonts[size]


def make_circular_avatar(image: pygame.Surface, radius: int) -> pygame.Surface:
    """Scale an avatar to the fighter's diameter and clip it to a circle."""
    diameter = radius * 2
    # smoothscale only takes 24/32-bit surfaces; blitting converts palette images
    source = pygame.Surface(image.get_size(), pygame.SRCALPHA)
    source.blit(image, (0, 0))
    avatar = pygame.transform.smoothscale(source, (diameter, diameter))
    if not image.get_flags() & pygame.SRCALPHA:
        # filtering leaves opaque images a few alpha steps short of 255
        avatar.fill((0, 0, 0, 255), special_flags=pygame.BLEND_RGBA_MAX)
    mask = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
    pygame.draw.circle(mask, (255, 255, 255, 255), (radius, radius), radius)
    avatar.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MIN)
    return avatar


def make_placeholder_avatar(name: str, size: int = 64) -> pygame.Surface:
    """Flat colored square with the name's initial, used when an avatar can't be loaded."""
    color = PLACEHOLDER_COLORS[sum(map(ord, name or "?")) % len(PLACEHOLDER_COLORS)]
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    surface.fill((*color, 255))
    initial = (name or "?")[0].upper()
    text = get_font(int(size * 0.8)).render(initial, True, COLOR_TEXT)
    surface.blit(text, text.get_rect(center=(size // 2, size // 2)))
    return surface


def draw_dead_tint(surface: pygame.Surface, x: float, y: float, radius: int):
    tint = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
    pygame.draw.circle(tint, DEAD_TINT, (radius, radius), radius)
    surface.blit(tint, (int(x - radius), int(y - radius)))


def draw_health_bar(surface, x, y, radius, health, max_health, width=36, height=5, gap=4):
    health_percent = max(0.0, min(1.0, health / max_health)) if max_health > 0 else 0.0
    left = int(x - width / 2)
    top = int(y - gap - radius - height)
    pygame.draw.rect(surface, COLOR_HP_BACK, (left, top, width, height))
    fill = int(round(width * health_percent))
    if fill > 0:
        pygame.draw.rect(surface, COLOR_HP_FILL, (left, top, fill, height))


def draw_background(surface: pygame.Surface, sidebar_width: int, grid_size: int = 60):
    surface.fill(COLOR_BACKGROUND)
    width, height = surface.get_size()
    floor = pygame.Rect(sidebar_width, 0, width - sidebar_width, height)
    pygame.draw.rect(surface, COLOR_ARENA_FLOOR, floor)
    for x in range(sidebar_width + grid_size, width, grid_size):
        pygame.draw.line(surface, COLOR_ARENA_GRID, (x, 0), (x, height))
    for y in range(grid_size, height, grid_size):
        pygame.draw.line(surface, COLOR_ARENA_GRID, (sidebar_width, y), (width, y))


def draw_sidebar(surface: pygame.Surface, fighters, sidebar_width: int, locale: str = "english"):
    height = surface.get_height()
    pygame.draw.rect(surface, COLOR_SIDEBAR, (0, 0, sidebar_width, height))
    pygame.draw.line(surface, COLOR_SIDEBAR_BORDER, (sidebar_width - 1, 0), (sidebar_width - 1, height), 2)

    title_font = get_font(28)
    row_font = get_font(18)
    title = SIDEBAR_TITLES.get(locale, SIDEBAR_TITLES["english"])
    alive = sum(1 for f in fighters if not f.is_dead())
    header = title_font.render(f"{title} {alive}/{len(fighters)}", True, COLOR_TEXT)
    surface.blit(header, (SIDEBAR_PADDING, SIDEBAR_PADDING))

    y = SIDEBAR_PADDING + header.get_height() + 8
    bar_width = sidebar_width - SIDEBAR_PADDING * 2
    for fighter in fighters:
        if y + SIDEBAR_ROW_HEIGHT > height:
            break  # roster longer than the panel, the rest is cut off
        color = COLOR_TEXT_DEAD if fighter.is_dead() else COLOR_TEXT
        label = f"{fighter.name[:16]} ({fighter.player_class.value})"
        surface.blit(row_font.render(label, True, color), (SIDEBAR_PADDING, y))
        draw_health_bar(
            surface,
            SIDEBAR_PADDING + bar_width / 2,
            y + SIDEBAR_ROW_HEIGHT - 3,
            0,
            fighter.health,
            fighter.max_health,
            width=bar_width,
            height=3,
            gap=0,
        )
        y += SIDEBAR_ROW_HEIGHT

