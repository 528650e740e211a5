import colorsys
from typing import Tuple

RGB = Tuple[int, int, int]

BOARD_BACKGROUND: RGB = (36, 40, 56)
EMPTY_CELL: RGB = (54, 60, 80)
LIGHT_TEXT: RGB = (245, 247, 250)
DARK_TEXT: RGB = (28, 30, 40)
MUTED_TEXT: RGB = (160, 168, 190)

TIER_COLORS = {
    "max": (255, 120, 200),
    "high": (255, 190, 90),
    "mid": (140, 220, 255),
    "base": (220, 224, 235),
}

BAND_COLORS = {
    "good": (96, 214, 140),
    "warn": (240, 200, 80),
    "danger": (236, 88, 88),
}

GRADE_COLORS = {
    "GREAT": (120, 230, 255),
    "GOOD": (140, 230, 150),
    "BAD": (240, 110, 110),
}

POPUP_COLORS = {
    "epic": (255, 120, 200),
    "high": (255, 200, 90),
    "mid": (245, 247, 250),
}


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """``hue`` in degrees, saturation and lightness in percent."""
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360.0, lightness / 100.0, saturation / 100.0)
    return round(r * 255), round(g * 255), round(b * 255)


def color_for_level(level: int) -> RGB:
    hue = (210 + level * 29) % 360
    lightness = max(38, 72 - level * 4)
    return hsl_to_rgb(hue, 72, lightness)


def text_color_for_level(level: int) -> RGB:
    # Light tiles (low levels) get dark labels.
    return DARK_TEXT if max(38, 72 - level * 4) >= 60 else LIGHT_TEXT
