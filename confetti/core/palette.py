"""
Confetti Colors

Where particle colors come from. A burst either draws from a fixed palette
or, when no palette is configured, from random bright hues.

Colors are RGB tuples (0-255). Palettes may be given as tuples or hex strings
("#FF4500", "ff4500").
"""

import colorsys
import numpy as np
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple, Union


Color = Tuple[int, int, int]          # RGB 0-255
ColorLike = Union[Color, Sequence[int], str]


# =============================================================================
# Conversions
# =============================================================================

def hsv_to_rgb(h: float, s: float, v: float) -> Color:
    """Convert HSV (0-1) to RGB (0-255)"""
    r, g, b = colorsys.hsv_to_rgb(h % 1.0, np.clip(s, 0, 1), np.clip(v, 0, 1))
    return (int(r * 255), int(g * 255), int(b * 255))


def parse_color(value: ColorLike) -> Color:
    """
    Normalize a color to an RGB tuple.

    Accepts ``(r, g, b)`` sequences with channels in 0-255 and
    ``#RRGGBB`` / ``RRGGBB`` hex strings.
    """
    if isinstance(value, str):
        digits = value.strip().lstrip('#')
        if len(digits) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        except ValueError:
            raise ValueError(f"Invalid hex color: {value!r}") from None

    channels = tuple(value)
    if len(channels) != 3:
        raise ValueError(f"Color must have 3 channels, got {len(channels)}: {value!r}")
    for c in channels:
        if isinstance(c, bool) or not isinstance(c, (int, np.integer)) or not 0 <= c <= 255:
            raise ValueError(f"Color channels must be integers in 0-255: {value!r}")
    return (int(channels[0]), int(channels[1]), int(channels[2]))


def to_hex(color: Color) -> str:
    return "#{:02X}{:02X}{:02X}".format(*color)


# =============================================================================
# Color Sources
# =============================================================================

class ColorSource(ABC):
    """Provides the color for each newly spawned particle."""

    @abstractmethod
    def next_color(self) -> Color:
        pass


class PaletteColorSource(ColorSource):
    """
    Picks from a fixed palette.

    A single-color palette always yields that color without touching the
    generator; larger palettes pick a uniformly random entry.
    """

    def __init__(self, colors: Sequence[ColorLike], rng: np.random.Generator):
        if not colors:
            raise ValueError("Palette must contain at least one color")
        self.colors: Tuple[Color, ...] = tuple(parse_color(c) for c in colors)
        self.rng = rng

    def next_color(self) -> Color:
        if len(self.colors) == 1:
            return self.colors[0]
        return self.colors[int(self.rng.integers(len(self.colors)))]


class RandomColorSource(ColorSource):
    """Random hue with high saturation and brightness, so confetti stays vivid."""

    def __init__(
        self,
        rng: np.random.Generator,
        saturation: Tuple[float, float] = (0.5, 1.0),
        value: Tuple[float, float] = (0.7, 1.0)
    ):
        self.rng = rng
        self.saturation = saturation
        self.value = value

    def next_color(self) -> Color:
        h = self.rng.random()
        s = self.rng.uniform(*self.saturation)
        v = self.rng.uniform(*self.value)
        return hsv_to_rgb(h, s, v)


def make_color_source(
    colors: Optional[Sequence[ColorLike]],
    rng: np.random.Generator
) -> ColorSource:
    """Palette source when colors are given, random source otherwise."""
    if colors:
        return PaletteColorSource(colors, rng)
    return RandomColorSource(rng)


# Classic party palette used by several presets
PARTY_COLORS: Tuple[Color, ...] = (
    (0, 255, 0),        # Green
    (0, 0, 255),        # Blue
    (255, 192, 203),    # Pink
    (255, 165, 0),      # Orange
    (128, 0, 128),      # Purple
)

GOLD_COLORS: Tuple[Color, ...] = (
    (255, 215, 0),
    (218, 165, 32),
    (255, 236, 139),
)
