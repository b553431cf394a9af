"""
Confetti - Core simulation
"""

from .vector import Vec2
from .shapes import (
    # Outline type
    ShapePath, scale_outline,
    # Digit generators
    digit_one, digit_two, digit_three, digit_four, digit_five,
    digit_six, digit_seven, digit_eight, digit_nine,
    # Registry
    SHAPE_GENERATORS,
)
from .palette import (
    # Conversions
    hsv_to_rgb, parse_color, to_hex,
    # Sources
    ColorSource, PaletteColorSource, RandomColorSource, make_color_source,
    # Palettes
    PARTY_COLORS, GOLD_COLORS,
)
from .config import BlastDirectionality, ConfettiConfig
from .particles import Particle, ParticleSystem, ParticleSystemStatus
from .controller import ConfettiController, ConfettiControllerState
from .presets import (
    ConfettiPreset, PresetManager, BUILTIN_PRESETS,
    get_preset_manager, get_preset, list_presets,
)

__all__ = [
    'Vec2',
    # Shapes
    'ShapePath', 'scale_outline',
    'digit_one', 'digit_two', 'digit_three', 'digit_four', 'digit_five',
    'digit_six', 'digit_seven', 'digit_eight', 'digit_nine',
    'SHAPE_GENERATORS',
    # Colors
    'hsv_to_rgb', 'parse_color', 'to_hex',
    'ColorSource', 'PaletteColorSource', 'RandomColorSource', 'make_color_source',
    'PARTY_COLORS', 'GOLD_COLORS',
    # Configuration
    'BlastDirectionality', 'ConfettiConfig',
    # Simulation
    'Particle', 'ParticleSystem', 'ParticleSystemStatus',
    # Host control
    'ConfettiController', 'ConfettiControllerState',
    # Presets
    'ConfettiPreset', 'PresetManager', 'BUILTIN_PRESETS',
    'get_preset_manager', 'get_preset', 'list_presets',
]
