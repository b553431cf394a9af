"""
Confetti - Frame-stepped confetti burst simulation for any host renderer
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from .core import (
    Vec2, ShapePath, SHAPE_GENERATORS,
    BlastDirectionality, ConfettiConfig,
    Particle, ParticleSystem, ParticleSystemStatus,
    ConfettiController, ConfettiControllerState,
    get_preset_manager, list_presets,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    'Vec2',
    'ShapePath',
    'SHAPE_GENERATORS',
    'BlastDirectionality',
    'ConfettiConfig',
    'Particle',
    'ParticleSystem',
    'ParticleSystemStatus',
    'ConfettiController',
    'ConfettiControllerState',
    'list_presets',
    'create_burst',
]


def create_burst(
    preset: Optional[str] = None,
    config: Optional[ConfettiConfig] = None,
    on_finished: Optional[Callable[[], None]] = None,
    **overrides
) -> ParticleSystem:
    """
    Build a ParticleSystem from a preset or config.

    Args:
        preset: Preset name (ignored if config is given)
        config: Explicit configuration (default settings if neither is given)
        on_finished: Called once the stopped burst has no particles left
        **overrides: ConfettiConfig fields to change, e.g. seed=42

    Returns:
        A ParticleSystem ready for set_position / initialize_viewport / start
    """
    if config is None:
        config = get_preset_manager().get_config(preset) if preset else ConfettiConfig()

    if overrides:
        config = replace(config, **overrides)

    return ParticleSystem(config, on_finished=on_finished)
