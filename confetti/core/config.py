"""
Confetti Configuration

Immutable, validated settings for one confetti burst. Invalid values are a
programming error on the caller's side, so they fail at construction with a
ValueError instead of being clamped.
"""

import math
import yaml
from dataclasses import dataclass, asdict, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .palette import Color, parse_color, to_hex
from .shapes import Size


class BlastDirectionality(Enum):
    """How launch angles are chosen for a batch"""
    DIRECTIONAL = "directional"   # Every particle uses blast_direction
    EXPLOSIVE = "explosive"       # Every particle gets its own random angle


@dataclass(frozen=True)
class ConfettiConfig:
    """
    Settings for a ParticleSystem.

    emission_frequency is the chance (0-1) that a started system emits one
    more batch on a given tick; it is not a particles-per-second rate.
    """
    # Emission
    emission_frequency: float = 0.02
    number_of_particles: int = 10

    # Blast
    min_blast_force: float = 5.0
    max_blast_force: float = 20.0
    blast_direction: float = math.pi          # Radians, 0 = right, pi/2 = down
    blast_directionality: BlastDirectionality = BlastDirectionality.DIRECTIONAL

    # Appearance
    colors: Optional[Tuple[Color, ...]] = None  # None or empty = random colors
    minimum_size: Size = (20.0, 10.0)
    maximum_size: Size = (30.0, 15.0)

    # Physics
    particle_drag: float = 0.05
    gravity: float = 0.2

    seed: Optional[int] = None

    def __post_init__(self):
        # Normalize loosely-typed input (strings, lists) before validating
        if isinstance(self.blast_directionality, str):
            try:
                directionality = BlastDirectionality(self.blast_directionality.lower())
            except ValueError:
                available = [d.value for d in BlastDirectionality]
                raise ValueError(
                    f"Unknown blast_directionality '{self.blast_directionality}'. Available: {available}"
                ) from None
            object.__setattr__(self, 'blast_directionality', directionality)

        if self.colors is not None:
            object.__setattr__(self, 'colors', tuple(parse_color(c) for c in self.colors))

        object.__setattr__(self, 'minimum_size', _as_size('minimum_size', self.minimum_size))
        object.__setattr__(self, 'maximum_size', _as_size('maximum_size', self.maximum_size))

        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.blast_directionality, BlastDirectionality):
            raise ValueError(f"blast_directionality must be a BlastDirectionality, got {self.blast_directionality!r}")

        _require_number('emission_frequency', self.emission_frequency)
        if not 0.0 <= self.emission_frequency <= 1.0:
            raise ValueError(f"emission_frequency must be in [0, 1], got {self.emission_frequency}")

        if isinstance(self.number_of_particles, bool) or not isinstance(self.number_of_particles, int):
            raise ValueError(f"number_of_particles must be an integer, got {self.number_of_particles!r}")
        if self.number_of_particles <= 0:
            raise ValueError(f"number_of_particles must be > 0, got {self.number_of_particles}")

        _require_number('min_blast_force', self.min_blast_force)
        _require_number('max_blast_force', self.max_blast_force)
        if self.min_blast_force <= 0:
            raise ValueError(f"min_blast_force must be > 0, got {self.min_blast_force}")
        if self.max_blast_force <= 0:
            raise ValueError(f"max_blast_force must be > 0, got {self.max_blast_force}")
        if self.min_blast_force > self.max_blast_force:
            raise ValueError(
                f"min_blast_force ({self.min_blast_force}) must not exceed max_blast_force ({self.max_blast_force})"
            )

        _require_number('blast_direction', self.blast_direction)

        for axis, low, high in zip(('width', 'height'), self.minimum_size, self.maximum_size):
            if low <= 0 or high <= 0:
                raise ValueError(f"Particle sizes must be > 0, got {axis} range [{low}, {high}]")
            if low > high:
                raise ValueError(f"minimum_size {axis} ({low}) must not exceed maximum_size {axis} ({high})")

        _require_number('particle_drag', self.particle_drag)
        if not 0.0 <= self.particle_drag <= 1.0:
            raise ValueError(f"particle_drag must be in [0, 1], got {self.particle_drag}")

        _require_number('gravity', self.gravity)
        if not 0.0 <= self.gravity <= 1.0:
            raise ValueError(f"gravity must be in [0, 1], got {self.gravity}")

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form (enum values, hex colors, lists), suitable for YAML"""
        data = asdict(self)
        data['blast_directionality'] = self.blast_directionality.value
        data['minimum_size'] = list(self.minimum_size)
        data['maximum_size'] = list(self.maximum_size)
        data['colors'] = [to_hex(c) for c in self.colors] if self.colors is not None else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConfettiConfig':
        """Create from dictionary, ignoring keys that are not config fields"""
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'ConfettiConfig':
        """Load a config from a YAML mapping of field names to values"""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")

        return cls.from_dict(data)


def _require_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if math.isnan(value):
        raise ValueError(f"{name} must not be NaN")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")


def _as_size(name: str, value: Any) -> Size:
    try:
        width, height = value
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a (width, height) pair, got {value!r}") from None
    _require_number(f"{name} width", width)
    _require_number(f"{name} height", height)
    return (float(width), float(height))
