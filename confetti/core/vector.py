"""
2D vector math for the particle integrator.

Vectors are small value objects: arithmetic returns a new Vec2, the in-place
helpers (``add``, ``set_zero``) exist for the accumulate-then-reset pattern
the integrator uses for acceleration.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass
class Vec2:
    """2D vector with physics operations"""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar: float) -> 'Vec2':
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> 'Vec2':
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> 'Vec2':
        return Vec2(self.x / scalar, self.y / scalar) if scalar != 0 else Vec2()

    def __neg__(self) -> 'Vec2':
        return Vec2(-self.x, -self.y)

    @property
    def length(self) -> float:
        return float(np.sqrt(self.x * self.x + self.y * self.y))

    def normalized(self) -> 'Vec2':
        """Unit vector in the same direction; the zero vector stays zero."""
        l = self.length
        return Vec2(self.x / l, self.y / l) if l != 0 else Vec2()

    def add(self, other: 'Vec2') -> None:
        """Accumulate ``other`` into this vector."""
        self.x += other.x
        self.y += other.y

    def set_zero(self) -> None:
        self.x = 0.0
        self.y = 0.0

    def copy(self) -> 'Vec2':
        return Vec2(self.x, self.y)

    @property
    def has_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y)

    @staticmethod
    def from_angle(angle: float, length: float = 1.0) -> 'Vec2':
        """Polar to cartesian: ``(length * cos(angle), length * sin(angle))``"""
        return Vec2(float(length * np.cos(angle)), float(length * np.sin(angle)))

    @staticmethod
    def of(value: Union['Vec2', Tuple[float, float]]) -> 'Vec2':
        """Coerce a Vec2 or an ``(x, y)`` pair into a fresh Vec2."""
        if isinstance(value, Vec2):
            return value.copy()
        x, y = value
        return Vec2(float(x), float(y))
