"""
Confetti Shapes

Decorative outlines a particle is drawn with. Each generator takes the
particle size ``(width, height)`` and returns a ShapePath in particle-local
coordinates; the host fills or strokes it with the particle color.

The built-in set is nine hand-drawn digit glyphs. Outlines are stored as unit
tables (coordinates in 0-1) and scaled by the requested size, so the table
data never changes at runtime.

Path commands follow SVG letters:
- ``M`` move to (x, y)
- ``L`` line to (x, y)
- ``Q`` quadratic bezier (cx, cy, x, y)
- ``C`` cubic bezier (c1x, c1y, c2x, c2y, x, y)
- ``Z`` close the current subpath
"""

import numpy as np
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple


Size = Tuple[float, float]                      # (width, height)
Point = Tuple[float, float]
PathCommand = Tuple[str, Tuple[float, ...]]

_ARITY = {'M': 2, 'L': 2, 'Q': 4, 'C': 6, 'Z': 0}


# =============================================================================
# Path
# =============================================================================

@dataclass(frozen=True)
class ShapePath:
    """Immutable outline made of path commands."""
    commands: Tuple[PathCommand, ...]

    def __post_init__(self):
        for op, args in self.commands:
            if op not in _ARITY:
                raise ValueError(f"Unknown path command: {op}")
            if len(args) != _ARITY[op]:
                raise ValueError(f"Path command {op} takes {_ARITY[op]} values, got {len(args)}")

    @property
    def is_closed(self) -> bool:
        return bool(self.commands) and self.commands[-1][0] == 'Z'

    def flatten(self, segments: int = 8) -> List[List[Point]]:
        """
        Sample the outline into polylines, one per subpath.

        Curves are split into ``segments`` straight pieces. Closed subpaths
        repeat their first point at the end.
        """
        if segments < 1:
            raise ValueError("segments must be >= 1")

        ts = np.linspace(0.0, 1.0, segments + 1)[1:]
        polylines: List[List[Point]] = []
        current: List[Point] = []
        pen = (0.0, 0.0)

        for op, args in self.commands:
            if op == 'M':
                if len(current) > 1:
                    polylines.append(current)
                pen = (args[0], args[1])
                current = [pen]
            elif op == 'L':
                pen = (args[0], args[1])
                current.append(pen)
            elif op == 'Q':
                current.extend(_quad_points(pen, args, ts))
                pen = (args[2], args[3])
            elif op == 'C':
                current.extend(_cubic_points(pen, args, ts))
                pen = (args[4], args[5])
            elif op == 'Z':
                if current:
                    current.append(current[0])
                    pen = current[0]
                    polylines.append(current)
                current = [pen]

        if len(current) > 1:
            polylines.append(current)

        return polylines

    def bounds(self) -> Tuple[float, float, float, float]:
        """Bounding box of the flattened outline as (min_x, min_y, max_x, max_y)"""
        points = [p for line in self.flatten() for p in line]
        if not points:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return (min(xs), min(ys), max(xs), max(ys))


def _quad_points(p0: Point, args: Sequence[float], ts: np.ndarray) -> List[Point]:
    cx, cy, x, y = args
    u = 1.0 - ts
    px = u * u * p0[0] + 2 * u * ts * cx + ts * ts * x
    py = u * u * p0[1] + 2 * u * ts * cy + ts * ts * y
    return [(float(a), float(b)) for a, b in zip(px, py)]


def _cubic_points(p0: Point, args: Sequence[float], ts: np.ndarray) -> List[Point]:
    c1x, c1y, c2x, c2y, x, y = args
    u = 1.0 - ts
    px = u ** 3 * p0[0] + 3 * u * u * ts * c1x + 3 * u * ts * ts * c2x + ts ** 3 * x
    py = u ** 3 * p0[1] + 3 * u * u * ts * c1y + 3 * u * ts * ts * c2y + ts ** 3 * y
    return [(float(a), float(b)) for a, b in zip(px, py)]


def scale_outline(outline: Sequence[PathCommand], size: Size) -> ShapePath:
    """Scale a unit outline (coordinates in 0-1) to ``size``."""
    width, height = size
    commands = []
    for op, args in outline:
        scaled = tuple(
            value * (width if i % 2 == 0 else height)
            for i, value in enumerate(args)
        )
        commands.append((op, scaled))
    return ShapePath(tuple(commands))


# =============================================================================
# Digit outlines (unit coordinates)
# =============================================================================

_ONE = (
    ('M', (0.45, 0.30)),
    ('L', (0.50, 0.20)),
    ('L', (0.50, 0.30)),
    ('L', (0.50, 0.40)),
    ('L', (0.50, 0.50)),
    ('L', (0.45, 0.50)),
    ('L', (0.55, 0.50)),
)

_TWO = (
    ('M', (0.25, 0.25)),
    ('Q', (0.27, 0.14, 0.47, 0.13)),
    ('C', (0.65, 0.12, 0.72, 0.23, 0.72, 0.33)),
    ('C', (0.72, 0.43, 0.61, 0.46, 0.25, 0.75)),
    ('Q', (0.38, 0.75, 0.75, 0.75)),
)

_THREE = (
    ('M', (0.30, 0.35)),
    ('Q', (0.36, 0.25, 0.50, 0.25)),
    ('C', (0.60, 0.25, 0.66, 0.32, 0.68, 0.40)),
    ('Q', (0.69, 0.54, 0.42, 0.57)),
    ('Q', (0.69, 0.58, 0.68, 0.75)),
    ('C', (0.67, 0.80, 0.61, 0.86, 0.50, 0.88)),
    ('C', (0.40, 0.87, 0.37, 0.83, 0.30, 0.78)),
)

_FOUR = (
    ('M', (0.63, 0.88)),
    ('Q', (0.63, 0.41, 0.63, 0.25)),
    ('C', (0.52, 0.25, 0.28, 0.51, 0.25, 0.63)),
    ('Q', (0.38, 0.63, 0.75, 0.63)),
)

_FIVE = (
    ('M', (0.63, 0.25)),
    ('L', (0.25, 0.25)),
    ('Q', (0.25, 0.50, 0.25, 0.55)),
    ('C', (0.39, 0.46, 0.54, 0.47, 0.60, 0.57)),
    ('C', (0.62, 0.66, 0.62, 0.70, 0.57, 0.75)),
    ('Q', (0.45, 0.83, 0.25, 0.75)),
)

_SIX = (
    ('M', (0.70, 0.23)),
    ('Q', (0.60, 0.11, 0.50, 0.13)),
    ('C', (0.34, 0.14, 0.25, 0.31, 0.30, 0.55)),
    ('Q', (0.34, 0.72, 0.50, 0.75)),
    ('Q', (0.67, 0.72, 0.72, 0.57)),
    ('C', (0.71, 0.49, 0.67, 0.39, 0.50, 0.38)),
    ('Q', (0.36, 0.42, 0.30, 0.55)),
)

_SEVEN = (
    ('M', (0.25, 0.25)),
    ('Q', (0.53, 0.25, 0.63, 0.25)),
    ('Q', (0.47, 0.42, 0.38, 0.75)),
)

_EIGHT = (
    ('M', (0.50, 0.13)),
    ('Q', (0.32, 0.18, 0.35, 0.38)),
    ('Q', (0.41, 0.48, 0.50, 0.50)),
    ('Q', (0.35, 0.54, 0.33, 0.70)),
    ('C', (0.34, 0.78, 0.37, 0.81, 0.50, 0.88)),
    ('C', (0.66, 0.83, 0.68, 0.78, 0.70, 0.70)),
    ('Q', (0.69, 0.53, 0.53, 0.50)),
    ('Q', (0.62, 0.47, 0.65, 0.38)),
    ('Q', (0.69, 0.18, 0.50, 0.13)),
    ('Z', ()),
)

_NINE = (
    ('M', (0.38, 0.75)),
    ('Q', (0.40, 0.75, 0.50, 0.75)),
    ('C', (0.58, 0.73, 0.60, 0.68, 0.63, 0.63)),
    ('C', (0.63, 0.54, 0.63, 0.46, 0.63, 0.38)),
    ('C', (0.63, 0.30, 0.55, 0.25, 0.50, 0.25)),
    ('C', (0.46, 0.25, 0.38, 0.28, 0.38, 0.38)),
    ('C', (0.38, 0.45, 0.42, 0.50, 0.50, 0.50)),
    ('Q', (0.58, 0.50, 0.63, 0.38)),
    ('Z', ()),
)


def digit_one(size: Size) -> ShapePath:
    return scale_outline(_ONE, size)


def digit_two(size: Size) -> ShapePath:
    return scale_outline(_TWO, size)


def digit_three(size: Size) -> ShapePath:
    return scale_outline(_THREE, size)


def digit_four(size: Size) -> ShapePath:
    return scale_outline(_FOUR, size)


def digit_five(size: Size) -> ShapePath:
    return scale_outline(_FIVE, size)


def digit_six(size: Size) -> ShapePath:
    return scale_outline(_SIX, size)


def digit_seven(size: Size) -> ShapePath:
    return scale_outline(_SEVEN, size)


def digit_eight(size: Size) -> ShapePath:
    return scale_outline(_EIGHT, size)


def digit_nine(size: Size) -> ShapePath:
    return scale_outline(_NINE, size)


ShapeGenerator = Callable[[Size], ShapePath]

# Registry injected into ParticleSystem; index order is part of the contract
SHAPE_GENERATORS: Tuple[ShapeGenerator, ...] = (
    digit_one,
    digit_two,
    digit_three,
    digit_four,
    digit_five,
    digit_six,
    digit_seven,
    digit_eight,
    digit_nine,
)
