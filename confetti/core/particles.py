"""
Confetti Particle System

Frame-stepped simulation of a confetti burst.

A ParticleSystem owns its particles, decides when to emit new batches and
culls particles that leave the screen. Each Particle integrates its own
forces once per tick:
- Drag: opposes velocity, proportional to speed squared
- Blast: the start-up force, re-applied for the first 5 ticks
- Wind: a small upward push for the first 25 ticks
- Gravity: constant downward pull
- Tumbling: three independent rotation angles for pseudo-3D flipping

Time is measured in ticks, one per host frame. There is no dt: the host
decides the frame rate and calls update() once per frame.

Example:
    system = ParticleSystem(ConfettiConfig(number_of_particles=20), on_finished=dispose)
    system.set_position((200, 0))
    system.initialize_viewport((400, 800))
    system.start()

    every frame:
        system.update()
        for p in system.particles:
            draw(p.shape, p.color, p.location, p.angle_x, p.angle_y, p.angle_z)
"""

import logging
import numpy as np
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .config import BlastDirectionality, ConfettiConfig
from .palette import Color, ColorSource, make_color_source
from .shapes import SHAPE_GENERATORS, ShapeGenerator, ShapePath, Size
from .vector import Vec2


logger = logging.getLogger(__name__)

VectorLike = Union[Vec2, Tuple[float, float]]


def _lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation"""
    return a + (b - a) * t


# =============================================================================
# Particle
# =============================================================================

class Particle:
    """
    A single piece of confetti.

    Location is relative to the emitter. All randomized properties (mass,
    initial velocity, shape, spin) are drawn from ``rng`` in a fixed order,
    so a seeded generator reproduces the particle exactly.
    """

    ANGULAR_ACCELERATION = 0.0001
    START_UP_TICKS = 5
    WIND_TICKS = 25
    WIND_FORCE = (0.0, -1.0)

    MIN_MASS = 1.0
    MAX_MASS = 11.0
    MAX_INITIAL_SPEED = 3.0
    MAX_ANGULAR_VELOCITY = 0.1

    # gravity setting 0-1 maps onto this force range
    MIN_GRAVITY = 0.1
    MAX_GRAVITY = 5.0

    def __init__(
        self,
        start_up_force: VectorLike,
        color: Color,
        size: Size,
        gravity: float,
        particle_drag: float,
        rng: np.random.Generator,
        shapes: Sequence[ShapeGenerator] = SHAPE_GENERATORS
    ):
        self._start_up_force = Vec2.of(start_up_force)
        self._color = color
        self._size = size
        self._drag_coefficient = particle_drag
        self._gravity = _lerp(self.MIN_GRAVITY, self.MAX_GRAVITY, gravity)

        self._mass = float(rng.uniform(self.MIN_MASS, self.MAX_MASS))
        self._location = Vec2()
        self._acceleration = Vec2()
        self._velocity = Vec2(
            float(rng.uniform(-self.MAX_INITIAL_SPEED, self.MAX_INITIAL_SPEED)),
            float(rng.uniform(-self.MAX_INITIAL_SPEED, self.MAX_INITIAL_SPEED))
        )
        self._shape = shapes[int(rng.integers(len(shapes)))](size)

        # Rotation about x, y, z
        self._angles = [0.0, 0.0, 0.0]
        self._angular_velocities = [
            float(rng.uniform(-self.MAX_ANGULAR_VELOCITY, self.MAX_ANGULAR_VELOCITY))
            for _ in range(3)
        ]

        self._time_alive = 0

    # -------------------------------------------------------------------------
    # Forces
    # -------------------------------------------------------------------------

    def apply_force(self, force: VectorLike) -> None:
        """Accumulate ``force / mass`` into this tick's acceleration."""
        self._acceleration.add(Vec2.of(force) / self._mass)

    def drag(self) -> None:
        """Air resistance: -direction(v) * drag * |v|^2"""
        speed = self._velocity.length
        drag_magnitude = self._drag_coefficient * speed * speed
        self.apply_force(-self._velocity.normalized() * drag_magnitude)

    def update(self) -> None:
        """Advance one tick. The force order is fixed."""
        self.drag()

        if self._time_alive < self.START_UP_TICKS:
            self.apply_force(self._start_up_force)
        if self._time_alive < self.WIND_TICKS:
            self.apply_force(self.WIND_FORCE)

        self._time_alive += 1

        self.apply_force((0.0, self._gravity))

        # Semi-implicit Euler with a step of one tick
        self._velocity.add(self._acceleration)
        self._location.add(self._velocity)
        self._acceleration.set_zero()

        spin = self.ANGULAR_ACCELERATION / self._mass
        for k in range(3):
            self._angular_velocities[k] += spin
            self._angles[k] += self._angular_velocities[k]

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def location(self) -> Vec2:
        """Emitter-relative position; a NaN coordinate reads as the origin"""
        if self._location.has_nan:
            return Vec2(0.0, 0.0)
        return self._location.copy()

    @property
    def velocity(self) -> Vec2:
        return self._velocity.copy()

    @property
    def acceleration(self) -> Vec2:
        return self._acceleration.copy()

    @property
    def start_up_force(self) -> Vec2:
        return self._start_up_force.copy()

    @property
    def color(self) -> Color:
        return self._color

    @property
    def shape(self) -> ShapePath:
        return self._shape

    @property
    def size(self) -> Size:
        return self._size

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def drag_coefficient(self) -> float:
        return self._drag_coefficient

    @property
    def gravity_magnitude(self) -> float:
        return self._gravity

    @property
    def time_alive(self) -> int:
        return self._time_alive

    @property
    def angle_x(self) -> float:
        return self._angles[0]

    @property
    def angle_y(self) -> float:
        return self._angles[1]

    @property
    def angle_z(self) -> float:
        return self._angles[2]

    @property
    def angular_velocities(self) -> Tuple[float, float, float]:
        return tuple(self._angular_velocities)

    def __repr__(self) -> str:
        loc = self.location
        return f"Particle(location=({loc.x:.1f}, {loc.y:.1f}), time_alive={self._time_alive}, color={self._color})"


# =============================================================================
# Particle System
# =============================================================================

class ParticleSystemStatus(Enum):
    """Emitter lifecycle. A fresh system has no status until start()."""
    STARTED = "started"
    STOPPED = "stopped"
    FINISHED = "finished"


class ParticleSystem:
    """
    Emitter, integrator driver and culler for one confetti burst.

    Lifecycle:
        start()  -> STARTED   emits a batch whenever there are no particles,
                              otherwise one batch with probability
                              emission_frequency per tick
        stop()   -> STOPPED   no new batches; once every particle has left
                              the screen the system finishes on its own and
                              calls on_finished
        finish() -> FINISHED  particles freeze in place

    Culling only runs once both the emitter position and the viewport are
    known. Particles are removed when they fall below 110% of the screen
    height or drift past 10% beyond either side; the top is unbounded so
    confetti blasted upward comes back down.
    """

    BORDER_MARGIN = 1.1

    def __init__(
        self,
        config: ConfettiConfig,
        rng: Optional[np.random.Generator] = None,
        shapes: Optional[Sequence[ShapeGenerator]] = None,
        color_source: Optional[ColorSource] = None,
        on_finished: Optional[Callable[[], None]] = None
    ):
        """
        Args:
            config: Validated burst settings
            rng: Random generator for every stochastic decision
                 (default: seeded from config.seed)
            shapes: Outline generators to pick from (default: the nine digits)
            color_source: Color provider (default: built from config.colors)
            on_finished: Called once when a stopped system runs out of particles
        """
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        self.shapes: Tuple[ShapeGenerator, ...] = tuple(shapes) if shapes is not None else SHAPE_GENERATORS
        if not self.shapes:
            raise ValueError("At least one shape generator is required")

        self.color_source = color_source or make_color_source(config.colors, self.rng)
        self.on_finished = on_finished

        self._status: Optional[ParticleSystemStatus] = None
        self._particles: List[Particle] = []

        self._position: Optional[Vec2] = None
        self._screen_size: Optional[Size] = None
        self._viewport_initialized = False
        self._bottom_border = 0.0
        self._right_border = 0.0
        self._left_border = 0.0

    # -------------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------------

    def set_position(self, position: VectorLike) -> None:
        """Place the emitter in screen coordinates"""
        self._position = Vec2.of(position)

    def initialize_viewport(self, size: Size) -> None:
        """Set the screen size and derive the culling borders from it"""
        self._screen_size = _viewport_size(size)
        width, height = self._screen_size
        self._bottom_border = height * self.BORDER_MARGIN
        self._right_border = width * self.BORDER_MARGIN
        self._left_border = width - self._right_border
        self._viewport_initialized = True

        logger.debug(
            "Viewport %sx%s: borders bottom=%.1f right=%.1f left=%.1f",
            width, height, self._bottom_border, self._right_border, self._left_border
        )

    def set_screen_size(self, size: Size) -> None:
        """
        Resize notification from the host.

        Only the first call derives the borders; later sizes are recorded
        but the borders stay where the burst started. Call
        initialize_viewport() to recompute them explicitly.
        """
        if not self._viewport_initialized:
            self.initialize_viewport(size)
            return

        self._screen_size = _viewport_size(size)
        logger.debug("Screen resized to %s, keeping existing culling borders", size)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        self._set_status(ParticleSystemStatus.STARTED)

    def stop(self) -> None:
        self._set_status(ParticleSystemStatus.STOPPED)

    def finish(self) -> None:
        self._set_status(ParticleSystemStatus.FINISHED)

    def _set_status(self, status: ParticleSystemStatus) -> None:
        if status is not self._status:
            logger.debug("Particle system %s -> %s", self._status.value if self._status else None, status.value)
        self._status = status

    def clear(self) -> None:
        """Remove all particles"""
        self._particles.clear()

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def update(self) -> None:
        """Advance one frame: cull, age, emit, then finish if drained."""
        self._clean()

        if self._status is not ParticleSystemStatus.FINISHED:
            for particle in self._particles:
                particle.update()

        if self._status is ParticleSystemStatus.STARTED:
            # Emit immediately when empty, so the first frame after start() has confetti
            if not self._particles:
                self._emit()
            elif self.rng.random() < self.config.emission_frequency:
                self._emit()

        elif self._status is ParticleSystemStatus.STOPPED and not self._particles:
            self._set_status(ParticleSystemStatus.FINISHED)
            if self.on_finished is not None:
                self.on_finished()

    def _clean(self) -> None:
        if self._position is None or not self._viewport_initialized:
            return
        self._particles = [p for p in self._particles if not self._is_outside_of_border(p.location)]

    def _is_outside_of_border(self, location: Vec2) -> bool:
        global_position = location + self._position
        return (
            global_position.y >= self._bottom_border or
            global_position.x >= self._right_border or
            global_position.x <= self._left_border
        )

    def _emit(self) -> None:
        self._particles.extend(self._generate_particles(self.config.number_of_particles))
        logger.debug("Emitted %d particles (%d alive)", self.config.number_of_particles, len(self._particles))

    def _generate_particles(self, number: int = 1) -> List[Particle]:
        particles = []
        for _ in range(number):
            force = self._generate_particle_force()
            color = self.color_source.next_color()
            size = self._random_size()
            particles.append(Particle(
                force,
                color,
                size,
                self.config.gravity,
                self.config.particle_drag,
                self.rng,
                self.shapes
            ))
        return particles

    def _generate_particle_force(self) -> Vec2:
        direction = self.config.blast_direction
        if self.config.blast_directionality is BlastDirectionality.EXPLOSIVE:
            # Whole degrees 0-358
            direction = float(np.radians(self.rng.integers(359)))

        magnitude = float(self.rng.uniform(self.config.min_blast_force, self.config.max_blast_force))
        return Vec2.from_angle(direction, magnitude)

    def _random_size(self) -> Size:
        (min_w, min_h), (max_w, max_h) = self.config.minimum_size, self.config.maximum_size
        return (float(self.rng.uniform(min_w, max_w)), float(self.rng.uniform(min_h, max_h)))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def status(self) -> Optional[ParticleSystemStatus]:
        return self._status

    @property
    def particles(self) -> Tuple[Particle, ...]:
        """Snapshot of live particles in draw order (oldest first)"""
        return tuple(self._particles)

    @property
    def particle_count(self) -> int:
        return len(self._particles)

    @property
    def is_finished(self) -> bool:
        return self._status is ParticleSystemStatus.FINISHED

    @property
    def position(self) -> Optional[Vec2]:
        return self._position.copy() if self._position is not None else None

    @property
    def screen_size(self) -> Optional[Size]:
        return self._screen_size

    @property
    def borders(self) -> Optional[Tuple[float, float, float]]:
        """(bottom, right, left) culling thresholds, or None before the viewport is known"""
        if not self._viewport_initialized:
            return None
        return (self._bottom_border, self._right_border, self._left_border)


def _viewport_size(size: Size) -> Size:
    width, height = size
    if width <= 0 or height <= 0:
        raise ValueError(f"Viewport size must be positive, got {size}")
    return (float(width), float(height))
