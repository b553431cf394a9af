"""Single-particle physics: force order, lifetime ramps, rotation, NaN masking"""

import math

import numpy as np
import pytest

from confetti.core.particles import Particle
from confetti.core.shapes import SHAPE_GENERATORS, digit_eight
from confetti.core.vector import Vec2


def make_particle(force=(2.0, 1.0), gravity=0.5, drag=0.1, seed=0, **kwargs):
    rng = np.random.default_rng(seed)
    return Particle(force, (255, 0, 0), (20.0, 10.0), gravity, drag, rng, **kwargs)


def test_spawn_ranges():
    for seed in range(20):
        p = make_particle(seed=seed)
        assert 1.0 <= p.mass < 11.0
        assert -3.0 <= p.velocity.x < 3.0
        assert -3.0 <= p.velocity.y < 3.0
        assert all(-0.1 <= w < 0.1 for w in p.angular_velocities)
        assert p.location == Vec2(0.0, 0.0)
        assert p.acceleration == Vec2(0.0, 0.0)
        assert (p.angle_x, p.angle_y, p.angle_z) == (0.0, 0.0, 0.0)
        assert p.time_alive == 0


def test_gravity_setting_maps_onto_force_range():
    assert make_particle(gravity=0.0).gravity_magnitude == pytest.approx(0.1)
    assert make_particle(gravity=1.0).gravity_magnitude == pytest.approx(5.0)
    assert make_particle(gravity=0.5).gravity_magnitude == pytest.approx(2.55)


def test_single_update_matches_force_order():
    p = make_particle(force=(2.0, 1.0), gravity=0.5, drag=0.1)
    m = p.mass
    vx, vy = p.velocity.x, p.velocity.y
    w = p.angular_velocities

    # 1. drag
    speed = math.sqrt(vx * vx + vy * vy)
    magnitude = 0.1 * speed * speed
    ax = (-vx / speed) * magnitude / m
    ay = (-vy / speed) * magnitude / m
    # 2. start-up force (time_alive 0 < 5)
    ax += 2.0 / m
    ay += 1.0 / m
    # 3. wind (time_alive 0 < 25)
    ay += -1.0 / m
    # 5. gravity
    ay += 2.55 / m

    p.update()

    expected_vx, expected_vy = vx + ax, vy + ay
    assert np.isclose(p.velocity.x, expected_vx)
    assert np.isclose(p.velocity.y, expected_vy)
    assert np.isclose(p.location.x, expected_vx)
    assert np.isclose(p.location.y, expected_vy)
    assert p.acceleration == Vec2(0.0, 0.0)
    assert p.time_alive == 1

    spin = 0.0001 / m
    assert np.isclose(p.angle_x, w[0] + spin)
    assert np.isclose(p.angle_y, w[1] + spin)
    assert np.isclose(p.angle_z, w[2] + spin)
    assert np.allclose(p.angular_velocities, [wk + spin for wk in w])


def test_second_update_accumulates_location():
    p = make_particle(drag=0.0)
    p.update()
    first_location = p.location
    p.update()
    assert np.isclose(p.location.x, first_location.x + p.velocity.x)
    assert np.isclose(p.location.y, first_location.y + p.velocity.y)


def test_start_up_and_wind_ramps():
    # No drag, minimum gravity: velocity changes are pure force / mass
    p = make_particle(force=(4.0, 0.0), gravity=0.0, drag=0.0)
    m = p.mass
    g = 0.1

    deltas = []
    for _ in range(30):
        before = p.velocity
        p.update()
        after = p.velocity
        deltas.append((after.x - before.x, after.y - before.y))

    for tick, (dx, dy) in enumerate(deltas):
        expected_dx = 4.0 / m if tick < 5 else 0.0
        expected_dy = (-1.0 / m if tick < 25 else 0.0) + g / m
        assert np.isclose(dx, expected_dx, atol=1e-12), tick
        assert np.isclose(dy, expected_dy, atol=1e-12), tick


def test_drag_opposes_velocity():
    p = make_particle(force=(0.0, 0.0), drag=1.0)
    v = p.velocity
    p.drag()
    a = p.acceleration
    assert a.x * v.x + a.y * v.y < 0
    # |a| = drag * |v|^2 / m
    assert np.isclose(a.length, v.length ** 2 / p.mass)


def test_drag_on_resting_particle_is_zero():
    p = make_particle(drag=1.0)
    p._velocity = Vec2(0.0, 0.0)
    p.drag()
    assert p.acceleration == Vec2(0.0, 0.0)


def test_apply_force_is_additive_and_scaled_by_mass():
    p = make_particle()
    m = p.mass
    p.apply_force((m, 0.0))
    p.apply_force(Vec2(m, 2 * m))
    assert np.isclose(p.acceleration.x, 2.0)
    assert np.isclose(p.acceleration.y, 2.0)


def test_nan_location_reads_as_origin():
    p = make_particle()
    p._location = Vec2(float('nan'), 12.0)
    assert p.location == Vec2(0.0, 0.0)

    p._location = Vec2(3.0, float('nan'))
    assert p.location == Vec2(0.0, 0.0)


def test_nan_velocity_never_raises_from_location():
    p = make_particle()
    p._velocity = Vec2(float('nan'), float('nan'))
    p.update()
    loc = p.location
    assert loc == Vec2(0.0, 0.0)


def test_location_is_a_copy():
    p = make_particle()
    p.update()
    loc = p.location
    loc.x += 1000
    assert p.location.x != loc.x


def test_shape_comes_from_registry():
    p = make_particle(shapes=(digit_eight,))
    assert p.shape == digit_eight(p.size)
    assert p.shape.is_closed


def test_shape_is_one_of_the_digits():
    p = make_particle(seed=3)
    candidates = [gen(p.size) for gen in SHAPE_GENERATORS]
    assert p.shape in candidates


def test_same_seed_same_particle():
    a = make_particle(seed=42)
    b = make_particle(seed=42)
    for _ in range(10):
        a.update()
        b.update()
    assert a.mass == b.mass
    assert a.location == b.location
    assert a.angle_z == b.angle_z
    assert a.shape == b.shape
