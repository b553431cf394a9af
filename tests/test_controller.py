"""Host-facing play/stop controller"""

import pytest

from confetti.core.config import ConfettiConfig
from confetti.core.controller import ConfettiController, ConfettiControllerState
from confetti.core.particles import ParticleSystem, ParticleSystemStatus
from confetti.core.vector import Vec2


def make_controller(duration=None, **overrides):
    settings = dict(emission_frequency=0.0, number_of_particles=4, gravity=1.0, seed=1)
    settings.update(overrides)
    return ConfettiController(ParticleSystem(ConfettiConfig(**settings)), duration=duration)


def test_starts_stopped():
    controller = make_controller()
    assert controller.state is ConfettiControllerState.STOPPED
    controller.tick()
    assert controller.particles == ()


def test_play_emits_on_first_tick():
    controller = make_controller()
    controller.play()
    controller.tick()
    assert controller.state is ConfettiControllerState.PLAYING
    assert len(controller.particles) == 4
    assert controller.system.status is ParticleSystemStatus.STARTED


def test_duration_stops_emission():
    controller = make_controller(duration=3)
    controller.play()
    for _ in range(2):
        controller.tick()
    assert controller.state is ConfettiControllerState.PLAYING

    controller.tick()
    assert controller.elapsed_ticks == 3
    assert controller.state is ConfettiControllerState.STOPPED
    assert controller.system.status is ParticleSystemStatus.STOPPED


def test_without_duration_plays_until_stopped():
    controller = make_controller()
    controller.play()
    for _ in range(100):
        controller.tick()
    assert controller.state is ConfettiControllerState.PLAYING
    controller.stop()
    assert controller.system.status is ParticleSystemStatus.STOPPED


def test_play_resets_countdown():
    controller = make_controller(duration=5)
    controller.play()
    for _ in range(4):
        controller.tick()
    controller.play()
    assert controller.elapsed_ticks == 0
    for _ in range(4):
        controller.tick()
    assert controller.state is ConfettiControllerState.PLAYING


def test_attach_and_drain():
    controller = make_controller(duration=1)
    controller.attach(position=(50, 50), screen_size=(100, 100))
    assert controller.system.position == Vec2(50.0, 50.0)
    assert controller.system.borders is not None

    controller.play()
    for _ in range(2000):
        controller.tick()
        if controller.is_done:
            break

    assert controller.is_done
    assert controller.particles == ()


@pytest.mark.parametrize("duration", [0, -5])
def test_invalid_duration(duration):
    with pytest.raises(ValueError):
        make_controller(duration=duration)
