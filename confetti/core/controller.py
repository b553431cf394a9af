"""
Confetti Controller

Host-facing play/stop switch for a ParticleSystem. The host owns the frame
loop and calls tick() once per frame; the controller forwards it to the
system and stops emission once an optional duration (in ticks) has run out.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from .particles import Particle, ParticleSystem, VectorLike
from .shapes import Size


logger = logging.getLogger(__name__)


class ConfettiControllerState(Enum):
    PLAYING = "playing"
    STOPPED = "stopped"


class ConfettiController:
    """
    Example:
        controller = ConfettiController(system, duration=120)  # ~2s at 60fps
        controller.attach(position=(320, 0), screen_size=(640, 480))
        controller.play()

        every frame:
            controller.tick()
            draw(controller.particles)
    """

    def __init__(self, system: ParticleSystem, duration: Optional[int] = None):
        if duration is not None and duration <= 0:
            raise ValueError(f"duration must be a positive number of ticks, got {duration}")

        self.system = system
        self.duration = duration
        self._state = ConfettiControllerState.STOPPED
        self._elapsed_ticks = 0

    def attach(self, position: VectorLike, screen_size: Size) -> None:
        """Forward emitter placement and viewport to the system"""
        self.system.set_position(position)
        self.system.set_screen_size(screen_size)

    def play(self) -> None:
        """Start (or restart) emission and reset the duration countdown"""
        self._state = ConfettiControllerState.PLAYING
        self._elapsed_ticks = 0
        self.system.start()

    def stop(self) -> None:
        """Stop emitting; particles already in flight keep falling"""
        self._state = ConfettiControllerState.STOPPED
        self.system.stop()

    def tick(self) -> None:
        self.system.update()

        if self._state is not ConfettiControllerState.PLAYING:
            return

        self._elapsed_ticks += 1
        if self.duration is not None and self._elapsed_ticks >= self.duration:
            logger.debug("Confetti duration of %d ticks elapsed, stopping emission", self.duration)
            self.stop()

    @property
    def state(self) -> ConfettiControllerState:
        return self._state

    @property
    def elapsed_ticks(self) -> int:
        return self._elapsed_ticks

    @property
    def particles(self) -> Tuple[Particle, ...]:
        return self.system.particles

    @property
    def is_done(self) -> bool:
        """True once the system has stopped and every particle has left"""
        return self.system.is_finished
