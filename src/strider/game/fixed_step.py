from __future__ import annotations

import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class SteppedActor(Protocol):
    def on_spawn(self) -> None: ...

    def on_step(self, dt: float) -> None: ...

    def on_despawn(self) -> None: ...


class FixedStepDriver:
    """
    Runs whole fixed simulation ticks from variable frame time.

    Per tick: pre-step hooks (input sampling, camera), then every actor's `on_step(dt)`.
    """

    def __init__(self, *, tick_rate_hz: int = 50, max_steps_per_frame: int = 8) -> None:
        self.tick_rate_hz = max(1, int(tick_rate_hz))
        self.max_steps_per_frame = max(1, int(max_steps_per_frame))
        self.tick = 0
        self._accum = 0.0
        self._actors: list[SteppedActor] = []
        self._pre_step: list[Callable[[int, float], None]] = []

    @property
    def dt(self) -> float:
        return 1.0 / float(self.tick_rate_hz)

    @property
    def actors(self) -> list[SteppedActor]:
        return list(self._actors)

    def spawn(self, actor: SteppedActor) -> None:
        actor.on_spawn()
        self._actors.append(actor)

    def despawn(self, actor: SteppedActor) -> None:
        self._actors.remove(actor)
        actor.on_despawn()

    def add_pre_step(self, hook: Callable[[int, float], None]) -> None:
        self._pre_step.append(hook)

    def step_once(self) -> None:
        dt = self.dt
        for hook in self._pre_step:
            hook(self.tick, dt)
        for actor in list(self._actors):
            actor.on_step(dt)
        self.tick += 1

    def advance(self, frame_dt: float) -> int:
        """Accumulate `frame_dt` seconds and run as many whole ticks as fit (capped)."""

        self._accum += max(0.0, float(frame_dt))
        steps = 0
        while self._accum >= self.dt and steps < self.max_steps_per_frame:
            self.step_once()
            self._accum -= self.dt
            steps += 1
        if self._accum >= self.dt:
            # Spiral-of-death guard: drop backlog we could not simulate this frame.
            logger.warning("Fixed-step backlog of %.3fs dropped after %d ticks", self._accum, steps)
            self._accum = 0.0
        return steps
