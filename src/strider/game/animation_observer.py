from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class AnimationDriver(Protocol):
    """Read-only sink for locomotion animation parameters. Never feeds back into motion."""

    def set_speed(self, speed: float) -> None: ...

    def set_airborne(self, airborne: bool) -> None: ...


@dataclass
class AnimationRecorder:
    """Keeps the latest animation parameters plus every write, in order."""

    speed: float = 0.0
    airborne: bool = False
    history: list[tuple[str, float | bool]] = field(default_factory=list)

    def set_speed(self, speed: float) -> None:
        self.speed = float(speed)
        self.history.append(("speed", self.speed))

    def set_airborne(self, airborne: bool) -> None:
        self.airborne = bool(airborne)
        self.history.append(("airborne", self.airborne))

    def writes(self, name: str) -> list[float | bool]:
        return [value for key, value in self.history if key == name]
