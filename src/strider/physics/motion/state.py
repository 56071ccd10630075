from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from panda3d.core import LVector2f


class MotionMode(str, Enum):
    GROUND = "ground"
    AIR = "air"


class VerticalTransition(str, Enum):
    LANDED = "landed"
    FALLING = "falling"
    GROUNDED = "grounded"


@dataclass
class LocomotionState:
    move_input: LVector2f = field(default_factory=lambda: LVector2f(0.0, 0.0))
    # Positive is up. The only value carried between vertical integrations.
    vertical_velocity: float = 0.0
    # Smoothing state for the turn-to-face spring; meaningless on its own.
    turn_velocity: float = 0.0
    is_grounded: bool = False
    was_grounded_last_step: bool = False
    # Actor facing about world up, in [0, 360).
    yaw: float = 0.0

    @property
    def mode(self) -> MotionMode:
        return MotionMode.GROUND if self.is_grounded else MotionMode.AIR

    def reset(self, *, yaw: float = 0.0) -> None:
        self.move_input = LVector2f(0.0, 0.0)
        self.vertical_velocity = 0.0
        self.turn_velocity = 0.0
        self.is_grounded = False
        self.was_grounded_last_step = False
        self.yaw = float(yaw)
