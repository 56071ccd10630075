from __future__ import annotations

import math
from dataclasses import dataclass

from panda3d.core import LVector2f, LVector3f

from strider.common.vecmath import is_zero_2d, normalize_yaw_deg, rotate_about_up, smooth_damp_angle_deg
from strider.physics.motion.state import LocomotionState, VerticalTransition
from strider.physics.tuning import LocomotionTuning


@dataclass(frozen=True)
class HorizontalPlan:
    """Output of one horizontal solve. `speed`/`yaw` are None when there is nothing to report."""

    displacement: LVector3f
    speed: float | None
    yaw: float | None
    target_yaw: float | None


class MotionSolver:
    """Single authority for vertical integration, camera-relative motion and turning."""

    def __init__(self, *, tuning: LocomotionTuning) -> None:
        self._tuning = tuning

    @property
    def tuning(self) -> LocomotionTuning:
        return self._tuning

    def integrate_vertical(self, *, state: LocomotionState, grounded: bool, dt: float) -> VerticalTransition:
        grounded = bool(grounded)
        state.is_grounded = grounded
        if grounded and not state.was_grounded_last_step:
            # Overrides a jump applied earlier in the same step.
            state.vertical_velocity = -float(self._tuning.init_fall_speed)
            transition = VerticalTransition.LANDED
        elif not grounded:
            state.vertical_velocity -= float(self._tuning.gravity) * float(dt)
            limit = float(self._tuning.fall_speed_limit)
            if state.vertical_velocity < -limit:
                state.vertical_velocity = -limit
            transition = VerticalTransition.FALLING
        else:
            transition = VerticalTransition.GROUNDED
        state.was_grounded_last_step = grounded
        return transition

    def apply_jump(self, *, state: LocomotionState, edge_triggered: bool) -> bool:
        # Only a press edge is refused in the air; a level trigger always goes through.
        if edge_triggered and not state.is_grounded:
            return False
        state.vertical_velocity = float(self._tuning.jump_force)
        return True

    def raw_velocity(self, *, state: LocomotionState) -> LVector3f:
        speed = float(self._tuning.move_speed)
        return LVector3f(
            float(state.move_input.x) * speed,
            float(state.vertical_velocity),
            float(state.move_input.y) * speed,
        )

    def displacement(self, *, state: LocomotionState, camera_yaw: float, dt: float) -> LVector3f:
        return rotate_about_up(self.raw_velocity(state=state), camera_yaw) * float(dt)

    @staticmethod
    def speed_scalar(move_input: LVector2f) -> float:
        # Sum of axis magnitudes, not the vector length: diagonal input reports more than 1.
        return abs(float(move_input.x)) + abs(float(move_input.y))

    @staticmethod
    def target_yaw(move_input: LVector2f, camera_yaw: float) -> float:
        yaw = -math.degrees(math.atan2(float(move_input.y), float(move_input.x))) + 90.0
        return yaw + float(camera_yaw)

    def turn_toward(self, *, state: LocomotionState, target_yaw: float, dt: float) -> float:
        yaw, state.turn_velocity = smooth_damp_angle_deg(
            state.yaw,
            target_yaw,
            state.turn_velocity,
            float(self._tuning.turn_smooth_time),
            dt,
        )
        state.yaw = normalize_yaw_deg(yaw)
        return state.yaw

    def plan_horizontal(self, *, state: LocomotionState, camera_yaw: float, dt: float) -> HorizontalPlan:
        delta = self.displacement(state=state, camera_yaw=camera_yaw, dt=dt)
        if is_zero_2d(state.move_input):
            return HorizontalPlan(displacement=delta, speed=None, yaw=None, target_yaw=None)

        speed = self.speed_scalar(state.move_input) if state.is_grounded else None
        target = self.target_yaw(state.move_input, camera_yaw)
        yaw = self.turn_toward(state=state, target_yaw=target, dt=dt)
        return HorizontalPlan(displacement=delta, speed=speed, yaw=yaw, target_yaw=target)
