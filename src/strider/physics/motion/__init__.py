"""Locomotion state, input intents, and the motion solver."""

from strider.physics.motion.intent import InputEvent, InputEventQueue, JumpTriggered, MoveCanceled, MovePerformed
from strider.physics.motion.solver import HorizontalPlan, MotionSolver
from strider.physics.motion.state import LocomotionState, MotionMode, VerticalTransition

__all__ = [
    "HorizontalPlan",
    "InputEvent",
    "InputEventQueue",
    "JumpTriggered",
    "LocomotionState",
    "MotionMode",
    "MotionSolver",
    "MoveCanceled",
    "MovePerformed",
    "VerticalTransition",
]
