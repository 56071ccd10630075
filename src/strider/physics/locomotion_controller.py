from __future__ import annotations

import logging
from typing import Callable, Protocol

from panda3d.core import LVector2f, LVector3f

from strider.common.vecmath import normalize_yaw_deg
from strider.game.animation_observer import AnimationDriver
from strider.game.camera_observer import Viewpoint
from strider.physics.ground_sensor import GroundProbe, GroundQuery, probe_ground
from strider.physics.motion.intent import InputEvent, InputEventQueue, JumpTriggered, MoveCanceled, MovePerformed
from strider.physics.motion.solver import HorizontalPlan, MotionSolver
from strider.physics.motion.state import LocomotionState, VerticalTransition
from strider.physics.tuning import LocomotionTuning

logger = logging.getLogger(__name__)


class MovementExecutor(Protocol):
    """Owns the actor position and applies displacements with collision response."""

    @property
    def position(self) -> LVector3f: ...

    def request_displacement(self, delta: LVector3f) -> LVector3f: ...


class MissingCollaboratorError(Exception):
    """Raised at construction when a required collaborator was not supplied."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"LocomotionController requires a {name}; none was given.")


class LocomotionController:
    """
    Fixed-step locomotion for one actor: ground probe, vertical integration, then
    camera-relative move and turn.

    Input arrives through `on_move` / `on_move_canceled` / `on_jump` (or `on_input_event`)
    at any time; it is queued and applied at the start of the next `on_step`.
    """

    def __init__(
        self,
        *,
        tuning: LocomotionTuning,
        executor: MovementExecutor | None,
        animator: AnimationDriver | None,
        viewpoint: Viewpoint | None,
        ground: GroundQuery | None,
        queue_size: int = 32,
        on_probe: Callable[[GroundProbe], None] | None = None,
    ) -> None:
        for name, collaborator in (
            ("movement executor", executor),
            ("animation driver", animator),
            ("viewpoint", viewpoint),
            ("ground query", ground),
        ):
            if collaborator is None:
                raise MissingCollaboratorError(name)

        self.tuning = tuning.validate()
        self.executor = executor
        self.animator = animator
        self.viewpoint = viewpoint
        self.ground = ground
        self.on_probe = on_probe

        self.state = LocomotionState()
        self._solver = MotionSolver(tuning=self.tuning)
        self._events = InputEventQueue(maxlen=queue_size)
        self._spawned = False
        self.last_plan: HorizontalPlan | None = None

    @property
    def spawned(self) -> bool:
        return self._spawned

    @property
    def pending_events(self) -> int:
        return len(self._events)

    # ── lifecycle ──────────────────────────────────────────────

    def on_spawn(self, *, yaw: float = 0.0) -> None:
        self.state.reset(yaw=normalize_yaw_deg(yaw))
        # Drop anything queued before this spawn.
        self._events.disable()
        self._events.enable()
        self._spawned = True

    def on_despawn(self) -> None:
        self._events.disable()
        self._spawned = False

    # ── input ──────────────────────────────────────────────────

    def on_input_event(self, event: InputEvent) -> bool:
        return self._events.push(event)

    def on_move(self, vector: LVector2f) -> bool:
        return self.on_input_event(MovePerformed(x=float(vector.x), y=float(vector.y)))

    def on_move_canceled(self) -> bool:
        return self.on_input_event(MoveCanceled())

    def on_jump(self, *, edge_triggered: bool = True) -> bool:
        return self.on_input_event(JumpTriggered(edge_triggered=bool(edge_triggered)))

    def _apply_event(self, event: InputEvent) -> None:
        if isinstance(event, MovePerformed):
            self.state.move_input = LVector2f(float(event.x), float(event.y))
        elif isinstance(event, MoveCanceled):
            self.state.move_input = LVector2f(0.0, 0.0)
            self.animator.set_speed(0.0)
        elif isinstance(event, JumpTriggered):
            if self._solver.apply_jump(state=self.state, edge_triggered=event.edge_triggered):
                self.animator.set_airborne(True)
            else:
                logger.debug("Ignoring jump press while airborne (vy=%.3f)", self.state.vertical_velocity)
        else:
            raise TypeError(f"unknown input event: {event!r}")

    # ── step ───────────────────────────────────────────────────

    def on_step(self, dt: float) -> None:
        if not self._spawned:
            raise RuntimeError("LocomotionController.on_step called before on_spawn")
        dt = float(dt)
        for event in self._events.drain():
            self._apply_event(event)

        grounded = probe_ground(self.executor.position, self.tuning, self.ground, on_probe=self.on_probe)
        self.integrate_vertical(grounded=grounded, dt=dt)
        self.move_and_orient(camera_yaw=float(self.viewpoint.get_yaw()), dt=dt)

    def integrate_vertical(self, *, grounded: bool, dt: float) -> VerticalTransition:
        transition = self._solver.integrate_vertical(state=self.state, grounded=grounded, dt=dt)
        if transition is VerticalTransition.LANDED:
            logger.debug("Landed; vertical velocity snapped to %.3f", self.state.vertical_velocity)
            self.animator.set_airborne(False)
        return transition

    def move_and_orient(self, *, camera_yaw: float, dt: float) -> HorizontalPlan:
        plan = self._solver.plan_horizontal(state=self.state, camera_yaw=camera_yaw, dt=dt)
        self.executor.request_displacement(plan.displacement)
        if plan.speed is not None:
            self.animator.set_speed(plan.speed)
        self.last_plan = plan
        return plan
