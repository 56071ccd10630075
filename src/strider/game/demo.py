"""Headless scripted run: one actor on a flat Bullet floor, driven by a key timeline."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from panda3d.core import LVector3f

from strider.app_config import RunConfig
from strider.common.aabb import AABB
from strider.game.animation_observer import AnimationRecorder
from strider.game.camera_observer import FollowViewpoint
from strider.game.determinism import DeterminismTrace, deterministic_state_hash
from strider.game.fixed_step import FixedStepDriver
from strider.game.input_system import KeyboardInputSampler
from strider.physics.collision_world import CollisionWorld
from strider.physics.kinematic_mover import KinematicMover
from strider.physics.locomotion_controller import LocomotionController
from strider.physics.tuning import LocomotionTuning, load_tuning

logger = logging.getLogger(__name__)

# Probe from 0.1 above to 0.1 below the feet so "grounded" means touching the floor.
# The stock 1m ray already counts the actor as grounded a metre up.
DEMO_TUNING = LocomotionTuning(ray_offset=0.1, ray_length=0.2)
SPAWN_POINT = LVector3f(0.0, 1.0, 0.0)


@dataclass(frozen=True)
class KeySegment:
    start: int
    end: int
    keys: tuple[str, ...]


DEFAULT_SCRIPT: tuple[KeySegment, ...] = (
    KeySegment(start=40, end=140, keys=("w",)),
    KeySegment(start=90, end=93, keys=("space",)),
    KeySegment(start=140, end=190, keys=("d",)),
)


def load_key_script(path: Path) -> tuple[KeySegment, ...]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"key script {path} must be a JSON list of segments")
    out: list[KeySegment] = []
    for i, seg in enumerate(raw):
        if not isinstance(seg, dict):
            raise ValueError(f"key script segment #{i} must be an object")
        try:
            start = int(seg["start"])
            end = int(seg["end"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"key script segment #{i} needs integer start/end") from exc
        keys = seg.get("keys") or []
        if isinstance(keys, str):
            keys = keys.split()
        out.append(KeySegment(start=start, end=end, keys=tuple(str(k) for k in keys)))
    return tuple(out)


def keys_held_at(script: tuple[KeySegment, ...], tick: int) -> set[str]:
    held: set[str] = set()
    for seg in script:
        if seg.start <= tick < seg.end:
            held.update(seg.keys)
    return held


@dataclass
class DemoResult:
    steps: int
    position: LVector3f
    yaw: float
    grounded: bool
    trace_hash: str
    animator: AnimationRecorder
    lines: list[str] = field(default_factory=list)


def run_demo(cfg: RunConfig) -> DemoResult:
    tuning = load_tuning(Path(cfg.tuning_path)) if cfg.tuning_path else DEMO_TUNING
    script = load_key_script(Path(cfg.script_path)) if cfg.script_path else DEFAULT_SCRIPT

    world = CollisionWorld(aabbs=[AABB(LVector3f(-50.0, -1.0, -50.0), LVector3f(50.0, 0.0, 50.0))])
    mover = KinematicMover(collision=world, position=SPAWN_POINT)
    animator = AnimationRecorder()
    camera = FollowViewpoint(yaw=cfg.camera_yaw)
    controller = LocomotionController(
        tuning=tuning,
        executor=mover,
        animator=animator,
        viewpoint=camera,
        ground=world,
    )
    sampler = KeyboardInputSampler(controller, layout=cfg.layout)
    driver = FixedStepDriver(tick_rate_hz=cfg.tick_rate_hz)
    trace = DeterminismTrace(tick_rate_hz=driver.tick_rate_hz)
    lines: list[str] = []

    driver.add_pre_step(lambda tick, _dt: sampler.sample(keys_held_at(script, tick)))
    driver.add_pre_step(lambda _tick, dt: camera.observe(dt=dt))
    driver.spawn(controller)

    logger.info("Running %d ticks at %d Hz (camera yaw %.1f)", cfg.steps, driver.tick_rate_hz, cfg.camera_yaw)
    for _ in range(max(0, int(cfg.steps))):
        driver.step_once()
        st = controller.state
        pos = mover.position
        tick_hash = deterministic_state_hash(
            pos=pos,
            vertical_velocity=st.vertical_velocity,
            yaw_deg=st.yaw,
            grounded=st.is_grounded,
            move_x=float(st.move_input.x),
            move_y=float(st.move_input.y),
        )
        trace.record(tick=driver.tick, tick_hash=tick_hash)
        if cfg.trace:
            lines.append(
                f"{driver.tick:5d} pos=({pos.x:+.3f},{pos.y:+.3f},{pos.z:+.3f}) "
                f"vy={st.vertical_velocity:+.3f} yaw={st.yaw:7.2f} "
                f"{st.mode.value:6s} speed={animator.speed:.2f}"
            )
    driver.despawn(controller)

    return DemoResult(
        steps=driver.tick,
        position=mover.position,
        yaw=controller.state.yaw,
        grounded=controller.state.is_grounded,
        trace_hash=trace.trace_hash,
        animator=animator,
        lines=lines,
    )
