from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from panda3d.core import BitMask32, LVector3f

from strider.common.vecmath import WORLD_DOWN, WORLD_UP
from strider.physics.tuning import LocomotionTuning


class GroundQuery(Protocol):
    """Narrow ray-cast seam; `CollisionWorld` is the real implementation."""

    def ray_hits(self, from_pos: LVector3f, to_pos: LVector3f, mask: BitMask32) -> bool: ...


@dataclass(frozen=True)
class GroundProbe:
    origin: LVector3f
    end: LVector3f
    grounded: bool

    @property
    def color(self) -> str:
        return "green" if self.grounded else "red"


def ground_probe_segment(position: LVector3f, tuning: LocomotionTuning) -> tuple[LVector3f, LVector3f]:
    # Start slightly inside the body; starting exactly on the floor can miss it.
    origin = LVector3f(position) + WORLD_UP * float(tuning.ray_offset)
    end = origin + WORLD_DOWN * float(tuning.ray_length)
    return origin, end


def probe_ground(
    position: LVector3f,
    tuning: LocomotionTuning,
    query: GroundQuery,
    *,
    on_probe: Callable[[GroundProbe], None] | None = None,
) -> bool:
    """True iff a downward ray from the actor's feet hits `ground_mask` geometry within `ray_length`."""

    origin, end = ground_probe_segment(position, tuning)
    grounded = bool(query.ray_hits(origin, end, BitMask32(int(tuning.ground_mask))))
    if on_probe is not None:
        on_probe(GroundProbe(origin=origin, end=end, grounded=grounded))
    return grounded
