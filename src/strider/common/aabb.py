from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f


@dataclass(frozen=True)
class AABB:
    minimum: LVector3f
    maximum: LVector3f

    def center(self) -> LVector3f:
        return (self.minimum + self.maximum) * 0.5

    def half_extents(self) -> LVector3f:
        return (self.maximum - self.minimum) * 0.5
