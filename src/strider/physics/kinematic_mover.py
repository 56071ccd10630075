from __future__ import annotations

import math

from panda3d.core import LVector3f

from strider.common.vecmath import WORLD_UP
from strider.physics.collision_world import CollisionWorld

# Gap kept between the capsule and whatever it touches. A ray cast down from the
# resting feet starts this far above the floor and must still register the hit.
CONTACT_SKIN = 0.02


class KinematicMover:
    """
    Movement executor: collide-and-slide of a capsule through a `CollisionWorld`.

    `position` is the actor's feet. The capsule sits on top of it.
    """

    def __init__(
        self,
        *,
        collision: CollisionWorld,
        position: LVector3f,
        max_slope_deg: float = 46.0,
        max_iterations: int = 4,
    ) -> None:
        self.collision = collision
        self._pos = LVector3f(position)
        self._walkable_y = float(math.cos(math.radians(float(max_slope_deg))))
        self._max_iterations = max(1, int(max_iterations))
        self.contact_count = 0
        self.hit_floor = False

    @property
    def position(self) -> LVector3f:
        return LVector3f(self._pos)

    def _center(self, feet: LVector3f) -> LVector3f:
        return feet + WORLD_UP * float(self.collision.actor_half_height)

    @staticmethod
    def _clip(vec: LVector3f, normal: LVector3f) -> LVector3f:
        v = LVector3f(vec)
        n = LVector3f(normal)
        if n.lengthSquared() > 1e-12:
            n.normalize()
        v -= n * float(v.dot(n))
        # Avoid tiny oscillations.
        if abs(v.x) < 1e-6:
            v.x = 0.0
        if abs(v.y) < 1e-6:
            v.y = 0.0
        if abs(v.z) < 1e-6:
            v.z = 0.0
        return v

    def request_displacement(self, delta: LVector3f) -> LVector3f:
        """Move by `delta`, sliding along anything solid. Returns the displacement actually applied."""

        self.contact_count = 0
        self.hit_floor = False
        start = LVector3f(self._pos)
        if delta.lengthSquared() <= 1e-12:
            return LVector3f(0, 0, 0)

        pos = LVector3f(self._pos)
        remaining = LVector3f(delta)
        planes: list[LVector3f] = []
        skin = CONTACT_SKIN

        for _ in range(self._max_iterations):
            if remaining.lengthSquared() <= 1e-10:
                break

            target = pos + remaining
            hit = self.collision.sweep_closest(self._center(pos), self._center(target))
            if not hit.hasHit():
                pos = target
                break
            self.contact_count += 1

            hit_frac = max(0.0, min(1.0, float(hit.getHitFraction())))
            # Move to contact (slightly before), then push out along normal (skin).
            pos = pos + remaining * max(0.0, hit_frac - 1e-4)

            n = LVector3f(hit.getHitNormal())
            if n.lengthSquared() > 1e-12:
                n.normalize()
            planes.append(n)
            pos = pos + n * skin
            if n.y > self._walkable_y:
                self.hit_floor = True

            remaining = remaining * (1.0 - hit_frac)
            if remaining.dot(n) < 0.0:
                remaining = self._clip(remaining, n)
            # Multi-plane clip: if still going into any previous plane, clip again.
            for p in planes[:-1]:
                if remaining.dot(p) < 0.0:
                    remaining = self._clip(remaining, p)

        self._pos = pos
        return pos - start
