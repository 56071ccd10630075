from __future__ import annotations

from panda3d.bullet import BulletBoxShape, BulletCapsuleShape, BulletRigidBodyNode, BulletWorld, YUp
from panda3d.core import BitMask32, LVector3f, NodePath, Point3, TransformState

from strider.common.aabb import AABB
from strider.physics.tuning import GROUND_MASK_ALL


class CollisionWorld:
    """Bullet world used for collision queries (rays + capsule sweeps) against static boxes."""

    def __init__(
        self,
        *,
        aabbs: list[AABB] | None = None,
        actor_radius: float = 0.3,
        actor_half_height: float = 0.9,
    ) -> None:
        self._bworld = BulletWorld()
        # Gravity is integrated by the locomotion solver, so keep Bullet gravity neutral.
        self._bworld.setGravity(LVector3f(0, 0, 0))
        self._root = NodePath("collision-root")
        self._static_nodes: list[NodePath] = []

        radius = float(actor_radius)
        # Bullet capsule height is cylinder height (excluding hemispherical caps).
        cyl_h = max(0.01, float(actor_half_height * 2.0 - radius * 2.0))
        self._actor_sweep_shape = BulletCapsuleShape(radius, cyl_h, YUp)
        self.actor_radius = radius
        self.actor_half_height = float(actor_half_height)

        for box in aabbs or []:
            self.add_box(box)

    def add_box(self, box: AABB, *, mask: int = GROUND_MASK_ALL) -> int:
        half = box.half_extents()
        center = box.center()
        shape = BulletBoxShape(LVector3f(float(half.x), float(half.y), float(half.z)))
        # The default margin rounds the box inward; rays starting just above a face would miss it.
        shape.setMargin(0.0)
        body = BulletRigidBodyNode("static-box")
        body.setMass(0.0)
        body.addShape(shape)
        np = self._root.attachNewNode(body)
        np.setPos(float(center.x), float(center.y), float(center.z))
        np.setCollideMask(BitMask32(int(mask)))
        self._bworld.attachRigidBody(body)
        self._static_nodes.append(np)
        return len(self._static_nodes) - 1

    def sweep_closest(self, from_pos: LVector3f, to_pos: LVector3f):
        return self._bworld.sweepTestClosest(
            self._actor_sweep_shape,
            TransformState.makePos(from_pos),
            TransformState.makePos(to_pos),
            BitMask32.allOn(),
            0.0,
        )

    def ray_closest(self, from_pos: LVector3f, to_pos: LVector3f, mask: BitMask32 | None = None):
        return self._bworld.rayTestClosest(
            Point3(from_pos),
            Point3(to_pos),
            mask if mask is not None else BitMask32.allOn(),
        )

    def ray_hits(self, from_pos: LVector3f, to_pos: LVector3f, mask: BitMask32) -> bool:
        return bool(self.ray_closest(from_pos, to_pos, mask).hasHit())
