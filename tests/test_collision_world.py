from __future__ import annotations

from panda3d.core import BitMask32, LVector3f

from strider.common.aabb import AABB
from strider.physics.collision_world import CollisionWorld
from strider.physics.ground_sensor import probe_ground
from strider.physics.kinematic_mover import KinematicMover
from strider.physics.tuning import LocomotionTuning


def _floor() -> AABB:
    return AABB(LVector3f(-5.0, -1.0, -5.0), LVector3f(5.0, 0.0, 5.0))


def test_ray_hits_floor_within_length_only() -> None:
    world = CollisionWorld(aabbs=[_floor()])
    assert world.ray_hits(LVector3f(0, 1.0, 0), LVector3f(0, -0.5, 0), BitMask32.allOn()) is True
    assert world.ray_hits(LVector3f(0, 2.0, 0), LVector3f(0, 1.0, 0), BitMask32.allOn()) is False
    # Beyond the floor's horizontal extent.
    assert world.ray_hits(LVector3f(8.0, 1.0, 0), LVector3f(8.0, -0.5, 0), BitMask32.allOn()) is False


def test_ray_respects_collision_mask() -> None:
    world = CollisionWorld()
    world.add_box(_floor(), mask=0b10)
    assert world.ray_hits(LVector3f(0, 1.0, 0), LVector3f(0, -0.5, 0), BitMask32(0b01)) is False
    assert world.ray_hits(LVector3f(0, 1.0, 0), LVector3f(0, -0.5, 0), BitMask32(0b10)) is True


def test_probe_ground_against_bullet_world() -> None:
    world = CollisionWorld(aabbs=[_floor()])
    tuning = LocomotionTuning(ray_offset=0.1, ray_length=0.3)
    assert probe_ground(LVector3f(0, 0.05, 0), tuning, world) is True
    assert probe_ground(LVector3f(0, 1.0, 0), tuning, world) is False


def test_mover_stops_on_floor() -> None:
    world = CollisionWorld(aabbs=[_floor()])
    mover = KinematicMover(collision=world, position=LVector3f(0, 1.0, 0))

    applied = mover.request_displacement(LVector3f(0, -2.0, 0))

    assert abs(mover.position.y) < 0.05
    assert applied.y < -0.9
    assert mover.hit_floor is True


def test_mover_slides_along_wall() -> None:
    wall = AABB(LVector3f(1.0, -5.0, -10.0), LVector3f(2.0, 5.0, 10.0))
    world = CollisionWorld(aabbs=[wall], actor_radius=0.3, actor_half_height=0.9)
    mover = KinematicMover(collision=world, position=LVector3f(0, 0.5, 0))

    mover.request_displacement(LVector3f(3.0, 0.0, 3.0))

    pos = mover.position
    assert 0.6 < pos.x < 0.75
    assert pos.z > 2.5
    assert mover.contact_count >= 1
    assert mover.hit_floor is False


def test_mover_ignores_zero_displacement() -> None:
    world = CollisionWorld(aabbs=[_floor()])
    mover = KinematicMover(collision=world, position=LVector3f(0, 0.5, 0))
    applied = mover.request_displacement(LVector3f(0, 0, 0))
    assert applied == LVector3f(0, 0, 0)
    assert mover.position == LVector3f(0, 0.5, 0)


def test_ray_starting_just_above_floor_face_still_hits() -> None:
    world = CollisionWorld(aabbs=[_floor()])
    for h in (0.02, 0.05, 0.1):
        assert world.ray_hits(LVector3f(0, h, 0), LVector3f(0, h - 1.0, 0), BitMask32.allOn()) is True


def test_actor_resting_on_floor_is_grounded_with_default_tuning() -> None:
    world = CollisionWorld(aabbs=[_floor()])
    mover = KinematicMover(collision=world, position=LVector3f(0, 1.0, 0))
    mover.request_displacement(LVector3f(0, -2.0, 0))
    assert 0.0 < mover.position.y < 0.05

    assert probe_ground(mover.position, LocomotionTuning(), world) is True

    # Stays grounded while pressed into the floor step after step.
    for _ in range(10):
        mover.request_displacement(LVector3f(0.05, -0.04, 0.0))
    assert probe_ground(mover.position, LocomotionTuning(), world) is True
