from __future__ import annotations

import math

from panda3d.core import LVector2f, LVector3f

# World convention: Y-up, X right, Z forward. Yaw rotates about +Y; yaw 0 faces +Z.
WORLD_UP = LVector3f(0.0, 1.0, 0.0)
WORLD_DOWN = LVector3f(0.0, -1.0, 0.0)


def repeat(value: float, length: float) -> float:
    """Wrap `value` into [0, length)."""

    out = float(value) - math.floor(float(value) / float(length)) * float(length)
    # Float rounding can land exactly on `length` for tiny negative inputs.
    if out >= float(length):
        out = 0.0
    return max(0.0, out)


def normalize_yaw_deg(yaw_deg: float) -> float:
    return repeat(yaw_deg, 360.0)


def delta_angle_deg(current: float, target: float) -> float:
    """Shortest signed difference from `current` to `target`, in (-180, 180]."""

    d = repeat(float(target) - float(current), 360.0)
    if d > 180.0:
        d -= 360.0
    return d


def rotate_about_up(vec: LVector3f, yaw_deg: float) -> LVector3f:
    """Rotate `vec` about world up by `yaw_deg` (positive yaw turns +Z toward +X)."""

    rad = math.radians(float(yaw_deg))
    c = math.cos(rad)
    s = math.sin(rad)
    x = float(vec.x)
    z = float(vec.z)
    return LVector3f(x * c + z * s, float(vec.y), -x * s + z * c)


def is_zero_2d(vec: LVector2f) -> bool:
    return float(vec.x) == 0.0 and float(vec.y) == 0.0


def smooth_damp(
    current: float,
    target: float,
    velocity: float,
    smooth_time: float,
    dt: float,
    max_speed: float = math.inf,
) -> tuple[float, float]:
    """
    Critically damped spring toward `target`.

    Returns `(value, velocity)`; the caller carries `velocity` into the next call.
    Uses the usual rational approximation of exp(-omega * dt), and never overshoots.
    """

    smooth_time = max(1e-4, float(smooth_time))
    dt = float(dt)
    if dt <= 0.0:
        return float(current), float(velocity)

    omega = 2.0 / smooth_time
    x = omega * dt
    decay = 1.0 / (1.0 + x + 0.48 * x * x + 0.235 * x * x * x)

    change = float(current) - float(target)
    original_to = float(target)
    max_change = float(max_speed) * smooth_time
    change = max(-max_change, min(max_change, change))
    target = float(current) - change

    temp = (float(velocity) + omega * change) * dt
    velocity = (float(velocity) - omega * temp) * decay
    out = target + (change + temp) * decay

    if (original_to - float(current) > 0.0) == (out > original_to):
        out = original_to
        velocity = (out - original_to) / dt
    return out, velocity


def smooth_damp_angle_deg(
    current: float,
    target: float,
    velocity: float,
    smooth_time: float,
    dt: float,
    max_speed: float = math.inf,
) -> tuple[float, float]:
    """`smooth_damp` over degrees, taking the shortest path across the 0/360 wrap."""

    target = float(current) + delta_angle_deg(current, target)
    return smooth_damp(current, target, velocity, smooth_time, dt, max_speed)
