from __future__ import annotations

import math
from typing import Protocol

from strider.common.vecmath import delta_angle_deg, normalize_yaw_deg


class Viewpoint(Protocol):
    """Camera yaw source. Locomotion reads it every step and never writes it."""

    def get_yaw(self) -> float: ...


class FixedViewpoint:
    def __init__(self, yaw: float = 0.0) -> None:
        self.yaw = float(yaw)

    def get_yaw(self) -> float:
        return float(self.yaw)


class FollowViewpoint:
    """Camera whose yaw eases toward a target yaw (e.g. a mouse-driven orbit)."""

    def __init__(self, *, yaw: float = 0.0, smoothing_hz: float = 8.0) -> None:
        self._yaw = normalize_yaw_deg(yaw)
        self.target_yaw = self._yaw
        self.smoothing_hz = float(smoothing_hz)

    def get_yaw(self) -> float:
        return float(self._yaw)

    def observe(self, *, dt: float) -> float:
        frame_dt = max(0.0, float(dt))
        blend = 1.0 - math.exp(-max(0.0, self.smoothing_hz) * frame_dt) if frame_dt > 0.0 else 0.0
        self._yaw = normalize_yaw_deg(self._yaw + delta_angle_deg(self._yaw, self.target_yaw) * blend)
        return self._yaw
