from __future__ import annotations

import math

from panda3d.core import LVector3f

from strider.physics.ground_sensor import GroundProbe, ground_probe_segment, probe_ground
from strider.physics.tuning import LocomotionTuning


class _RecordingQuery:
    def __init__(self, result: bool) -> None:
        self.result = bool(result)
        self.calls: list[tuple[LVector3f, LVector3f, int]] = []

    def ray_hits(self, from_pos, to_pos, mask) -> bool:
        self.calls.append((LVector3f(from_pos), LVector3f(to_pos), int(mask.getWord())))
        return self.result


def test_probe_segment_starts_above_feet_and_points_down() -> None:
    origin, end = ground_probe_segment(LVector3f(2.0, 1.0, -3.0), LocomotionTuning(ray_offset=0.25, ray_length=1.0))
    assert math.isclose(origin.x, 2.0) and math.isclose(origin.z, -3.0)
    assert math.isclose(origin.y, 1.25, abs_tol=1e-6)
    assert math.isclose(end.y, 0.25, abs_tol=1e-6)
    assert math.isclose(end.x, 2.0) and math.isclose(end.z, -3.0)


def test_probe_ground_passes_layer_mask_and_reports_result() -> None:
    query = _RecordingQuery(result=True)
    tuning = LocomotionTuning(ground_mask=0b0100)

    assert probe_ground(LVector3f(0, 0, 0), tuning, query) is True
    assert query.calls[0][2] == 0b0100

    query.result = False
    assert probe_ground(LVector3f(0, 0, 0), tuning, query) is False


def test_probe_hook_is_coloured_by_result() -> None:
    seen: list[GroundProbe] = []
    probe_ground(LVector3f(0, 0, 0), LocomotionTuning(), _RecordingQuery(result=True), on_probe=seen.append)
    probe_ground(LVector3f(0, 0, 0), LocomotionTuning(), _RecordingQuery(result=False), on_probe=seen.append)
    assert [p.color for p in seen] == ["green", "red"]
    assert seen[0].grounded is True
