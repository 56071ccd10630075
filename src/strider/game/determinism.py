from __future__ import annotations

import hashlib
from collections import deque
from dataclasses import dataclass

from panda3d.core import LVector3f


def deterministic_state_hash(
    *,
    pos: LVector3f,
    vertical_velocity: float,
    yaw_deg: float,
    grounded: bool,
    move_x: float,
    move_y: float,
) -> str:
    """Quantized per-tick locomotion hash for scripted-run determinism checks."""

    q = (
        int(round(float(pos.x) * 1000.0)),
        int(round(float(pos.y) * 1000.0)),
        int(round(float(pos.z) * 1000.0)),
        int(round(float(vertical_velocity) * 1000.0)),
        int(round(float(yaw_deg) * 100.0)),
        int(bool(grounded)),
        int(round(float(move_x) * 1000.0)),
        int(round(float(move_y) * 1000.0)),
    )
    h = hashlib.blake2b(digest_size=8)
    h.update(repr(q).encode("utf-8", errors="strict"))
    return h.hexdigest()


@dataclass(frozen=True)
class DeterminismSample:
    tick: int
    tick_hash: str
    trace_hash: str


class DeterminismTrace:
    """Rolling determinism trace with per-tick hash + cumulative trace hash."""

    def __init__(self, *, tick_rate_hz: int, seconds: float = 5.0) -> None:
        maxlen = max(1, int(float(tick_rate_hz) * max(2.0, min(10.0, float(seconds)))))
        self._samples: deque[DeterminismSample] = deque(maxlen=maxlen)
        self._trace_hash = "0" * 16

    @property
    def trace_hash(self) -> str:
        return str(self._trace_hash)

    def reset(self) -> None:
        self._samples.clear()
        self._trace_hash = "0" * 16

    def record(self, *, tick: int, tick_hash: str) -> str:
        h = hashlib.blake2b(digest_size=8)
        h.update(self._trace_hash.encode("utf-8", errors="strict"))
        h.update(str(tick_hash).encode("utf-8", errors="strict"))
        self._trace_hash = h.hexdigest()
        self._samples.append(DeterminismSample(tick=int(tick), tick_hash=str(tick_hash), trace_hash=self._trace_hash))
        return self._trace_hash

    def samples(self) -> list[DeterminismSample]:
        return list(self._samples)
