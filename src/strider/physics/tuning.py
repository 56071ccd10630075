"""Per-actor locomotion tuning, optionally persisted as JSON."""

from __future__ import annotations

import json
import logging
import math
import os
import secrets
from dataclasses import asdict, dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)

GROUND_MASK_ALL = 0xFFFFFFFF


@dataclass(frozen=True)
class LocomotionTuning:
    # Upward speed set by a jump.
    jump_force: float = 5.0
    # Horizontal speed at full stick deflection.
    move_speed: float = 5.0
    gravity: float = 15.0
    # Fall speed magnitude cap. `inf` disables the cap.
    fall_speed_limit: float = 10.0
    # Downward speed applied at the moment of landing; keeps the actor pressed to the floor.
    init_fall_speed: float = 2.0
    # Ground probe: ray from feet + up * ray_offset, pointing down, ray_length long.
    ray_length: float = 1.0
    ray_offset: float = 0.0
    ground_mask: int = GROUND_MASK_ALL
    # Time constant of the turn-to-face smoothing.
    turn_smooth_time: float = 0.1

    def validate(self) -> "LocomotionTuning":
        for name in ("jump_force", "move_speed", "gravity", "fall_speed_limit", "init_fall_speed", "ray_length"):
            value = float(getattr(self, name))
            if math.isnan(value) or value < 0.0:
                raise ValueError(f"{name} must be a non-negative number, got {value!r}")
        for name in ("jump_force", "move_speed", "gravity", "init_fall_speed", "ray_length", "ray_offset"):
            if not math.isfinite(float(getattr(self, name))):
                raise ValueError(f"{name} must be finite")
        if not (float(self.turn_smooth_time) > 0.0 and math.isfinite(float(self.turn_smooth_time))):
            raise ValueError(f"turn_smooth_time must be positive, got {self.turn_smooth_time!r}")
        if not (0 <= int(self.ground_mask) <= GROUND_MASK_ALL):
            raise ValueError(f"ground_mask must fit in 32 bits, got {self.ground_mask!r}")
        return self


def _coerce(value, default):
    if isinstance(default, int):
        if isinstance(value, str):
            return int(value, 0)
        return int(value)
    if isinstance(value, str) and value.strip().lower() in ("inf", "infinity"):
        return math.inf
    return float(value)


def tuning_from_dict(raw: dict) -> LocomotionTuning:
    """Build tuning from a loose mapping; unknown keys are ignored, bad values keep defaults."""

    defaults = LocomotionTuning()
    kwargs: dict = {}
    for fld in fields(LocomotionTuning):
        if fld.name not in raw:
            continue
        default = getattr(defaults, fld.name)
        try:
            value = _coerce(raw[fld.name], default)
            LocomotionTuning(**{fld.name: value}).validate()
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid tuning value %s=%r", fld.name, raw[fld.name])
            continue
        kwargs[fld.name] = value
    return LocomotionTuning(**kwargs)


def load_tuning(path: Path) -> LocomotionTuning:
    p = Path(path)
    if not p.exists():
        return LocomotionTuning()
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Could not read tuning file %s; using defaults.", p)
        return LocomotionTuning()
    if not isinstance(raw, dict):
        logger.warning("Tuning file %s is not a JSON object; using defaults.", p)
        return LocomotionTuning()
    return tuning_from_dict(raw)


def save_tuning(tuning: LocomotionTuning, path: Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(tuning)
    if math.isinf(payload["fall_speed_limit"]):
        payload["fall_speed_limit"] = "inf"
    tmp = p.with_name(f"{p.name}.{os.getpid()}.{secrets.token_hex(4)}.tmp")
    tmp.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    tmp.replace(p)
