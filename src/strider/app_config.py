from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RunConfig:
    # Number of fixed ticks to simulate before exiting.
    steps: int = 200
    # Fixed simulation rate; 50 Hz gives the usual 0.02s step.
    tick_rate_hz: int = 50
    # Camera yaw in degrees for the whole run.
    camera_yaw: float = 0.0
    # Optional JSON tuning file (see strider.physics.tuning). None -> demo tuning;
    # a missing or unreadable file -> stock LocomotionTuning defaults.
    tuning_path: str | None = None
    # Optional JSON key script: [{"start": 0, "end": 60, "keys": ["w", "space"]}, ...].
    script_path: str | None = None
    # Keyboard layout used to read the key script ("qwerty" or "azerty").
    layout: str = "qwerty"
    # Print one line per tick instead of only the summary.
    trace: bool = False
