from __future__ import annotations

import argparse
import logging

from strider.app_config import RunConfig
from strider.game.demo import run_demo


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="strider", description="Headless locomotion controller demo")
    parser.add_argument("--steps", type=int, default=200, help="Number of fixed ticks to simulate.")
    parser.add_argument("--tick-rate", type=int, default=50, help="Fixed simulation rate in Hz.")
    parser.add_argument("--camera-yaw", type=float, default=0.0, help="Camera yaw in degrees.")
    parser.add_argument("--tuning", default=None, help="Optional JSON tuning file.")
    parser.add_argument(
        "--script",
        default=None,
        help='Optional JSON key timeline, e.g. [{"start": 0, "end": 60, "keys": ["w"]}].',
    )
    parser.add_argument(
        "--layout", default="qwerty", choices=("qwerty", "azerty"), help="Keyboard layout of the key script."
    )
    parser.add_argument("--trace", action="store_true", help="Print one line per tick.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING...).")
    args = parser.parse_args(argv)

    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")

    result = run_demo(
        RunConfig(
            steps=args.steps,
            tick_rate_hz=args.tick_rate,
            camera_yaw=args.camera_yaw,
            tuning_path=args.tuning,
            script_path=args.script,
            layout=args.layout,
            trace=bool(args.trace),
        )
    )
    for line in result.lines:
        print(line)
    pos = result.position
    print(
        f"ticks={result.steps} pos=({pos.x:+.3f},{pos.y:+.3f},{pos.z:+.3f}) "
        f"yaw={result.yaw:.2f} grounded={result.grounded} trace={result.trace_hash}"
    )


if __name__ == "__main__":
    main()
