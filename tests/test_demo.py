from __future__ import annotations

import json

import pytest

from strider.__main__ import main
from strider.app_config import RunConfig
from strider.game.demo import KeySegment, keys_held_at, load_key_script, run_demo


def test_default_demo_lands_walks_jumps_and_turns() -> None:
    result = run_demo(RunConfig(steps=200))

    assert result.steps == 200
    assert result.grounded is True
    assert abs(result.position.y) < 0.05
    # 100 ticks forward at 5 m/s, then 50 ticks to the right.
    assert 8.0 < result.position.z < 10.5
    assert 4.0 < result.position.x < 5.5
    assert abs(result.yaw - 90.0) < 1.0
    assert True in result.animator.writes("airborne")
    assert result.animator.speed == 0.0


def test_demo_is_deterministic() -> None:
    a = run_demo(RunConfig(steps=120))
    b = run_demo(RunConfig(steps=120))
    assert a.trace_hash == b.trace_hash
    assert a.trace_hash != "0" * 16


def test_camera_yaw_rotates_forward_walk(tmp_path) -> None:
    script = tmp_path / "walk.json"
    script.write_text(json.dumps([{"start": 30, "end": 80, "keys": "w"}]), encoding="utf-8")

    result = run_demo(RunConfig(steps=80, camera_yaw=90.0, script_path=str(script)))

    assert result.position.x > 4.0
    assert abs(result.position.z) < 0.05
    assert abs(result.yaw - 90.0) < 1.0


def test_load_key_script_rejects_malformed_segments(tmp_path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps([{"start": "x", "end": 3}]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_key_script(bad)

    not_list = tmp_path / "obj.json"
    not_list.write_text(json.dumps({"start": 0}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_key_script(not_list)


def test_keys_held_at_unions_overlapping_segments() -> None:
    script = (
        KeySegment(start=0, end=10, keys=("w",)),
        KeySegment(start=5, end=6, keys=("space",)),
    )
    assert keys_held_at(script, 5) == {"w", "space"}
    assert keys_held_at(script, 6) == {"w"}
    assert keys_held_at(script, 10) == set()


def test_cli_prints_trace_and_summary(capsys) -> None:
    main(["--steps", "30", "--trace", "--camera-yaw", "45"])
    out = capsys.readouterr().out.strip().splitlines()
    assert len(out) == 31
    assert out[-1].startswith("ticks=30 ")
    assert "trace=" in out[-1]


def test_demo_with_stock_tuning_file_ends_grounded(tmp_path) -> None:
    tuning = tmp_path / "tuning.json"
    tuning.write_text("{}", encoding="utf-8")

    result = run_demo(RunConfig(steps=200, tuning_path=str(tuning)))

    assert result.grounded is True
    assert abs(result.position.y) < 0.05
    assert result.position.z > 8.0
    assert result.animator.writes("speed")


def test_demo_falls_back_to_defaults_for_out_of_range_tuning(tmp_path) -> None:
    tuning = tmp_path / "tuning.json"
    tuning.write_text(json.dumps({"gravity": -1}), encoding="utf-8")

    result = run_demo(RunConfig(steps=60, tuning_path=str(tuning)))

    assert result.steps == 60
    assert result.grounded is True
