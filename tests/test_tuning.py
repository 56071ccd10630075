from __future__ import annotations

import json
import math

import pytest

from strider.physics.tuning import GROUND_MASK_ALL, LocomotionTuning, load_tuning, save_tuning, tuning_from_dict


def test_defaults_match_reference_character() -> None:
    t = LocomotionTuning()
    assert (t.jump_force, t.move_speed, t.gravity) == (5.0, 5.0, 15.0)
    assert (t.fall_speed_limit, t.init_fall_speed) == (10.0, 2.0)
    assert (t.ray_length, t.ray_offset, t.turn_smooth_time) == (1.0, 0.0, 0.1)
    assert t.ground_mask == GROUND_MASK_ALL
    assert t.validate() is t


@pytest.mark.parametrize(
    "kwargs",
    [
        {"gravity": -1.0},
        {"move_speed": float("nan")},
        {"turn_smooth_time": 0.0},
        {"ray_length": math.inf},
        {"ground_mask": -1},
    ],
)
def test_validate_rejects_bad_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        LocomotionTuning(**kwargs).validate()


def test_infinite_fall_speed_limit_is_allowed() -> None:
    LocomotionTuning(fall_speed_limit=math.inf).validate()


def test_tuning_from_dict_coerces_and_ignores_unknown_keys() -> None:
    t = tuning_from_dict(
        {
            "jump_force": "7.5",
            "ground_mask": "0x3",
            "fall_speed_limit": "inf",
            "bogus": 1,
            "gravity": "not-a-number",
        }
    )
    assert t.jump_force == 7.5
    assert t.ground_mask == 3
    assert math.isinf(t.fall_speed_limit)
    assert t.gravity == 15.0


def test_save_then_load_preserves_values(tmp_path) -> None:
    p = tmp_path / "nested" / "tuning.json"
    save_tuning(LocomotionTuning(move_speed=3.25, fall_speed_limit=math.inf), p)

    raw = json.loads(p.read_text(encoding="utf-8"))
    assert raw["fall_speed_limit"] == "inf"

    loaded = load_tuning(p)
    assert loaded.move_speed == 3.25
    assert math.isinf(loaded.fall_speed_limit)
    assert list(p.parent.glob("*.tmp")) == []


def test_load_falls_back_to_defaults_for_missing_or_broken_files(tmp_path, caplog) -> None:
    assert load_tuning(tmp_path / "absent.json") == LocomotionTuning()

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with caplog.at_level("WARNING"):
        assert load_tuning(broken) == LocomotionTuning()
    assert "using defaults" in caplog.text

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    assert load_tuning(listing) == LocomotionTuning()


def test_out_of_range_values_keep_defaults(tmp_path, caplog) -> None:
    p = tmp_path / "tuning.json"
    p.write_text(json.dumps({"gravity": -1, "turn_smooth_time": 0, "ground_mask": -5, "move_speed": 3}), encoding="utf-8")

    with caplog.at_level("WARNING"):
        t = load_tuning(p)

    assert t.gravity == 15.0
    assert t.turn_smooth_time == 0.1
    assert t.ground_mask == GROUND_MASK_ALL
    assert t.move_speed == 3.0
    assert t.validate() is t
    assert "gravity" in caplog.text
