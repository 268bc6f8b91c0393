# tests/test_smoke.py
# ------------------------------------------------------------
# Smoke tests for the kill sheet engine.
# Run:  pytest -q
#
from __future__ import annotations

import math

from core.models import KillSheetInput, result_field_names
from core.killsheet import compute, is_valid_input, invalid_result


def _worked_example(**overrides) -> KillSheetInput:
    base = dict(
        hole_depth=10000.0,
        current_mud_weight=10.0,
        sidpp=500.0,
        user_stroke_pressure=800.0,
        pump_capacity=0.1,
        dp_id=3.0,
        dc_length=0.0,
        dc_id=0.0,
        hwdp_present=False,
        hole_diameter=8.5,
        dp_od=5.0,
        casing_id=8.5,
        casing_setting_depth=0.0,
    )
    base.update(overrides)
    return KillSheetInput(**base)


def test_worked_example_kill_parameters():
    """KMW, ICP and FCP match the hand calculation to 0.01."""
    res = compute(_worked_example())
    assert round(res.kill_mud_weight, 2) == 10.96
    assert round(res.icp, 2) == 1300.00
    assert round(res.fcp, 2) == 876.92


def test_worked_example_volumes():
    """Drill pipe over the full depth; annulus all open hole around DP."""
    res = compute(_worked_example())
    k = 12.0 / 9691.04
    dp_cap = 10000.0 * math.pi * 9.0 / 4.0 * k
    ann = 10000.0 * math.pi * (8.5 ** 2 - 5.0 ** 2) / 4.0 * k
    assert math.isclose(res.drill_pipe_capacity, dp_cap, rel_tol=1e-12)
    assert math.isclose(res.surface_to_bit_strokes, dp_cap / 0.1, rel_tol=1e-12)
    assert math.isclose(res.ann_open_dp, ann, rel_tol=1e-12)
    assert res.ann_cased_dp == 0.0
    assert math.isclose(res.bit_to_surface_strokes, ann / 0.1, rel_tol=1e-12)
    assert round(res.drill_pipe_capacity, 2) == 87.53


def test_result_is_finite_for_valid_input():
    res = compute(_worked_example())
    assert res.is_finite()
    assert "KMW 10.96" in res.summary()


def test_no_kill_rate_gives_zero_times():
    """spm = 0 is 'not known yet': times are 0, strokes still computed."""
    res = compute(_worked_example(strokes_per_minute=0.0))
    assert res.time_surface_to_bit == 0.0
    assert res.bit_to_surface_time == 0.0
    assert res.total_pumping_time == 0.0
    assert res.surface_to_bit_strokes > 0.0


def test_times_at_kill_rate():
    res = compute(_worked_example(strokes_per_minute=30.0))
    assert math.isclose(res.time_surface_to_bit, res.surface_to_bit_strokes / 30.0, rel_tol=1e-12)
    assert math.isclose(res.bit_to_surface_time, res.bit_to_surface_strokes / 30.0, rel_tol=1e-12)


def test_invalid_input_is_flagged_but_never_raises():
    """Missing depth / pump output / mud weight fail the gate; compute still returns."""
    for bad in (dict(hole_depth=0.0), dict(pump_capacity=0.0), dict(current_mud_weight=0.0)):
        inp = _worked_example(**bad)
        assert not is_valid_input(inp)
        compute(inp)


def test_zero_depth_gives_non_finite_kill_mud_weight():
    res = compute(_worked_example(hole_depth=0.0))
    assert math.isinf(res.kill_mud_weight)
    assert not res.is_finite()
    assert res.summary() == "No results."


def test_cleared_sheet_is_all_nan():
    res = invalid_result()
    assert all(math.isnan(getattr(res, name)) for name in result_field_names())


def test_invalid_result_is_fresh_each_call():
    assert invalid_result() is not invalid_result()
