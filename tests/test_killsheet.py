# tests/test_killsheet.py
# ------------------------------------------------------------
# Invariants of the kill sheet calculation.
#
from __future__ import annotations

import itertools
import logging
import math

from core.models import KillSheetInput, KillSheetResult
from core.killsheet import compute
from core.inputs import input_from_mapping
from core.schedule import pressure_schedule, pressure_series
from core.volumes import internal_capacity, annular_capacity, strokes_for_volume, pumping_time


def _cased_well(**overrides) -> KillSheetInput:
    base = dict(
        hole_diameter=8.5,
        hole_depth=10000.0,
        current_mud_weight=10.0,
        sidpp=500.0,
        sicp=700.0,
        pit_gain=20.0,
        normal_circulating_pressure=2800.0,
        user_stroke_pressure=800.0,
        pump_capacity=0.1,
        strokes_per_minute=30.0,
        casing_id=8.835,
        casing_od=9.625,
        casing_setting_depth=5000.0,
        dc_od=6.5,
        dc_id=2.8125,
        dc_length=600.0,
        dp_od=5.0,
        dp_id=4.276,
        dp_nominal_weight=19.5,
        hwdp_present=True,
        hwdp_od=5.0,
        hwdp_id=3.0,
        hwdp_length=540.0,
    )
    base.update(overrides)
    return KillSheetInput(**base)


def test_string_capacity_is_sum_of_sections():
    res = compute(_cased_well())
    parts = res.drill_pipe_capacity + res.drill_collar_capacity + res.hwdp_internal_capacity
    assert math.isclose(res.drill_string_capacity, parts, rel_tol=1e-9)
    assert res.drill_string_volume == res.drill_string_capacity


def test_totals_are_sums():
    res = compute(_cased_well())
    assert res.total_strokes == res.surface_to_bit_strokes + res.bit_to_surface_strokes
    assert res.total_pumping_time == res.time_surface_to_bit + res.bit_to_surface_time
    ann = res.ann_open_dc + res.ann_open_dp + res.ann_cased_dp + res.ann_open_hwdp
    assert math.isclose(res.total_annular_capacity, ann, rel_tol=1e-12)


def test_hole_geometry_with_casing_and_hwdp():
    """5000 ft open hole minus 600 ft DC and 540 ft HWDP leaves 3860 ft of DP."""
    res = compute(_cased_well())
    assert res.open_hole_depth == 5000.0
    assert res.open_hole_dp_length == 3860.0
    assert res.total_dp_length == 3860.0 + 5000.0 + 540.0
    assert math.isclose(res.ann_cased_dp, annular_capacity(5000.0, 8.835, 5.0), rel_tol=1e-12)
    assert math.isclose(res.ann_open_dp, annular_capacity(3860.0, 8.5, 5.0), rel_tol=1e-12)


def test_open_hole_lengths_never_negative():
    """Shoe below TD and a BHA longer than the open hole both clip to 0."""
    for shoe, dc_len, hw_len in itertools.product((0.0, 9000.0, 12000.0), (0.0, 600.0, 20000.0), (0.0, 540.0)):
        res = compute(_cased_well(casing_setting_depth=shoe, dc_length=dc_len, hwdp_length=hw_len))
        assert res.open_hole_depth >= 0.0
        assert res.open_hole_dp_length >= 0.0


def test_cased_length_limited_to_hole_depth():
    res = compute(_cased_well(casing_setting_depth=12000.0))
    assert res.open_hole_depth == 0.0
    assert math.isclose(res.ann_cased_dp, annular_capacity(10000.0, 8.835, 5.0), rel_tol=1e-12)


def test_hwdp_absent_zeroes_hwdp_terms():
    """With the toggle off the HWDP fields are ignored whatever their values."""
    with_vals = compute(_cased_well(hwdp_present=False, hwdp_od=5.0, hwdp_id=3.0, hwdp_length=540.0))
    zeroed = compute(_cased_well(hwdp_present=False, hwdp_od=0.0, hwdp_id=0.0, hwdp_length=0.0))
    assert with_vals.hwdp_internal_capacity == 0.0
    assert with_vals.ann_open_hwdp == 0.0
    assert with_vals == zeroed
    assert with_vals.open_hole_dp_length == 5000.0 - 600.0
    assert with_vals.total_dp_length == (5000.0 - 600.0) + 5000.0


def test_hwdp_present_adds_volume():
    off = compute(_cased_well(hwdp_present=False))
    on = compute(_cased_well())
    assert math.isclose(on.hwdp_internal_capacity, internal_capacity(540.0, 3.0), rel_tol=1e-12)
    assert on.drill_string_capacity > off.drill_string_capacity


def test_zero_pump_capacity():
    res = compute(_cased_well(pump_capacity=0.0))
    assert res.surface_to_bit_strokes == 0.0
    assert res.bit_to_surface_strokes == 0.0
    assert res.total_strokes == 0.0
    assert res.pressure_drop_per_100_strokes == 0.0
    assert res.total_pumping_time == 0.0
    assert res.drill_string_volume > 0.0


def test_pressure_drop_sign():
    res = compute(_cased_well())
    assert res.pressure_drop_per_100_strokes > 0.0
    expected = (res.icp - res.fcp) / res.surface_to_bit_strokes * 100.0
    assert math.isclose(res.pressure_drop_per_100_strokes, expected, rel_tol=1e-12)

    # SIDPP 0: ICP = SCR pressure = FCP → flat schedule
    flat = compute(_cased_well(sidpp=0.0))
    assert flat.pressure_drop_per_100_strokes == 0.0


def test_unused_inputs_do_not_change_results():
    a = compute(_cased_well())
    b = compute(_cased_well(sicp=0.0, pit_gain=0.0, normal_circulating_pressure=0.0,
                            casing_od=0.0, dp_nominal_weight=0.0))
    assert a == b


def test_compute_is_idempotent():
    inp = _cased_well()
    a = compute(inp)
    b = compute(inp)
    assert a == b
    assert a is not b


def test_volume_primitives_guard_zero_pump():
    assert strokes_for_volume(10.0, 0.0) == 0.0
    assert pumping_time(10.0, 0.0, 0.1) == 0.0
    assert pumping_time(10.0, 30.0, 0.0) == 0.0
    assert math.isclose(pumping_time(10.0, 20.0, 0.1), 5.0)


def test_huge_diameters_overflow_to_inf():
    """A form entry like 1e200 squares past float range without raising."""
    res = compute(input_from_mapping({
        "hole_depth": "10000",
        "current_mud_weight": "10",
        "pump_capacity": "0.1",
        "dp_id": "1e200",
    }))
    assert math.isinf(res.drill_pipe_capacity)
    assert math.isinf(res.surface_to_bit_strokes)
    assert pressure_schedule(res) == []
    assert pressure_series(res) == []

    ann = compute(_cased_well(hole_diameter=1e200, dp_od=1e200))
    assert math.isnan(ann.ann_open_dp)
    assert math.isinf(annular_capacity(100.0, 1e200, 5.0))
    assert math.isinf(internal_capacity(100.0, 1e160))


def test_summary_only_built_for_debug_logging(monkeypatch, caplog):
    calls = []

    def _summary(self):
        calls.append(self)
        return "summary"

    monkeypatch.setattr(KillSheetResult, "summary", _summary)

    caplog.set_level(logging.INFO, logger="core.killsheet")
    compute(_cased_well())
    assert calls == []

    caplog.set_level(logging.DEBUG, logger="core.killsheet")
    compute(_cased_well())
    assert len(calls) == 1
    assert "kill sheet computed: summary" in caplog.text
