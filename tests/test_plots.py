# tests/test_plots.py
# ------------------------------------------------------------
# Pressure chart rendering (headless).
#
from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from core.models import KillSheetInput
from core.killsheet import compute
from core.schedule import pressure_schedule, pressure_series
from charts.plots import plot_pressure_series, empty_pressure_figure


def _result():
    return compute(KillSheetInput(
        hole_depth=10000.0,
        current_mud_weight=10.0,
        sidpp=500.0,
        user_stroke_pressure=800.0,
        pump_capacity=0.1,
        dp_id=3.0,
        hole_diameter=8.5,
        dp_od=5.0,
    ))


def test_plot_pressure_series_draws_line():
    res = _result()
    series = pressure_series(res)
    fig = plot_pressure_series(series, schedule=pressure_schedule(res), fcp=res.fcp)
    ax = fig.axes[0]
    line = ax.get_lines()[0]
    assert line.get_label() == "Drillpipe Pressure"
    assert list(line.get_xdata()) == [p.strokes for p in series]
    assert ax.get_xlabel() == "Strokes"
    assert ax.get_ylabel() == "Pressure (psi)"
    assert ax.get_ylim()[0] == 0
    plt.close(fig)


def test_each_call_builds_a_new_figure():
    series = pressure_series(_result())
    fig1 = plot_pressure_series(series)
    fig2 = plot_pressure_series(series)
    assert fig1 is not fig2
    plt.close(fig1)
    plt.close(fig2)


def test_plot_rejects_unplottable_series():
    with pytest.raises(ValueError):
        plot_pressure_series([])
    with pytest.raises(ValueError):
        plot_pressure_series([(0, 1000.0), (100, float("nan"))])


def test_empty_figure_has_axes_only():
    fig = empty_pressure_figure()
    assert len(fig.axes[0].get_lines()) == 0
    plt.close(fig)


def test_long_series_drawn_without_markers():
    res = compute(KillSheetInput(
        hole_depth=10000.0,
        current_mud_weight=10.0,
        sidpp=500.0,
        user_stroke_pressure=800.0,
        pump_capacity=1e-6,
        dp_id=3.0,
        hole_diameter=8.5,
        dp_od=5.0,
    ))
    series = pressure_series(res)
    assert len(series) > 100
    fig = plot_pressure_series(series)
    assert fig.axes[0].get_lines()[0].get_marker() in (None, "None", "")

    short = plot_pressure_series(pressure_series(_result()))
    assert short.axes[0].get_lines()[0].get_marker() == "o"
    plt.close(fig)
    plt.close(short)
