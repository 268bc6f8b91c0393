# charts/plots.py
# ------------------------------------------------------------
# Plotting utilities for the drill pipe pressure chart.
#
# Design principles
# -----------------
# - Only imports the point type from core; no engineering math here.
# - Pure matplotlib; caller supplies data (strokes, pressure).
# - Every call builds a NEW Figure; nothing is kept between reruns.
#   UI layers render it (e.g., Streamlit st.pyplot(fig)) and drop it.
#
# Usage (example in Streamlit)
# ----------------------------
#   from charts.plots import plot_pressure_series
#   fig = plot_pressure_series(series, schedule=table, fcp=res.fcp)
#   st.pyplot(fig, clear_figure=True)
#
from __future__ import annotations

from math import isfinite
from typing import Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt


Number = Union[int, float]
Point = Tuple[Number, Number]

LINE_COLOUR = "#0ea5e9"
# point markers only on short series; long ones draw as a plain line
MARKER_LIMIT = 100


def _split_points(points: Sequence[Point], name: str = "") -> Tuple[list, list]:
    if points is None:
        raise ValueError(f"{name}: points must be provided.")
    if len(points) < 2:
        raise ValueError(f"{name}: need at least 2 points to plot (got {len(points)}).")
    x = [float(p[0]) for p in points]
    y = [float(p[1]) for p in points]
    if not all(isfinite(v) for v in x + y):
        raise ValueError(f"{name}: points contain NaN or infinite values.")
    return x, y


def _style_axes(ax, title: str) -> None:
    ax.set_xlabel("Strokes")
    ax.set_ylabel("Pressure (psi)")
    ax.set_ylim(bottom=0)
    ax.grid(True, which="both", alpha=0.35)
    ax.set_title(title)


def plot_pressure_series(
    series: Sequence[Point],
    *,
    schedule: Optional[Sequence[Point]] = None,
    fcp: Optional[float] = None,
    title: str = "Drillpipe Pressure vs Strokes",
) -> plt.Figure:
    """
    Drill pipe pressure line over the stroke grid.

    Parameters
    ----------
    series   : (strokes, pressure) points, e.g. core.schedule.pressure_series
    schedule : optional kill sheet table points drawn as markers
    fcp      : optional final circulating pressure, drawn as a dashed line
    title    : figure title

    Returns
    -------
    matplotlib.figure.Figure
    """
    x, y = _split_points(series, "plot_pressure_series")

    fig, ax = plt.subplots(figsize=(8, 4.5))
    marker = "o" if len(x) <= MARKER_LIMIT else None
    ax.plot(x, y, linewidth=2.5, color=LINE_COLOUR, marker=marker, markersize=4,
            label="Drillpipe Pressure")
    ax.fill_between(x, y, alpha=0.1, color=LINE_COLOUR)

    if schedule:
        sx, sy = _split_points(schedule, "plot_pressure_series[schedule]")
        ax.plot(sx, sy, linestyle="none", marker="s", markersize=5, color="#1e3a8a",
                label="Kill sheet schedule")

    if fcp is not None and isfinite(fcp):
        ax.axhline(fcp, linestyle="--", linewidth=1, color="#475569", label=f"FCP {fcp:.0f} psi")

    _style_axes(ax, title)
    ax.legend(loc="upper right")
    fig.tight_layout()
    return fig


def empty_pressure_figure(title: str = "Drillpipe Pressure vs Strokes") -> plt.Figure:
    """Axes only; shown while the inputs cannot produce a schedule."""
    fig, ax = plt.subplots(figsize=(8, 4.5))
    _style_axes(ax, title)
    fig.tight_layout()
    return fig


__all__ = [
    "plot_pressure_series",
    "empty_pressure_figure",
]
