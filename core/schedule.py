# core/schedule.py
# ------------------------------------------------------------
# Drill pipe pressure schedule while kill mud is pumped surface → bit.
#
# Pressure falls linearly from ICP (0 strokes) to FCP (surface-to-bit
# strokes) and is then held at FCP:
#
#   drop/stk  = (ICP - FCP) / STB
#   P(s)      = max(ICP - drop/stk * s, FCP)
#
# The clamp is a floor at FCP only. When FCP > ICP the line rises and is
# never capped.
#
# Two views of the same line:
# - pressure_schedule(): the kill sheet table, STB split into N equal steps
# - pressure_series():   chart data on a fixed stroke grid, widened to a
#                        multiple of the step when the circulation is too
#                        long for max_points
#
from __future__ import annotations
from math import ceil, isfinite
from typing import List, NamedTuple

from .models import (
    KillSheetResult,
    DEFAULT_SCHEDULE_ROWS,
    DEFAULT_CHART_MIN_STROKES,
    DEFAULT_CHART_STEP,
    MAX_SERIES_POINTS,
)


class SchedulePoint(NamedTuple):
    strokes: float
    pressure: float


def _has_schedule(result: KillSheetResult) -> bool:
    stb = result.surface_to_bit_strokes
    if not (isfinite(result.icp) and isfinite(result.fcp)):
        return False
    return isfinite(stb) and stb > 0


def _pressure_at(result: KillSheetResult, drop_per_stroke: float, strokes: float) -> float:
    pressure = result.icp - drop_per_stroke * strokes
    if pressure < result.fcp:
        pressure = result.fcp
    return pressure


def pressure_schedule(
    result: KillSheetResult,
    row_count: int = DEFAULT_SCHEDULE_ROWS,
) -> List[SchedulePoint]:
    """
    Kill sheet pressure table: row_count + 1 points from 0 to STB strokes.

    Parameters
    ----------
    result    : KillSheetResult from core.killsheet.compute
    row_count : number of equal stroke intervals (10 on a standard sheet)

    Returns
    -------
    list of SchedulePoint, empty when there are no surface-to-bit strokes.
    """
    if row_count < 1:
        raise ValueError(f"row_count must be >= 1 (got {row_count}).")
    if not _has_schedule(result):
        return []

    stb = result.surface_to_bit_strokes
    drop = (result.icp - result.fcp) / stb
    increment = stb / row_count
    points = []
    for i in range(row_count + 1):
        strokes = i * increment
        points.append(SchedulePoint(strokes, _pressure_at(result, drop, strokes)))
    return points


def pressure_series(
    result: KillSheetResult,
    min_max_strokes: int = DEFAULT_CHART_MIN_STROKES,
    step: int = DEFAULT_CHART_STEP,
    max_points: int = MAX_SERIES_POINTS,
) -> List[SchedulePoint]:
    """
    Chart data: strokes 0, step, 2*step, ... up to
    max(min_max_strokes, ceil(total_strokes)) inclusive.

    The x-range covers the whole circulation (string + annulus) so the
    FCP plateau is visible after kill mud reaches the bit.

    At most max_points points are returned. A longer range (e.g. a pump
    output of 1e-6 bbl/stk) is walked with the smallest multiple of step
    that fits, so the grid still spans the full range.
    """
    if step <= 0:
        raise ValueError(f"step must be > 0 (got {step}).")
    if max_points < 2:
        raise ValueError(f"max_points must be >= 2 (got {max_points}).")
    if not _has_schedule(result):
        return []

    drop = (result.icp - result.fcp) / result.surface_to_bit_strokes
    upper = min_max_strokes
    if isfinite(result.total_strokes):
        upper = max(min_max_strokes, ceil(result.total_strokes))

    if upper > step * (max_points - 1):
        # ceiling division, exact for int grids
        step = step * -(-upper // (step * (max_points - 1)))

    points = []
    i = 0
    while i * step <= upper:
        strokes = i * step
        points.append(SchedulePoint(strokes, _pressure_at(result, drop, strokes)))
        i += 1
    return points


__all__ = [
    "SchedulePoint",
    "pressure_schedule",
    "pressure_series",
]
