# export/excel.py
# ------------------------------------------------------------
# Excel export utilities for the kill sheet calculator.
#
# What this file provides
# -----------------------
# - build_input_table(inp)                → pandas.DataFrame of inputs
# - build_results_table(result)           → pandas.DataFrame of derived values
# - build_schedule_table(points)          → pandas.DataFrame of strokes/pressure
# - thin_points(points, max_rows)         → every k-th point, last kept
# - export_to_excel_bytes(inp, res, ...)  → bytes of an .xlsx workbook with:
#       * "Summary"          sheet (kill parameters, timing)
#       * "Inputs"           sheet
#       * "Results"          sheet (every derived quantity)
#       * "PressureSchedule" sheet (kill sheet table)
#       * "PressureChart"    sheet (chart series + native line chart)
#
# Dependencies: pandas, numpy, xlsxwriter (pandas uses it as engine)
#
from __future__ import annotations

from datetime import date
from io import BytesIO
from math import isfinite
from typing import Optional, Sequence, Tuple

import pandas as pd
import numpy as np

from core.models import KillSheetInput, KillSheetResult
from core.inputs import DISPLAY_FIELDS


# (field, label, unit) for the input sheet, grouped as on the form
INPUT_FIELDS = (
    ("hole_diameter", "Hole diameter", "in"),
    ("hole_depth", "Hole depth (TVD)", "ft"),
    ("current_mud_weight", "Current mud weight", "ppg"),
    ("sidpp", "SIDPP", "psi"),
    ("sicp", "SICP", "psi"),
    ("pit_gain", "Pit gain", "bbl"),
    ("normal_circulating_pressure", "Normal circulating pressure", "psi"),
    ("user_stroke_pressure", "Slow pump pressure", "psi"),
    ("pump_capacity", "Pump capacity", "bbl/stk"),
    ("strokes_per_minute", "Kill rate", "spm"),
    ("casing_id", "Casing ID", "in"),
    ("casing_od", "Casing OD", "in"),
    ("casing_setting_depth", "Casing shoe depth", "ft"),
    ("dc_od", "Drill collar OD", "in"),
    ("dc_id", "Drill collar ID", "in"),
    ("dc_length", "Drill collar length", "ft"),
    ("dp_od", "Drill pipe OD", "in"),
    ("dp_id", "Drill pipe ID", "in"),
    ("dp_nominal_weight", "Drill pipe nominal weight", "lb/ft"),
    ("hwdp_present", "HWDP in string", ""),
    ("hwdp_od", "HWDP OD", "in"),
    ("hwdp_id", "HWDP ID", "in"),
    ("hwdp_length", "HWDP length", "ft"),
)

# xlsxwriter sheet limit is 1,048,576 rows; one goes to the header
EXCEL_MAX_DATA_ROWS = 1_048_575

# Results not on the main display, appended to the Results sheet
EXTRA_RESULT_FIELDS = (
    ("drill_pipe_capacity", "Drill pipe capacity", "bbl"),
    ("drill_collar_capacity", "Drill collar capacity", "bbl"),
    ("hwdp_internal_capacity", "HWDP capacity", "bbl"),
    ("drill_string_capacity", "Drill string capacity", "bbl"),
    ("ann_open_dc", "Annulus DC / open hole", "bbl"),
    ("ann_open_hwdp", "Annulus HWDP / open hole", "bbl"),
    ("ann_open_dp", "Annulus DP / open hole", "bbl"),
    ("ann_cased_dp", "Annulus DP / casing", "bbl"),
)


def export_filename(today: Optional[date] = None) -> str:
    """kill-sheet-YYYY-MM-DD.xlsx"""
    return f"kill-sheet-{(today or date.today()).isoformat()}.xlsx"


# -----------------------------
# Table builders (pandas)
# -----------------------------
def build_input_table(inp: KillSheetInput) -> pd.DataFrame:
    """
    Flatten KillSheetInput into a Parameter / Value / Unit table.
    """
    rows = []
    for name, label, unit in INPUT_FIELDS:
        val = getattr(inp, name)
        if isinstance(val, bool):
            val = "Yes" if val else "No"
        rows.append({"Parameter": label, "Value": val, "Unit": unit})
    return pd.DataFrame(rows)


def build_results_table(result: KillSheetResult) -> pd.DataFrame:
    """
    Every derived quantity; non-finite values become NaN (blank in Excel).
    """
    rows = []
    for name, label, unit, _decimals in DISPLAY_FIELDS:
        rows.append({"Quantity": label, "Value": _finite_or_nan(getattr(result, name)), "Unit": unit})
    for name, label, unit in EXTRA_RESULT_FIELDS:
        rows.append({"Quantity": label, "Value": _finite_or_nan(getattr(result, name)), "Unit": unit})
    return pd.DataFrame(rows)


def build_schedule_table(points: Sequence[Tuple[float, float]]) -> pd.DataFrame:
    """
    Strokes / pressure table for display. Strokes rounded to whole strokes,
    pressure to 0.01 psi; the underlying points are not modified.
    """
    df = pd.DataFrame(list(points), columns=["Strokes", "Pressure (psi)"])
    if df.empty:
        return df
    df["Strokes"] = df["Strokes"].round(0).astype(int)
    df["Pressure (psi)"] = df["Pressure (psi)"].round(2)
    return df


# -----------------------------
# Excel writer
# -----------------------------
def export_to_excel_bytes(
    inp: KillSheetInput,
    result: KillSheetResult,
    *,
    schedule: Optional[Sequence[Tuple[float, float]]] = None,
    series: Optional[Sequence[Tuple[float, float]]] = None,
    max_chart_rows: int = EXCEL_MAX_DATA_ROWS,
) -> bytes:
    """
    Create an in-memory .xlsx kill sheet.

    Parameters
    ----------
    inp      : KillSheetInput
    result   : KillSheetResult (may be the all-NaN invalid result)
    schedule : optional kill sheet table points (core.schedule.pressure_schedule)
    series   : optional chart points (core.schedule.pressure_series)
    max_chart_rows : longer series are thinned to fit the PressureChart sheet

    Returns
    -------
    bytes
        The content of the .xlsx file, ready for download or saving.
    """
    bio = BytesIO()
    with pd.ExcelWriter(bio, engine="xlsxwriter") as writer:
        _write_summary_sheet(writer, inp, result)

        build_input_table(inp).to_excel(writer, sheet_name="Inputs", index=False)
        build_results_table(result).to_excel(writer, sheet_name="Results", index=False)

        if schedule:
            build_schedule_table(schedule).to_excel(writer, sheet_name="PressureSchedule", index=False)
        if series:
            _write_chart_sheet(writer, thin_points(series, max_chart_rows))

        _autofit_columns(writer, "Inputs")
        _autofit_columns(writer, "Results")
        _autofit_columns(writer, "PressureSchedule")

    return bio.getvalue()


# -----------------------------
# Helpers (xlsxwriter formatting)
# -----------------------------
def thin_points(
    points: Sequence[Tuple[float, float]],
    max_rows: int,
) -> Sequence[Tuple[float, float]]:
    """
    Every k-th point so at most max_rows remain; the last point is always kept.
    """
    if max_rows < 2:
        raise ValueError(f"max_rows must be >= 2 (got {max_rows}).")
    n = len(points)
    if n <= max_rows:
        return points
    k = -(-(n - 1) // (max_rows - 1))
    thinned = list(points[::k])
    if (n - 1) % k:
        thinned.append(points[-1])
    return thinned


def _finite_or_nan(value: float) -> float:
    return float(value) if isfinite(value) else np.nan


def _write_summary_sheet(
    writer: pd.ExcelWriter,
    inp: KillSheetInput,
    result: KillSheetResult,
) -> None:
    ws = writer.book.add_worksheet("Summary")
    writer.sheets["Summary"] = ws

    h1 = writer.book.add_format({"bold": True, "font_size": 14})
    h2 = writer.book.add_format({"bold": True, "font_size": 12})
    lab = writer.book.add_format({"bold": True})

    ws.write(0, 0, "Kill Sheet — Summary", h1)

    ws.write(2, 0, "Key inputs", h2)
    key_inputs = [
        ("Hole depth (TVD) (ft)", inp.hole_depth),
        ("Current mud weight (ppg)", inp.current_mud_weight),
        ("SIDPP (psi)", inp.sidpp),
        ("SICP (psi)", inp.sicp),
        ("Pit gain (bbl)", inp.pit_gain),
        ("Slow pump pressure (psi)", inp.user_stroke_pressure),
        ("Pump capacity (bbl/stk)", inp.pump_capacity),
        ("Kill rate (spm)", inp.strokes_per_minute),
    ]
    row = 3
    for label, val in key_inputs:
        ws.write(row, 0, label, lab)
        ws.write_number(row, 1, float(val))
        row += 1

    ws.write(row + 1, 0, "Kill parameters", h2)
    row += 2
    for name, label, unit, _decimals in DISPLAY_FIELDS:
        ws.write(row, 0, f"{label} ({unit})", lab)
        val = getattr(result, name)
        if isfinite(val):
            ws.write_number(row, 1, float(val))
        else:
            ws.write(row, 1, "--")
        row += 1

    ws.set_column(0, 0, 40)
    ws.set_column(1, 1, 16)


def _write_chart_sheet(
    writer: pd.ExcelWriter,
    series: Sequence[Tuple[float, float]],
) -> None:
    """
    Writes a sheet "PressureChart" with (strokes, pressure) and a line chart.
    """
    df = pd.DataFrame(list(series), columns=["Strokes", "Pressure (psi)"])
    df.to_excel(writer, sheet_name="PressureChart", index=False)
    ws = writer.sheets["PressureChart"]

    chart = writer.book.add_chart({"type": "line"})
    n = len(df)
    chart.add_series({
        "name":       ["PressureChart", 0, 1],
        "categories": ["PressureChart", 1, 0, n, 0],
        "values":     ["PressureChart", 1, 1, n, 1],
        "line":       {"width": 2.25, "color": "#0ea5e9"},
    })
    chart.set_title({"name": "Drillpipe Pressure vs Strokes"})
    chart.set_x_axis({"name": "Strokes"})
    chart.set_y_axis({"name": "Pressure (psi)", "min": 0})
    chart.set_legend({"position": "bottom"})
    ws.insert_chart("D2", chart, {"x_scale": 1.3, "y_scale": 1.2})


def _autofit_columns(writer: pd.ExcelWriter, sheet_name: str) -> None:
    """
    Fixed column widths per sheet (xlsxwriter cannot measure text).
    """
    ws = writer.sheets.get(sheet_name)
    if ws is None:
        return
    if sheet_name == "Inputs":
        ws.set_column(0, 0, 32)
        ws.set_column(1, 1, 14)
        ws.set_column(2, 2, 10)
    elif sheet_name == "Results":
        ws.set_column(0, 0, 36)
        ws.set_column(1, 1, 16)
        ws.set_column(2, 2, 8)
    elif sheet_name == "PressureSchedule":
        ws.set_column(0, 1, 16)


__all__ = [
    "export_filename",
    "build_input_table",
    "build_results_table",
    "build_schedule_table",
    "thin_points",
    "export_to_excel_bytes",
]
