# core/inputs.py
# ------------------------------------------------------------
# Helpers for the UI side of the kill sheet:
# - turning raw form values into a KillSheetInput
# - clearing the HWDP dimensions when the HWDP box is unticked
# - formatting numbers for display ("--" for anything not finite)
# - the ordered list of result fields shown on the sheet
#
# Nothing here does engineering math; see killsheet.py.
#
from __future__ import annotations
from dataclasses import fields
from math import isfinite
from typing import Any, Mapping, MutableMapping, Optional

from .models import KillSheetInput

PLACEHOLDER = "--"

# form fields that only mean something while the HWDP box is ticked
HWDP_FIELDS = ("hwdp_od", "hwdp_id", "hwdp_length")

# (result field, label, unit, decimals) in the order the sheet shows them
DISPLAY_FIELDS = (
    ("kill_mud_weight", "Kill mud weight", "ppg", 2),
    ("icp", "Initial circulating pressure (ICP)", "psi", 2),
    ("fcp", "Final circulating pressure (FCP)", "psi", 2),
    ("pressure_drop_per_100_strokes", "Pressure drop per 100 strokes", "psi", 3),
    ("drill_string_volume", "Drill string volume", "bbl", 3),
    ("surface_to_bit_strokes", "Surface to bit strokes", "stk", 1),
    ("total_annular_capacity", "Total annular volume", "bbl", 3),
    ("bit_to_surface_strokes", "Bit to surface strokes", "stk", 1),
    ("total_strokes", "Total strokes", "stk", 1),
    ("open_hole_depth", "Open hole length", "ft", 2),
    ("open_hole_dp_length", "Drill pipe in open hole", "ft", 2),
    ("total_dp_length", "Total drill pipe length", "ft", 2),
    ("time_surface_to_bit", "Surface to bit time", "min", 2),
    ("bit_to_surface_time", "Bit to surface time", "min", 2),
    ("total_pumping_time", "Total pumping time", "min", 2),
)


def read_number(value: Any, default: float = 0.0) -> float:
    """
    Parse one form value. Blank, non-numeric, non-finite or negative
    entries fall back to `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    try:
        num = float(value)
    except (TypeError, ValueError):
        return default
    if not isfinite(num) or num < 0:
        return default
    return num


def input_from_mapping(raw: Mapping[str, Any]) -> KillSheetInput:
    """
    Build a KillSheetInput from a mapping of field name → raw value
    (e.g. st.session_state or a parsed form). Unknown keys are ignored,
    missing ones default to 0 / False.
    """
    values = {}
    for f in fields(KillSheetInput):
        if f.name == "hwdp_present":
            values[f.name] = bool(raw.get(f.name, False))
        else:
            values[f.name] = read_number(raw.get(f.name))
    return KillSheetInput(**values)


def clear_hwdp(state: MutableMapping[str, Any]) -> bool:
    """
    Zero the HWDP dimensions in a form state when the HWDP box is unticked,
    so a hidden section never carries stale values. Returns True if cleared.
    """
    if state.get("hwdp_present", False):
        return False
    for name in HWDP_FIELDS:
        state[name] = 0.0
    return True


def format_value(value: Optional[float], decimals: int = 2) -> str:
    """Fixed-decimal text, or the placeholder for None / NaN / inf."""
    if value is None:
        return PLACEHOLDER
    try:
        num = float(value)
    except (TypeError, ValueError):
        return PLACEHOLDER
    if not isfinite(num):
        return PLACEHOLDER
    return f"{num:.{decimals}f}"


__all__ = [
    "PLACEHOLDER",
    "DISPLAY_FIELDS",
    "HWDP_FIELDS",
    "read_number",
    "input_from_mapping",
    "clear_hwdp",
    "format_value",
]
