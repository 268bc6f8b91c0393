# core/models.py
# ------------------------------------------------------------
# Core data models for the kill sheet calculator.
# This file contains NO imports from other local modules
# to avoid circular-import issues.
#
# Units convention (oilfield units, consistent across the codebase):
# - Diameters: inches (in)
# - Lengths / depths: feet (ft), depths are true vertical depth
# - Mud weight: pounds per gallon (ppg)
# - Pressure: psi
# - Volume: barrels (bbl)
# - Pump output: bbl/stroke, pump rate: strokes per minute (spm)
# - Time: minutes
#
# This file is purely data containers + tiny helpers.
# All calculations live in volumes.py / killsheet.py / schedule.py.

from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from math import isfinite
from typing import Dict


# -----------------------------
# Constants
# -----------------------------
PRESSURE_GRADIENT = 0.052         # psi/ft per ppg
BBL_PER_IN2_FT = 12.0 / 9691.04   # in^2 * ft -> bbl

DEFAULT_SCHEDULE_ROWS = 10
DEFAULT_CHART_MIN_STROKES = 1400
DEFAULT_CHART_STEP = 100
# chart grid is coarsened past this many points (tiny pump outputs)
MAX_SERIES_POINTS = 2000


# -----------------------------
# Inputs
# -----------------------------
@dataclass(frozen=True)
class KillSheetInput:
    """
    Snapshot of every drilling parameter on the kill sheet form.

    Values are expected to be already normalised by the caller: absent,
    non-numeric or negative entries arrive as 0.0 (see core.inputs).

    Well
    ----
    hole_diameter      : open hole (bit) diameter, in.
    hole_depth         : true vertical depth of the hole, ft.
    current_mud_weight : mud weight in the hole, ppg.

    Pressures (psi)
    ---------------
    sidpp                       : shut-in drill pipe pressure.
    sicp                        : shut-in casing pressure (recorded, not used).
    pit_gain                    : kick volume, bbl (recorded, not used).
    normal_circulating_pressure : recorded, not used.
    user_stroke_pressure        : slow pump rate pressure; drives ICP/FCP.

    Pump
    ----
    pump_capacity      : output per stroke, bbl/stk.
    strokes_per_minute : kill rate, spm. 0 means "not known yet".

    Casing / drill string
    ---------------------
    casing_id, casing_od, casing_setting_depth
    dc_od, dc_id, dc_length          : drill collars.
    dp_od, dp_id, dp_nominal_weight  : drill pipe (weight in lb/ft, not used).

    HWDP (optional section)
    -----------------------
    hwdp_present : when False the hwdp_* values are ignored entirely.
    hwdp_od, hwdp_id, hwdp_length
    """
    # Well
    hole_diameter: float = 0.0
    hole_depth: float = 0.0
    current_mud_weight: float = 0.0

    # Pressures
    sidpp: float = 0.0
    sicp: float = 0.0
    pit_gain: float = 0.0
    normal_circulating_pressure: float = 0.0
    user_stroke_pressure: float = 0.0

    # Pump
    pump_capacity: float = 0.0
    strokes_per_minute: float = 0.0

    # Casing
    casing_id: float = 0.0
    casing_od: float = 0.0
    casing_setting_depth: float = 0.0

    # Drill collar
    dc_od: float = 0.0
    dc_id: float = 0.0
    dc_length: float = 0.0

    # Drill pipe
    dp_od: float = 0.0
    dp_id: float = 0.0
    dp_nominal_weight: float = 0.0

    # HWDP
    hwdp_present: bool = False
    hwdp_od: float = 0.0
    hwdp_id: float = 0.0
    hwdp_length: float = 0.0

    def hwdp_length_effective(self) -> float:
        """HWDP length counted in the string (0 when no HWDP is run)."""
        return self.hwdp_length if self.hwdp_present else 0.0


# -----------------------------
# Results
# -----------------------------
@dataclass(frozen=True)
class KillSheetResult:
    """
    Every derived kill sheet quantity. Built fresh by core.killsheet.compute.

    Pressures in psi, mud weight in ppg, capacities/volumes in bbl,
    lengths in ft, strokes in stk, times in minutes.

    pressure_drop_per_100_strokes is the drill pipe pressure step while
    kill mud travels surface → bit; it is negative when FCP > ICP.
    """
    kill_mud_weight: float
    icp: float
    fcp: float

    drill_pipe_capacity: float
    drill_collar_capacity: float
    hwdp_internal_capacity: float
    drill_string_capacity: float
    drill_string_volume: float
    surface_to_bit_strokes: float

    open_hole_depth: float
    open_hole_dp_length: float
    total_dp_length: float

    ann_open_dc: float
    ann_open_hwdp: float
    ann_open_dp: float
    ann_cased_dp: float
    total_annular_capacity: float
    bit_to_surface_strokes: float

    total_strokes: float
    time_surface_to_bit: float
    bit_to_surface_time: float
    total_pumping_time: float
    pressure_drop_per_100_strokes: float

    def as_dict(self) -> Dict[str, float]:
        """Field name → value, in declaration order."""
        return asdict(self)

    def is_finite(self) -> bool:
        """True when no field is NaN or infinite."""
        return all(isfinite(v) for v in self.as_dict().values())

    def summary(self) -> str:
        """One-line human-readable summary."""
        if not self.is_finite():
            return "No results."
        return (
            f"KMW {self.kill_mud_weight:.2f} ppg, ICP {self.icp:.0f} psi, "
            f"FCP {self.fcp:.0f} psi, {self.total_strokes:.0f} stk total"
        )


def result_field_names() -> tuple:
    """Names of all KillSheetResult fields, in declaration order."""
    return tuple(f.name for f in fields(KillSheetResult))


# Friendly export list
__all__ = [
    "PRESSURE_GRADIENT",
    "BBL_PER_IN2_FT",
    "DEFAULT_SCHEDULE_ROWS",
    "DEFAULT_CHART_MIN_STROKES",
    "DEFAULT_CHART_STEP",
    "MAX_SERIES_POINTS",
    "KillSheetInput",
    "KillSheetResult",
    "result_field_names",
]
