# core/killsheet.py
# ------------------------------------------------------------
# Orchestration of the kill sheet (Driller's / Wait & Weight method):
# - Kill mud weight and circulating pressures (ICP / FCP)
# - Drill string internal volumes → surface-to-bit strokes
# - Annular volumes (open hole + cased hole) → bit-to-surface strokes
# - Pumping times at the kill rate
# - Pressure step per 100 strokes for the drill pipe schedule
#
# compute() is pure: same input, same output, no state kept between calls.
#
# Dependencies
# ------------
# - imports ONLY from core.* modules that do NOT import this file, to avoid
#   circular imports.
#
from __future__ import annotations

import logging
import math

from .models import KillSheetInput, KillSheetResult, PRESSURE_GRADIENT, result_field_names
from .volumes import (
    internal_capacity,
    annular_capacity,
    strokes_for_volume,
    pumping_time,
)

logger = logging.getLogger(__name__)


# -----------------------------
# Preconditions
# -----------------------------
def is_valid_input(inp: KillSheetInput) -> bool:
    """
    The sheet can only be worked with a hole depth, a pump output and a
    current mud weight. Callers check this before compute() and show
    placeholders when it fails.
    """
    return inp.hole_depth > 0 and inp.pump_capacity > 0 and inp.current_mud_weight > 0


def invalid_result() -> KillSheetResult:
    """Cleared sheet: every field NaN, rendered as '--' everywhere."""
    return KillSheetResult(**{name: math.nan for name in result_field_names()})


def _ieee_div(num: float, den: float) -> float:
    """Division that yields inf / NaN for a zero denominator instead of raising."""
    if den == 0:
        return math.nan if num == 0 else math.copysign(math.inf, num)
    return num / den


# -----------------------------
# Public API: the kill sheet
# -----------------------------
def compute(inp: KillSheetInput) -> KillSheetResult:
    """
    Work the full kill sheet for one snapshot of inputs.

    Pressure
    --------
      KMW = CMW + SIDPP / (0.052 * TVD)
      ICP = SIDPP + SCR pressure
      FCP = SCR pressure * KMW / CMW

    Volumes
    -------
      Drill pipe is taken over the full hole depth; collars and HWDP are
      added on top. The annulus is split into DC, HWDP and DP in open hole
      plus DP inside casing.

    Never raises. Callers are expected to gate on is_valid_input(); when
    they do not, the sheet is still worked: a zero pump output gives zero
    strokes, a zero hole depth gives a non-finite kill mud weight (and
    whatever follows from it) rather than an exception.

    Returns
    -------
    KillSheetResult
    """
    if not is_valid_input(inp):
        logger.info(
            "kill sheet inputs incomplete: depth=%s pump_capacity=%s mud_weight=%s",
            inp.hole_depth, inp.pump_capacity, inp.current_mud_weight,
        )

    hwdp_len = inp.hwdp_length_effective()

    # -------------------------
    # 1) Kill mud weight & circulating pressures
    # -------------------------
    kmw = inp.current_mud_weight + _ieee_div(inp.sidpp, PRESSURE_GRADIENT * inp.hole_depth)
    icp = inp.sidpp + inp.user_stroke_pressure
    fcp = (
        inp.user_stroke_pressure * (kmw / inp.current_mud_weight)
        if inp.current_mud_weight > 0
        else 0.0
    )

    # -------------------------
    # 2) Drill string (surface → bit)
    # -------------------------
    dp_cap = internal_capacity(inp.hole_depth, inp.dp_id)
    dc_cap = internal_capacity(inp.dc_length, inp.dc_id)
    hwdp_cap = internal_capacity(inp.hwdp_length, inp.hwdp_id) if inp.hwdp_present else 0.0

    string_cap = dp_cap + dc_cap + hwdp_cap
    string_vol = string_cap
    stb_strokes = strokes_for_volume(string_vol, inp.pump_capacity)

    # -------------------------
    # 3) Hole geometry
    # -------------------------
    oh_depth = max(inp.hole_depth - inp.casing_setting_depth, 0.0)
    bha_length = inp.dc_length + hwdp_len
    oh_dp_length = max(oh_depth - bha_length, 0.0)
    total_dp_length = oh_dp_length + inp.casing_setting_depth + hwdp_len

    # -------------------------
    # 4) Annulus (bit → surface)
    # -------------------------
    ann_dc = annular_capacity(inp.dc_length, inp.hole_diameter, inp.dc_od)
    ann_hwdp = (
        annular_capacity(inp.hwdp_length, inp.hole_diameter, inp.hwdp_od)
        if inp.hwdp_present
        else 0.0
    )
    ann_oh_dp = annular_capacity(oh_dp_length, inp.hole_diameter, inp.dp_od)
    cased_dp_length = min(inp.casing_setting_depth, inp.hole_depth)
    ann_cased_dp = annular_capacity(cased_dp_length, inp.casing_id, inp.dp_od)

    ann_total = ann_dc + ann_oh_dp + ann_cased_dp + ann_hwdp
    bts_strokes = strokes_for_volume(ann_total, inp.pump_capacity)

    # -------------------------
    # 5) Totals & timing
    # -------------------------
    total_strokes = stb_strokes + bts_strokes
    t_stb = pumping_time(string_vol, inp.strokes_per_minute, inp.pump_capacity)
    t_bts = pumping_time(ann_total, inp.strokes_per_minute, inp.pump_capacity)

    # -------------------------
    # 6) Drill pipe pressure step
    # -------------------------
    drop_100 = ((icp - fcp) / stb_strokes) * 100.0 if stb_strokes > 0 else 0.0

    result = KillSheetResult(
        kill_mud_weight=kmw,
        icp=icp,
        fcp=fcp,
        drill_pipe_capacity=dp_cap,
        drill_collar_capacity=dc_cap,
        hwdp_internal_capacity=hwdp_cap,
        drill_string_capacity=string_cap,
        drill_string_volume=string_vol,
        surface_to_bit_strokes=stb_strokes,
        open_hole_depth=oh_depth,
        open_hole_dp_length=oh_dp_length,
        total_dp_length=total_dp_length,
        ann_open_dc=ann_dc,
        ann_open_hwdp=ann_hwdp,
        ann_open_dp=ann_oh_dp,
        ann_cased_dp=ann_cased_dp,
        total_annular_capacity=ann_total,
        bit_to_surface_strokes=bts_strokes,
        total_strokes=total_strokes,
        time_surface_to_bit=t_stb,
        bit_to_surface_time=t_bts,
        total_pumping_time=t_stb + t_bts,
        pressure_drop_per_100_strokes=drop_100,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("kill sheet computed: %s", result.summary())
    return result


__all__ = ["compute", "is_valid_input", "invalid_result"]
