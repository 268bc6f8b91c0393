# core/volumes.py
# ------------------------------------------------------------
# Volumetric primitives for the kill sheet:
#  1) Internal capacity of a drill string section (pipe bore)
#  2) Annular capacity between a bore and a pipe OD
#  3) Strokes to pump a volume
#  4) Time to pump a volume at a given pump rate
#
# Units convention
# ----------------
# - Diameters: inches (in)
# - Lengths: feet (ft)
# - Volumes: barrels (bbl)
# - Pump output: bbl/stroke, pump rate: spm
# - Time: minutes
#
# Capacity of a cylinder in oilfield units
# ----------------------------------------
#   V[bbl] = L[ft] * (π * d[in]^2 / 4) * (12 / 9691.04)
#
# The factor 12/9691.04 turns in^2·ft into barrels (1 bbl = 9702 in^3
# nominal; 9691.04 keeps agreement with published kill sheets).
#
# Notes
# -----
# - None of these functions raise for degenerate numbers. A zero pump
#   output or pump rate yields 0 strokes / 0 minutes, which the kill sheet
#   treats as "not known yet".
# - Annular capacity is not clipped: a pipe OD larger than the bore gives a
#   negative volume, as the plain geometry says.
#
from __future__ import annotations
from math import pi

from .models import BBL_PER_IN2_FT


# ------------------------------------------------------------
# 1) INTERNAL (BORE) CAPACITY
# ------------------------------------------------------------
def internal_capacity(length_ft: float, id_in: float) -> float:
    """
    Fluid volume [bbl] inside a pipe section.

    Parameters
    ----------
    length_ft : section length [ft]
    id_in     : pipe inner diameter [in]

    Returns
    -------
    bbl : internal volume of the section.
    """
    return length_ft * (pi * id_in * id_in / 4.0) * BBL_PER_IN2_FT


# ------------------------------------------------------------
# 2) ANNULAR CAPACITY
# ------------------------------------------------------------
def annular_capacity(length_ft: float, bore_in: float, od_in: float) -> float:
    """
    Fluid volume [bbl] in the annulus between a bore (open hole or casing ID)
    and the outside of a pipe section.

    Model
    -----
      A = π * (D^2 - od^2) / 4        [in^2]
      V = L * A * (12 / 9691.04)      [bbl]

    Parameters
    ----------
    length_ft : section length [ft]
    bore_in   : hole diameter or casing ID [in]
    od_in     : pipe outer diameter [in]
    """
    return length_ft * (pi * (bore_in * bore_in - od_in * od_in) / 4.0) * BBL_PER_IN2_FT


# ------------------------------------------------------------
# 3) STROKES
# ------------------------------------------------------------
def strokes_for_volume(volume_bbl: float, pump_capacity: float) -> float:
    """
    Pump strokes needed to displace a volume. 0 when pump output is not set.
    """
    return volume_bbl / pump_capacity if pump_capacity > 0 else 0.0


# ------------------------------------------------------------
# 4) TIME
# ------------------------------------------------------------
def pumping_time(volume_bbl: float, strokes_per_minute: float, pump_capacity: float) -> float:
    """
    Minutes to displace a volume at the kill rate.

      t = V / (spm * bbl/stk)

    Returns 0.0 unless both the pump rate and the pump output are positive.
    """
    if strokes_per_minute > 0 and pump_capacity > 0:
        return volume_bbl / (strokes_per_minute * pump_capacity)
    return 0.0


__all__ = [
    "internal_capacity",
    "annular_capacity",
    "strokes_for_volume",
    "pumping_time",
]
