# streamlit_app.py
# ------------------------------------------------------------
# Streamlit UI for the kill sheet calculator.
# - Collects well, pump and string inputs in the sidebar
# - Calls core.killsheet.compute() on every change
# - Shows kill parameters, volumes/strokes, timing
# - Pressure schedule table + drill pipe pressure chart
# - Excel download of the sheet
#
# Run:
#   streamlit run streamlit_app.py
#
from __future__ import annotations

import logging

import streamlit as st
import pandas as pd

# Local imports (no circular refs; core/* never imports streamlit_app)
from core.models import DEFAULT_CHART_STEP, KillSheetInput, KillSheetResult
from core.killsheet import compute, is_valid_input, invalid_result
from core.schedule import pressure_schedule, pressure_series
from core.inputs import DISPLAY_FIELDS, clear_hwdp, format_value, input_from_mapping
from charts.plots import plot_pressure_series, empty_pressure_figure
from export.excel import build_schedule_table, export_to_excel_bytes, export_filename

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


# -----------------------------
# Defaults (a typical 8½" section)
# -----------------------------
DEFAULTS = {
    "hole_diameter": 8.5,
    "hole_depth": 10000.0,
    "current_mud_weight": 10.0,
    "sidpp": 500.0,
    "sicp": 700.0,
    "pit_gain": 20.0,
    "normal_circulating_pressure": 2800.0,
    "user_stroke_pressure": 800.0,
    "pump_capacity": 0.1,
    "strokes_per_minute": 30.0,
    "casing_id": 8.835,
    "casing_od": 9.625,
    "casing_setting_depth": 5000.0,
    "dc_od": 6.5,
    "dc_id": 2.8125,
    "dc_length": 600.0,
    "dp_od": 5.0,
    "dp_id": 4.276,
    "dp_nominal_weight": 19.5,
    "hwdp_present": False,
    "hwdp_od": 0.0,
    "hwdp_id": 0.0,
    "hwdp_length": 0.0,
}


# -----------------------------
# UI Helpers
# -----------------------------
def _number(label: str, key: str, *, step: float = 1.0, fmt: str = "%.2f", help: str | None = None,
            disabled: bool = False) -> None:
    st.number_input(label, key=key, min_value=0.0, step=step, format=fmt, help=help, disabled=disabled)


def _reset_form() -> None:
    for key, val in DEFAULTS.items():
        st.session_state[key] = False if isinstance(val, bool) else 0.0
    logger.info("kill sheet form reset")
    st.toast("Form reset", icon="✅")


def _on_hwdp_toggle() -> None:
    if clear_hwdp(st.session_state):
        logger.info("HWDP removed from string; HWDP dimensions cleared")


@st.cache_data(show_spinner=False)
def _cached_compute(inp: KillSheetInput) -> KillSheetResult:
    # identical snapshots across reruns are served from cache
    return compute(inp)


# -----------------------------
# Sidebar inputs
# -----------------------------
st.set_page_config(page_title="Kill Sheet Calculator", layout="wide")
st.title("Kill Sheet Calculator — Well Control")

for _key, _val in DEFAULTS.items():
    st.session_state.setdefault(_key, _val)

with st.sidebar:
    st.header("Well")
    _number("Hole diameter (in)", "hole_diameter", step=0.125, fmt="%.3f")
    _number("Hole depth, TVD (ft)", "hole_depth", step=100.0, fmt="%.1f")
    _number("Current mud weight (ppg)", "current_mud_weight", step=0.1)

    st.divider()
    st.header("Pressures")
    _number("SIDPP (psi)", "sidpp", step=10.0)
    _number("SICP (psi)", "sicp", step=10.0)
    _number("Pit gain (bbl)", "pit_gain", step=1.0)
    _number("Normal circulating pressure (psi)", "normal_circulating_pressure", step=10.0)
    _number("Slow pump pressure (psi)", "user_stroke_pressure", step=10.0,
            help="Pressure at the kill rate recorded before the kick.")

    st.divider()
    st.header("Pump")
    _number("Pump capacity (bbl/stk)", "pump_capacity", step=0.001, fmt="%.4f")
    _number("Kill rate (spm)", "strokes_per_minute", step=1.0, fmt="%.0f")

    st.divider()
    st.header("Casing")
    _number("Casing ID (in)", "casing_id", step=0.125, fmt="%.3f")
    _number("Casing OD (in)", "casing_od", step=0.125, fmt="%.3f")
    _number("Casing shoe depth (ft)", "casing_setting_depth", step=100.0, fmt="%.1f")

    st.divider()
    st.header("Drill collars")
    _number("DC OD (in)", "dc_od", step=0.125, fmt="%.3f")
    _number("DC ID (in)", "dc_id", step=0.125, fmt="%.4f")
    _number("DC length (ft)", "dc_length", step=30.0, fmt="%.1f")

    st.divider()
    st.header("Drill pipe")
    _number("DP OD (in)", "dp_od", step=0.125, fmt="%.3f")
    _number("DP ID (in)", "dp_id", step=0.125, fmt="%.3f")
    _number("DP nominal weight (lb/ft)", "dp_nominal_weight", step=0.1, fmt="%.1f")

    st.divider()
    st.header("Heavy-weight drill pipe")
    hwdp = st.checkbox("HWDP in string", key="hwdp_present", on_change=_on_hwdp_toggle)
    # always rendered (disabled when unticked) so the widget keys survive reruns
    _number("HWDP OD (in)", "hwdp_od", step=0.125, fmt="%.3f", disabled=not hwdp)
    _number("HWDP ID (in)", "hwdp_id", step=0.125, fmt="%.3f", disabled=not hwdp)
    _number("HWDP length (ft)", "hwdp_length", step=30.0, fmt="%.1f", disabled=not hwdp)

    st.divider()
    with st.popover("Reset all fields"):
        st.write("Clear every input on the sheet?")
        st.button("Yes, reset", on_click=_reset_form, type="primary")


# -----------------------------
# Build input object & run
# -----------------------------
inp = input_from_mapping(st.session_state)
valid = is_valid_input(inp)
# invalid inputs clear the sheet instead of computing
result = _cached_compute(inp) if valid else invalid_result()

schedule = pressure_schedule(result)
series = pressure_series(result)
if series and series[1].strokes > DEFAULT_CHART_STEP:
    st.warning(
        f"Total strokes ({result.total_strokes:,.0f}) are too many to chart every "
        f"{DEFAULT_CHART_STEP} strokes; plotting every {series[1].strokes:,.0f}. Check the pump output."
    )


def _show(name: str) -> str:
    decimals = next(d for f, _l, _u, d in DISPLAY_FIELDS if f == name)
    return format_value(getattr(result, name), decimals)


col1, col2, col3 = st.columns(3, gap="large")

with col1:
    st.subheader("Kill parameters")
    st.metric("Kill mud weight (ppg)", _show("kill_mud_weight"))
    st.metric("ICP (psi)", _show("icp"))
    st.metric("FCP (psi)", _show("fcp"))
    st.metric("Pressure drop / 100 stk (psi)", _show("pressure_drop_per_100_strokes"))

with col2:
    st.subheader("Volumes & strokes")
    rows = []
    for name, label, unit, _decimals in DISPLAY_FIELDS[4:12]:
        rows.append({"Quantity": label, "Value": _show(name), "Unit": unit})
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

with col3:
    st.subheader("Time")
    st.metric("Surface to bit (min)", _show("time_surface_to_bit"))
    st.metric("Bit to surface (min)", _show("bit_to_surface_time"))
    st.metric("Total pumping time (min)", _show("total_pumping_time"))

if not valid:
    st.info("Enter hole depth, pump capacity and current mud weight (all > 0) to work the sheet.")

st.divider()
tcol, ccol = st.columns((1, 2), gap="large")

with tcol:
    st.subheader("Pressure schedule")
    st.dataframe(build_schedule_table(schedule), use_container_width=True, hide_index=True)

with ccol:
    st.subheader("Drillpipe pressure vs strokes")
    if series:
        fig = plot_pressure_series(series, schedule=schedule, fcp=result.fcp)
    else:
        fig = empty_pressure_figure()
    st.pyplot(fig, clear_figure=True)

st.divider()
if valid:
    st.download_button(
        "Download kill sheet (XLSX)",
        data=export_to_excel_bytes(inp, result, schedule=schedule, series=series),
        file_name=export_filename(),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
st.caption("Driller's method kill sheet for a vertical well. Verify against your rig's approved sheet before use.")
