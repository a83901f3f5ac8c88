from __future__ import annotations

import plotly.express as px
import streamlit as st

from poisonsim.constants import DEFAULT_CONSTANTS
from poisonsim.equilibrium import solve_equilibrium
from poisonsim.engine import TransientIntegrator
from poisonsim.session import TransientSession
from services.viewer.app.client import ApiClient


@st.cache_resource
def get_client() -> ApiClient:
    return ApiClient()


st.set_page_config(page_title="Xenon & Samarium Poisoning", layout="wide")
st.title("Xenon & Samarium Poisoning")
st.caption("Extend the simulation segment by segment at any power level.")

use_api = st.sidebar.checkbox("Compute through the API", value=False)
phi_0 = st.sidebar.number_input("Reference flux (n/cm²/s)", value=DEFAULT_CONSTANTS.phi_0, format="%.3e")

if "session" not in st.session_state:
    st.session_state["session"] = TransientSession()
session: TransientSession = st.session_state["session"]
session.runner = get_client().run if use_api else TransientIntegrator().run

col_time, col_state = st.columns(2)
with col_time:
    duration = st.number_input("Simulation time (days)", min_value=0.0, value=1.0, step=0.5)
with col_state:
    state_pct = st.slider("Reactor power", min_value=0, max_value=100, value=100, format="%d%%")

col_extend, col_clear = st.columns(2)
if col_extend.button("Extend simulation", use_container_width=True):
    if duration <= 0:
        st.error("Please enter a valid positive number for simulation time.")
    else:
        try:
            session.extend(duration, state_pct / 100.0, flux=phi_0)
        except Exception as e:
            st.error(str(e))
if col_clear.button("Clear simulation", use_container_width=True):
    session.clear()

if len(session) == 0:
    st.info("No simulation yet. Choose a duration and power level, then extend.")
    st.stop()

df = session.history.to_dataframe().rename(
    columns={
        "iodine": "Iodine-135",
        "xenon": "Xenon-135",
        "promethium": "Promethium-149",
        "samarium": "Samarium-149",
        "reactivity_xe": "Xe-135 Reactivity",
        "reactivity_sm": "Sm-149 Reactivity",
    }
)

fig_conc = px.line(
    df,
    x="time",
    y=["Iodine-135", "Xenon-135", "Promethium-149", "Samarium-149"],
    title="Poison Concentration Over Time",
    labels={"time": "Time (days)", "value": "Concentration"},
)
st.plotly_chart(fig_conc, use_container_width=True)

fig_rho = px.line(
    df,
    x="time",
    y=["Xe-135 Reactivity", "Sm-149 Reactivity"],
    title="Negative Reactivity Over Time",
    labels={"time": "Time (days)", "value": "Reactivity"},
)
st.plotly_chart(fig_rho, use_container_width=True)

with st.expander("Equilibrium and post-shutdown peak"):
    if use_api:
        report = get_client().report(phi_0)
    else:
        report = solve_equilibrium(phi_0)
    st.json(report.to_dict())
