"""
Streamlit Dashboard for the Kelly Edge Calculator
Single-bet Kelly sizing with a step-by-step breakdown
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import streamlit as st

from backend.core.breakdown import multiplier_label, render, summary
from backend.core.calculator import KellyInputs, ValidationFailure, compute
from backend.core.odds_math import ODDS_FORMATS, PROBABILITY_FORMATS
from dashboard.charts import growth_figure

st.set_page_config(
    page_title="Kelly Edge Calculator",
    page_icon="🎯",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ==============================================================================
# STATE
# ==============================================================================

_FIELDS = ("bankroll", "p", "p_format", "odds", "odds_format", "k")


def _apply_preset(inputs: KellyInputs) -> None:
    """Copy a preset into the widget state (runs as a button callback)."""
    for name in _FIELDS:
        st.session_state[name] = getattr(inputs, name)


def _current_inputs() -> KellyInputs:
    return KellyInputs(**{name: st.session_state[name] for name in _FIELDS})


if "p" not in st.session_state:
    _apply_preset(KellyInputs.reset())


# ==============================================================================
# SIDEBAR: INPUTS
# ==============================================================================

with st.sidebar:
    st.title("🎯 Kelly Edge")
    st.caption("Single binary bet")

    st.text_input("Bankroll (optional)", key="bankroll", placeholder="e.g. 1000")

    col_p, col_pf = st.columns([2, 1])
    col_p.text_input("Win probability (p)", key="p", placeholder="e.g. 0.55 or 55")
    col_pf.selectbox("Format", PROBABILITY_FORMATS, key="p_format")

    col_o, col_of = st.columns([2, 1])
    col_o.text_input("Odds", key="odds", placeholder="e.g. 2.10 or 11/10")
    col_of.selectbox("Format", ODDS_FORMATS, key="odds_format")

    st.slider("Fractional Kelly (k)", min_value=0.0, max_value=1.0, step=0.01, key="k")
    st.caption(f"Multiplier: {multiplier_label(st.session_state['k'])}")

    st.markdown("---")
    col_ex, col_reset = st.columns(2)
    col_ex.button("Load example", on_click=_apply_preset, args=(KellyInputs.example(),))
    col_reset.button("Reset", on_click=_apply_preset, args=(KellyInputs.reset(),))


# ==============================================================================
# RESULTS
# ==============================================================================

inputs = _current_inputs()
outcome = compute(inputs)
display = summary(outcome)

st.title("Kelly Criterion Calculator")

c1, c2, c3 = st.columns(3)
c1.metric("Net odds (b)", display["b"])
c2.metric("Loss probability (q)", display["q"])
c3.metric("Applied fraction", display["applied"])

c4, c5, c6 = st.columns(3)
c4.metric("Full Kelly (f*)", display["kelly"])
c5.metric("Stake", display["stake"])
c6.metric("Expected log growth", display["growth"])

st.markdown("---")

if isinstance(outcome, ValidationFailure):
    st.error("Fix the inputs in the sidebar to see a sizing recommendation.")
else:
    if outcome.advisory:
        st.warning(outcome.advisory)
    st.subheader("Growth Curve")
    st.plotly_chart(growth_figure(outcome), use_container_width=True)

st.subheader("Breakdown")
st.code(render(inputs, outcome), language=None)
