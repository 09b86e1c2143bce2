"""Growth-curve data and figure for the dashboard."""

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from backend.core.calculator import KellyResult
from backend.core.kelly import MAX_APPLIED_FRACTION, expected_log_growth

DEFAULT_CURVE_POINTS = 200


def growth_curve(p: float, b: float, points: int = DEFAULT_CURVE_POINTS) -> pd.DataFrame:
    """Expected log growth g(f) sampled over f in [0, 0.9999].

    Columns: ``fraction``, ``growth``.  ``growth`` is NaN where the log is
    undefined, so plotly leaves a gap instead of drawing a bogus value.
    """
    fractions = np.linspace(0.0, MAX_APPLIED_FRACTION, points)
    growth = [expected_log_growth(p, b, float(f)) for f in fractions]
    return pd.DataFrame({
        "fraction": fractions,
        "growth": [np.nan if g is None else g for g in growth],
    })


def growth_figure(result: KellyResult, points: int = DEFAULT_CURVE_POINTS) -> go.Figure:
    """g(f) line with the full-Kelly and applied fractions marked."""
    df = growth_curve(result.p, result.b, points)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df["fraction"], y=df["growth"],
        mode="lines", name="g(f)",
        hovertemplate="f = %{x:.2%}<br>g = %{y:.5f}<extra></extra>",
    ))

    if result.growth is not None:
        fig.add_trace(go.Scatter(
            x=[result.f_applied], y=[result.growth],
            mode="markers", name="Applied",
            marker=dict(size=12, color="green"),
        ))

    if result.has_edge and result.f_star_raw < 1.0:
        fig.add_vline(
            x=result.f_star_raw,
            line=dict(dash="dash", color="gray"),
            annotation_text="Full Kelly",
        )

    fig.add_hline(y=0.0, line=dict(color="lightgray"))
    fig.update_layout(
        xaxis=dict(title="Fraction of bankroll staked (f)", tickformat=".0%"),
        yaxis=dict(title="Expected log growth per bet"),
        height=380,
    )
    return fig
