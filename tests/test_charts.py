"""
Tests for the dashboard growth curve.
Run with: pytest tests/test_charts.py -v
"""

import pytest
from backend.core.calculator import KellyInputs, compute
from backend.core.kelly import MAX_APPLIED_FRACTION, expected_log_growth
from dashboard.charts import growth_curve, growth_figure


class TestGrowthCurve:
    """g(f) samples over [0, cap]"""

    def test_shape_and_bounds(self):
        df = growth_curve(0.55, 1.10, points=50)
        assert list(df.columns) == ["fraction", "growth"]
        assert len(df) == 50
        assert df["fraction"].iloc[0] == 0.0
        assert df["fraction"].iloc[-1] == pytest.approx(MAX_APPLIED_FRACTION)

    def test_values_match_growth_function(self):
        df = growth_curve(0.55, 1.10, points=11)
        for f, g in zip(df["fraction"], df["growth"]):
            assert g == pytest.approx(expected_log_growth(0.55, 1.10, float(f)))

    def test_peak_near_full_kelly(self):
        df = growth_curve(0.55, 1.10, points=1001)
        f_peak = df.loc[df["growth"].idxmax(), "fraction"]
        assert f_peak == pytest.approx(0.1409, abs=0.002)


class TestGrowthFigure:
    """Plotly figure built from a result"""

    def test_positive_edge_marks_applied_point(self):
        result = compute(KellyInputs.example())
        fig = growth_figure(result, points=20)
        names = [trace.name for trace in fig.data]
        assert names == ["g(f)", "Applied"]

    def test_negative_edge_still_plots(self):
        result = compute(KellyInputs(p="0.4", odds="1.50"))
        fig = growth_figure(result, points=20)
        assert len(fig.data) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
