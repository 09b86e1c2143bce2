"""
Tests for the Kelly calculator (validation + orchestration).
Run with: pytest tests/test_calculator.py -v
"""

import math

import pytest
from backend.core.calculator import (
    NO_EDGE_ADVISORY,
    PRESETS,
    PROBLEM_B_NON_POSITIVE,
    PROBLEM_ODDS_INVALID,
    PROBLEM_P_MISSING,
    PROBLEM_P_RANGE,
    KellyInputs,
    KellyResult,
    ValidationFailure,
    compute,
    parse_bankroll,
    validate,
)
from backend.core.kelly import MAX_APPLIED_FRACTION


def _inputs(**overrides) -> KellyInputs:
    base = dict(bankroll="1000", p="0.55", odds="2.10", k=1.0)
    base.update(overrides)
    return KellyInputs(**base)


class TestValidation:
    """Every problem is reported, in a fixed order"""

    def test_valid_inputs_have_no_problems(self):
        assert validate(0.55, 1.1) == []

    def test_missing_probability(self):
        assert validate(None, 1.1) == [PROBLEM_P_MISSING]

    @pytest.mark.parametrize("p", [0.0, 1.0, -0.1, 1.5])
    def test_probability_out_of_range(self, p):
        assert validate(p, 1.1) == [PROBLEM_P_RANGE]

    def test_missing_odds(self):
        assert validate(0.55, None) == [PROBLEM_ODDS_INVALID]

    def test_non_finite_odds(self):
        assert validate(0.55, math.inf) == [PROBLEM_ODDS_INVALID]

    @pytest.mark.parametrize("b", [0.0, -1.0])
    def test_non_positive_odds(self, b):
        assert validate(0.55, b) == [PROBLEM_B_NON_POSITIVE]

    def test_problems_accumulate(self):
        assert validate(None, None) == [PROBLEM_P_MISSING, PROBLEM_ODDS_INVALID]
        assert validate(1.2, 0.0) == [PROBLEM_P_RANGE, PROBLEM_B_NON_POSITIVE]

    def test_non_numeric_p_and_bad_decimal_odds_give_two_problems(self):
        outcome = compute(_inputs(p="abc", odds="0.5"))
        assert isinstance(outcome, ValidationFailure)
        assert outcome.problems == (PROBLEM_P_MISSING, PROBLEM_ODDS_INVALID)

    def test_failure_has_no_numbers(self):
        outcome = compute(_inputs(p="1"))
        assert not outcome.ok
        assert not hasattr(outcome, "f_applied")


class TestBankroll:
    """Stake only when bankroll is finite and positive"""

    @pytest.mark.parametrize("text, expected", [("1000", 1000.0), (" 250.5 ", 250.5)])
    def test_positive(self, text, expected):
        assert parse_bankroll(text) == expected

    @pytest.mark.parametrize("text", ["", "0", "-100", "abc", "inf"])
    def test_unusable(self, text):
        assert parse_bankroll(text) is None

    def test_no_bankroll_means_no_stake(self):
        outcome = compute(_inputs(bankroll=""))
        assert outcome.ok
        assert outcome.stake is None
        assert outcome.bankroll is None

    def test_zero_bankroll_is_not_a_zero_stake(self):
        assert compute(_inputs(bankroll="0")).stake is None


class TestScenarios:
    """End-to-end calculator scenarios"""

    def test_positive_edge_full_kelly(self):
        outcome = compute(_inputs())
        assert isinstance(outcome, KellyResult)
        assert outcome.b == pytest.approx(1.10)
        assert outcome.q == pytest.approx(0.45)
        # f* = 0.55 - 0.45 / 1.10
        assert outcome.f_star_raw == pytest.approx(0.140909, abs=1e-6)
        assert outcome.f_star_clamped == outcome.f_star_raw
        assert outcome.f_applied == pytest.approx(outcome.f_star_raw)
        assert outcome.stake == pytest.approx(140.909, abs=1e-3)
        assert outcome.growth == pytest.approx(0.010909, abs=1e-5)
        assert outcome.has_edge
        assert outcome.advisory is None

    def test_negative_edge(self):
        outcome = compute(_inputs(p="0.4", odds="1.50"))
        assert outcome.ok
        assert outcome.b == pytest.approx(0.5)
        assert outcome.f_star_raw == pytest.approx(-0.8)
        assert outcome.f_star_clamped == 0.0
        assert outcome.f_applied == 0.0
        assert outcome.stake == 0.0
        assert outcome.growth == 0.0
        assert not outcome.has_edge
        assert outcome.advisory == NO_EDGE_ADVISORY

    def test_negative_edge_without_bankroll(self):
        outcome = compute(_inputs(p="0.4", odds="1.50", bankroll=""))
        assert outcome.stake is None
        assert outcome.advisory == NO_EDGE_ADVISORY

    def test_percent_probability_matches_decimal(self):
        percent = compute(_inputs(p="50", p_format="percent"))
        decimal = compute(_inputs(p="0.5", p_format="decimal"))
        assert percent == decimal

    def test_fractional_odds_match_decimal(self):
        fractional = compute(_inputs(odds="11/10", odds_format="fractional"))
        decimal = compute(_inputs(odds="2.10", odds_format="decimal"))
        for name in ("b", "q", "f_star_raw", "f_star_clamped", "f_applied", "stake", "growth"):
            assert getattr(fractional, name) == pytest.approx(getattr(decimal, name))

    def test_certain_probability_rejected(self):
        outcome = compute(_inputs(p="1"))
        assert isinstance(outcome, ValidationFailure)
        assert outcome.problems == (PROBLEM_P_RANGE,)

    def test_zero_probability_rejected(self):
        assert compute(_inputs(p="0")).problems == (PROBLEM_P_RANGE,)

    def test_even_decimal_odds_rejected(self):
        assert compute(_inputs(odds="1.0")).problems == (PROBLEM_ODDS_INVALID,)

    def test_zero_fractional_parts_rejected(self):
        assert compute(_inputs(odds="0/1", odds_format="fractional")).problems == (
            PROBLEM_ODDS_INVALID,
        )

    def test_reset_preset_reports_missing_inputs(self):
        outcome = compute(KellyInputs.reset())
        assert outcome.problems == (PROBLEM_P_MISSING, PROBLEM_ODDS_INVALID)


class TestFractionalMultiplier:
    """k scales the clamped Kelly fraction and is never range-checked"""

    def test_half_kelly(self):
        full = compute(_inputs(k=1.0))
        half = compute(_inputs(k=0.5))
        assert half.f_applied_raw == pytest.approx(full.f_star_clamped * 0.5)
        assert half.f_applied == pytest.approx(full.f_applied * 0.5)

    def test_k_above_one_passes_through_then_caps(self):
        outcome = compute(_inputs(k=100.0))
        assert outcome.k == 100.0
        assert outcome.f_applied_raw == pytest.approx(outcome.f_star_clamped * 100.0)
        assert outcome.f_applied == MAX_APPLIED_FRACTION
        assert outcome.growth is not None

    def test_negative_k_floors_at_zero(self):
        outcome = compute(_inputs(k=-1.0))
        assert outcome.f_applied_raw < 0
        assert outcome.f_applied == 0.0

    @pytest.mark.parametrize("k", [0.0, 0.25, 0.5, 1.0, 2.0, 7.5, 1e9])
    @pytest.mark.parametrize("p, odds", [("0.55", "2.10"), ("0.4", "1.50"), ("0.99", "50")])
    def test_applied_fraction_always_bounded(self, k, p, odds):
        outcome = compute(_inputs(p=p, odds=odds, k=k))
        assert outcome.f_star_clamped >= 0.0
        assert 0.0 <= outcome.f_applied <= MAX_APPLIED_FRACTION


class TestPresets:
    """Canned input configurations"""

    def test_example(self):
        example = KellyInputs.example()
        assert example.bankroll == "1000"
        assert example.p == "0.55"
        assert example.p_format == "decimal"
        assert example.odds == "2.10"
        assert example.odds_format == "decimal"
        assert example.k == 0.5

    def test_reset(self):
        reset = KellyInputs.reset()
        assert (reset.bankroll, reset.p, reset.odds) == ("", "", "")
        assert reset.p_format == "decimal"
        assert reset.odds_format == "decimal"
        assert reset.k == 1.0

    def test_registry(self):
        assert PRESETS["example"] == KellyInputs.example()
        assert PRESETS["reset"] == KellyInputs.reset()

    def test_example_computes_half_kelly_stake(self):
        outcome = compute(KellyInputs.example())
        assert outcome.f_applied == pytest.approx(0.140909 / 2, abs=1e-6)
        assert outcome.stake == pytest.approx(70.4545, abs=1e-3)

    def test_compute_is_idempotent(self):
        assert compute(KellyInputs.example()) == compute(KellyInputs.example())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
