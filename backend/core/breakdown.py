"""Step-by-step text for a computed Kelly result.

Formatting only.  Every function here takes values that
:func:`backend.core.calculator.compute` already produced and re-derives them
into text; none of them does sizing arithmetic of its own.  Keeping this
apart from the math lets the numbers be tested without string matching.

Two kinds of output:

* **Breakdown lines**: :func:`build_breakdown` returns the numbered
  derivation, with every intermediate value at full precision.
* **Display strings**: :func:`summary` and :func:`format_number` return
  short rounded strings for metric tiles.  Missing values render as ``"—"``.
"""

from __future__ import annotations

import math
from typing import Final

from backend.core.calculator import (
    CalculationOutcome,
    KellyInputs,
    KellyResult,
    ValidationFailure,
)
from backend.core.kelly import MAX_APPLIED_FRACTION
from backend.core.odds_math import ODDS_FORMAT_DECIMAL

MISSING: Final[str] = "—"
STAKE_NOT_COMPUTED: Final[str] = "Enter bankroll to compute"
PROBLEMS_HEADER: Final[str] = "Fix these input issues:"


# ---------------------------------------------------------------------------
# Number rendering
# ---------------------------------------------------------------------------


def format_number(x: float | None, digits: int = 4) -> str:
    """Fixed-point display string, or ``"—"`` for missing/non-finite values."""
    if x is None or not math.isfinite(x):
        return MISSING
    return f"{x:.{digits}f}"


def plain_number(x: float) -> str:
    """Shortest exact representation, without a trailing ``.0``.

    Used in the breakdown so each line shows the value that was actually
    used, not a rounded one::

        plain_number(1.1)    → "1.1"
        plain_number(1000.0) → "1000"
        plain_number(-0.0)   → "0"
    """
    if x == 0:
        return "0"
    text = repr(float(x))
    if text.endswith(".0"):
        return text[:-2]
    return text


def multiplier_label(k: float) -> str:
    """Label for the multiplier control, e.g. ``"0.50×"``."""
    return f"{k:.2f}×"


# ---------------------------------------------------------------------------
# Breakdown
# ---------------------------------------------------------------------------


def build_breakdown(inputs: KellyInputs, result: KellyResult) -> list[str]:
    """Numbered derivation of ``result`` from ``inputs``.

    Args:
        inputs: The inputs ``result`` was computed from.  Only the raw odds
            text and odds format are read, to echo what the user typed.
        result: A successful calculation.

    Returns:
        Lines of text, blank strings separating the steps.
    """
    p = plain_number(result.p)
    q = plain_number(result.q)
    b = plain_number(result.b)
    k = plain_number(result.k)
    f_star = plain_number(result.f_star_raw)
    f_star_clamped = plain_number(result.f_star_clamped)
    f_applied_raw = plain_number(result.f_applied_raw)
    f_applied = plain_number(result.f_applied)
    odds_text = str(inputs.odds).strip()
    cap = plain_number(MAX_APPLIED_FRACTION)

    lines = [
        "Step-by-step:",
        "",
        f"1) Parse probability: p = {p}  =>  q = 1 - p = {q}",
        "",
        "2) Convert odds -> net odds (b):",
    ]
    if inputs.odds_format == ODDS_FORMAT_DECIMAL:
        lines.append(f"   Decimal odds D = {odds_text}")
        lines.append(f"   Net odds b = D - 1 = {b}")
    else:
        lines.append(f"   Fractional odds = {odds_text}")
        lines.append(f"   Net odds b = A/B = {b}")

    lines += [
        "",
        "3) Full Kelly fraction (raw):",
        "   f* = (b*p - q) / b",
        f"      = ({b} * {p} - {q}) / {b}",
        f"      = {f_star}",
        "",
        "4) Clamp negative Kelly to 0 (common practical rule):",
        f"   f*_clamped = max(0, f*) = {f_star_clamped}",
        "",
        "5) Apply fractional Kelly multiplier k:",
        f"   k = {k}",
        f"   f_applied_raw = k * f*_clamped = {k} * {f_star_clamped} = {f_applied_raw}",
        f"   f_applied = clamp(f_applied_raw, 0, {cap}) = {f_applied}",
        "",
        "6) If bankroll provided, compute stake:",
    ]
    if result.stake is None:
        lines.append("   bankroll not provided -> stake not computed")
    else:
        bankroll = plain_number(result.bankroll)
        stake = plain_number(result.stake)
        lines.append(f"   stake = bankroll * f_applied = {bankroll} * {f_applied} = {stake}")

    lines += [
        "",
        "7) Expected log growth per bet (Kelly objective):",
        "   g(f) = p*ln(1 + f*b) + q*ln(1 - f)",
    ]
    if result.growth is None:
        lines.append("   Not computable (invalid log factors).")
    else:
        lines.append(f"   g = {p}*ln(1 + {f_applied}*{b}) + {q}*ln(1 - {f_applied})")
        lines.append(f"     = {plain_number(result.growth)}")

    if result.advisory is not None:
        lines += ["", "Note:", result.advisory]

    return lines


def render_problems(failure: ValidationFailure) -> str:
    """Problem list as a single block of text."""
    return PROBLEMS_HEADER + "\n- " + "\n- ".join(failure.problems)


def render(inputs: KellyInputs, outcome: CalculationOutcome) -> str:
    """Breakdown text for a success, or the problem list for a failure."""
    if isinstance(outcome, ValidationFailure):
        return render_problems(outcome)
    return "\n".join(build_breakdown(inputs, outcome))


# ---------------------------------------------------------------------------
# Display summary
# ---------------------------------------------------------------------------


def summary(outcome: CalculationOutcome) -> dict[str, str]:
    """Short display strings for each output tile.

    Keys: ``b``, ``q``, ``kelly``, ``applied``, ``stake``, ``growth``.
    Every value is ``"—"`` when ``outcome`` is a validation failure.
    """
    if isinstance(outcome, ValidationFailure):
        return {key: MISSING for key in ("b", "q", "kelly", "applied", "stake", "growth")}

    if outcome.stake is None:
        stake = STAKE_NOT_COMPUTED
    else:
        stake = f"{format_number(outcome.stake, 2)} (units)"

    return {
        "b": format_number(outcome.b, 4),
        "q": format_number(outcome.q, 4),
        "kelly": (
            f"{format_number(outcome.f_star_raw, 4)} (raw), "
            f"{format_number(outcome.f_star_clamped, 4)} (clamped ≥ 0)"
        ),
        "applied": format_number(outcome.f_applied, 4),
        "stake": stake,
        "growth": format_number(outcome.growth, 6),
    }
