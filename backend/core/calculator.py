"""Kelly calculator: turns raw form inputs into a full sizing result.

:func:`compute` is the one entry point the API and the dashboard call.  It
is a pure function from an explicit input struct (:class:`KellyInputs`) to
an explicit output struct: either a :class:`KellyResult` or a
:class:`ValidationFailure`.  There is no hidden state and no caching; the
cost is a handful of float operations, so callers recompute on every input
change.

Validation collects **every** problem before giving up, so a user who typed
a bad probability *and* bad odds sees both messages at once.  When any
problem exists no numbers are returned at all.

The textual step-by-step derivation lives in
:mod:`backend.core.breakdown` and is built from an already-computed
:class:`KellyResult`; nothing in this module formats text for display.

Typical usage::

    from backend.core.calculator import KellyInputs, compute

    outcome = compute(KellyInputs(p="0.55", odds="2.10", k=0.5, bankroll="1000"))
    if outcome.ok:
        print(outcome.stake)
    else:
        print(outcome.problems)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Final, Union

from backend.core.kelly import (
    MAX_APPLIED_FRACTION,
    MIN_APPLIED_FRACTION,
    clamp,
    expected_log_growth,
    kelly_fraction,
)
from backend.core.odds_math import (
    ODDS_FORMAT_DECIMAL,
    PROB_FORMAT_DECIMAL,
    parse_net_odds,
    parse_probability,
    to_number,
)

# ---------------------------------------------------------------------------
# Problem and advisory messages
# ---------------------------------------------------------------------------

PROBLEM_P_MISSING: Final[str] = "Probability (p) is missing or not a number."
PROBLEM_P_RANGE: Final[str] = "Probability (p) must be between 0 and 1 (exclusive)."
PROBLEM_ODDS_INVALID: Final[str] = "Odds are missing/invalid (check format)."
PROBLEM_B_NON_POSITIVE: Final[str] = "Net odds (b) must be > 0."

NO_EDGE_ADVISORY: Final[str] = (
    "Your inputs imply no positive edge (f* <= 0). "
    "Kelly recommends not betting (stake = 0)."
)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class KellyInputs:
    """Raw calculator inputs exactly as a form would hold them.

    Text fields stay text; parsing happens inside :func:`compute` so that
    parse failures become problems rather than exceptions.

    Attributes:
        bankroll: Optional bankroll text.  Blank means "no stake".
        p: Win probability text.
        p_format: ``"decimal"`` or ``"percent"``.
        odds: Odds text, e.g. ``"2.10"`` or ``"11/10"``.
        odds_format: ``"decimal"`` or ``"fractional"``.
        k: Fractional Kelly multiplier.  Nominally in ``[0, 1]`` but not
            range-checked; out-of-range values flow through the arithmetic
            and the final clamp on the applied fraction.
    """

    bankroll: str = ""
    p: str = ""
    p_format: str = PROB_FORMAT_DECIMAL
    odds: str = ""
    odds_format: str = ODDS_FORMAT_DECIMAL
    k: float = 1.0

    @classmethod
    def example(cls) -> "KellyInputs":
        """Demo preset: p = 0.55 at decimal 2.10 (b = 1.10), half-Kelly, 1000 bankroll."""
        return cls(
            bankroll="1000",
            p="0.55",
            p_format=PROB_FORMAT_DECIMAL,
            odds="2.10",
            odds_format=ODDS_FORMAT_DECIMAL,
            k=0.50,
        )

    @classmethod
    def reset(cls) -> "KellyInputs":
        """Blank preset: empty fields, decimal formats, full Kelly."""
        return cls()


#: Named presets, keyed by the names the API exposes.
PRESETS: Final[dict[str, KellyInputs]] = {
    "example": KellyInputs.example(),
    "reset": KellyInputs.reset(),
}


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """Inputs could not be used.  Carries every problem found, in order."""

    problems: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class KellyResult:
    """All sizing numbers for one valid set of inputs.

    Attributes:
        p: Canonical win probability in ``(0, 1)``.
        b: Net odds, ``> 0``.
        q: Loss probability ``1 − p``.
        f_star_raw: Full Kelly fraction; negative means no edge.
        f_star_clamped: ``max(0, f_star_raw)``.
        k: Multiplier exactly as supplied.
        f_applied_raw: ``k · f_star_clamped`` before bounding.
        f_applied: ``f_applied_raw`` clamped to ``[0, 0.9999]``.
        bankroll: Parsed bankroll when it is finite and positive, else ``None``.
        stake: ``bankroll · f_applied``, or ``None`` when no usable bankroll
            was given.  ``None`` means "not computed", not zero.
        growth: Expected log growth at ``f_applied``, or ``None`` if undefined.
    """

    p: float
    b: float
    q: float
    f_star_raw: float
    f_star_clamped: float
    k: float
    f_applied_raw: float
    f_applied: float
    bankroll: float | None = None
    stake: float | None = None
    growth: float | None = None

    @property
    def ok(self) -> bool:
        return True

    @property
    def has_edge(self) -> bool:
        return self.f_star_raw > 0.0

    @property
    def advisory(self) -> str | None:
        """Informational note when the inputs imply no positive edge."""
        if self.has_edge:
            return None
        return NO_EDGE_ADVISORY


CalculationOutcome = Union[KellyResult, ValidationFailure]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate(p: float | None, b: float | None) -> list[str]:
    """Return every problem with the parsed probability and net odds.

    Checks run independently; a missing probability does not stop the odds
    from being checked.
    """
    problems: list[str] = []

    if p is None or not math.isfinite(p):
        problems.append(PROBLEM_P_MISSING)
    elif p <= 0.0 or p >= 1.0:
        problems.append(PROBLEM_P_RANGE)

    if b is None or not math.isfinite(b):
        problems.append(PROBLEM_ODDS_INVALID)
    elif b <= 0.0:
        problems.append(PROBLEM_B_NON_POSITIVE)

    return problems


def parse_bankroll(value: object) -> float | None:
    """Parse bankroll text; only finite, strictly positive values count."""
    bankroll = to_number(value)
    if bankroll is None or bankroll <= 0.0:
        return None
    return bankroll


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def compute(inputs: KellyInputs) -> CalculationOutcome:
    """Compute the full Kelly sizing bundle for one set of form inputs.

    Steps (on valid inputs)::

        q              = 1 − p
        f*             = (b·p − q) / b
        f*_clamped     = max(0, f*)
        f_applied_raw  = k · f*_clamped
        f_applied      = clamp(f_applied_raw, 0, 0.9999)
        stake          = bankroll · f_applied        (if bankroll > 0)
        growth         = p·ln(1 + f_applied·b) + q·ln(1 − f_applied)

    Args:
        inputs: Raw form values.

    Returns:
        :class:`KellyResult` when probability and odds are valid, otherwise
        :class:`ValidationFailure` listing all problems.  Never raises for any
        text in the form fields.
    """
    p = parse_probability(inputs.p, inputs.p_format)
    b = parse_net_odds(inputs.odds, inputs.odds_format)

    problems = validate(p, b)
    if problems:
        return ValidationFailure(problems=tuple(problems))

    k = float(inputs.k)

    q = 1.0 - p
    f_star_raw = kelly_fraction(p, b)
    f_star_clamped = max(0.0, f_star_raw)
    f_applied_raw = k * f_star_clamped
    f_applied = clamp(f_applied_raw, MIN_APPLIED_FRACTION, MAX_APPLIED_FRACTION)

    bankroll = parse_bankroll(inputs.bankroll)
    stake = bankroll * f_applied if bankroll is not None else None

    growth = expected_log_growth(p, b, f_applied)

    return KellyResult(
        p=p,
        b=b,
        q=q,
        f_star_raw=f_star_raw,
        f_star_clamped=f_star_clamped,
        k=k,
        f_applied_raw=f_applied_raw,
        f_applied=f_applied,
        bankroll=bankroll,
        stake=stake,
        growth=growth,
    )
