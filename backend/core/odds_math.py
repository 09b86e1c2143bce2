"""Probability and odds parsing: the single source of truth.

Every function here is **pure**: no I/O, no logging, no side effects.
Import from this module; never reimplement parsing in the API or dashboard.

The two parsers exposed are:

1. :func:`parse_probability`: decimal (``0.55``) or percent (``55``) text
   to a probability number.
2. :func:`parse_net_odds`: decimal (``2.10``) or fractional (``11/10``)
   text to *net* odds ``b`` (profit per unit staked).

Design decisions
----------------
* Parsers signal failure by returning ``None``, never by raising.  The
  calculator turns each ``None`` into an entry on its problem list.
* :func:`parse_probability` does **not** enforce ``0 < p < 1``.  A value
  like ``1.5`` parses; the calculator rejects it with a range message that
  is distinct from the "not a number" message.
* :func:`parse_net_odds` *does* enforce its domain (``D > 1``, ``A, B > 0``).
  Odds that can never pay out are reported the same way as unreadable odds.

Run tests with::

    pytest tests/test_odds_math.py -v
"""

from __future__ import annotations

import math
from typing import Final, Literal

# ---------------------------------------------------------------------------
# Format tags
# ---------------------------------------------------------------------------

ProbabilityFormat = Literal["decimal", "percent"]
OddsFormat = Literal["decimal", "fractional"]

PROB_FORMAT_DECIMAL: Final[str] = "decimal"
PROB_FORMAT_PERCENT: Final[str] = "percent"
ODDS_FORMAT_DECIMAL: Final[str] = "decimal"
ODDS_FORMAT_FRACTIONAL: Final[str] = "fractional"

PROBABILITY_FORMATS: Final[tuple[str, ...]] = (PROB_FORMAT_DECIMAL, PROB_FORMAT_PERCENT)
ODDS_FORMATS: Final[tuple[str, ...]] = (ODDS_FORMAT_DECIMAL, ODDS_FORMAT_FRACTIONAL)

#: Decimal odds must strictly exceed this to pay any profit.  ``D = 1.0``
#: returns the stake only, which gives ``b = 0`` and an undefined Kelly
#: division.
MIN_DECIMAL_ODDS: Final[float] = 1.0


# ---------------------------------------------------------------------------
# Numeric conversion
# ---------------------------------------------------------------------------


def to_number(value: object) -> float | None:
    """Convert free-form input text to a finite float.

    Leading and trailing whitespace is ignored.  Blank text, non-numeric
    text, ``inf`` and ``nan`` all return ``None``.  So does text with ``_``
    digit separators or non-ASCII digits, which ``float`` would otherwise
    accept.

    Examples::

        to_number(" 0.55 ") → 0.55
        to_number("1e3")    → 1000.0
        to_number("")       → None
        to_number("abc")    → None
        to_number("inf")    → None
        to_number("1_000")  → None
    """
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text or "_" in text or not text.isascii():
        return None
    try:
        x = float(text)
    except ValueError:
        return None
    if not math.isfinite(x):
        return None
    return x


# ---------------------------------------------------------------------------
# Probability
# ---------------------------------------------------------------------------


def parse_probability(value: object, fmt: str) -> float | None:
    """Convert probability input into a decimal probability.

    Args:
        value: Raw input text (or a number).
        fmt: ``"decimal"`` (``0.55``) or ``"percent"`` (``55``).  Any
            value other than ``"percent"`` is read as decimal.

    Returns:
        The probability as a float, or ``None`` when ``value`` is blank,
        non-numeric or non-finite.  The ``(0, 1)`` bound is **not**
        checked here.

    Examples::

        parse_probability("0.55", "decimal") → 0.55
        parse_probability("55", "percent")   → 0.55
        parse_probability("1.5", "decimal")  → 1.5   (range checked later)
        parse_probability("abc", "decimal")  → None
    """
    x = to_number(value)
    if x is None:
        return None
    if fmt == PROB_FORMAT_PERCENT:
        return x / 100.0
    return x


# ---------------------------------------------------------------------------
# Odds
# ---------------------------------------------------------------------------


def parse_net_odds(value: object, fmt: str) -> float | None:
    """Convert odds input into net odds ``b`` (profit per 1 unit staked).

    * Decimal odds ``D``  →  ``b = D − 1``  (requires ``D > 1``)
    * Fractional ``A/B``  →  ``b = A / B``  (requires ``A > 0`` and ``B > 0``)

    Args:
        value: Raw odds text, e.g. ``"2.10"`` or ``"11/10"``.
        fmt: ``"decimal"`` or ``"fractional"``.

    Returns:
        Net odds ``b > 0``, or ``None`` on any parse or validation failure.

    Examples::

        parse_net_odds("2.10", "decimal")     → 1.1
        parse_net_odds("11/10", "fractional") → 1.1
        parse_net_odds("1.0", "decimal")      → None   (no profit possible)
        parse_net_odds("11/10/2", "fractional") → None
        parse_net_odds("0/5", "fractional")   → None
    """
    text = "" if value is None else str(value).strip()
    if not text:
        return None

    if fmt == ODDS_FORMAT_DECIMAL:
        decimal_odds = to_number(text)
        if decimal_odds is None or decimal_odds <= MIN_DECIMAL_ODDS:
            return None
        return decimal_odds - 1.0

    if fmt != ODDS_FORMAT_FRACTIONAL:
        return None

    parts = text.split("/")
    if len(parts) != 2:
        return None

    numerator = to_number(parts[0])
    denominator = to_number(parts[1])
    if numerator is None or denominator is None:
        return None
    if numerator <= 0.0 or denominator <= 0.0:
        return None

    net = numerator / denominator
    # Huge/tiny operands can overflow the quotient.
    if not math.isfinite(net):
        return None
    return net
