"""Kelly criterion sizing: the single source of truth for bet sizing math.

All functions here are **pure**: no I/O, no logging.
Import from this module; never reimplement Kelly locally in the API or UI.

The model is a single binary bet.  A fraction ``f`` of bankroll is staked;
with probability ``p`` the bet wins and bankroll multiplies by ``1 + f·b``,
with probability ``q = 1 − p`` it loses and bankroll multiplies by ``1 − f``.
``b`` is the *net* odds (profit per unit staked, i.e. decimal odds minus one).

1. :func:`kelly_fraction`: closed-form full Kelly ``f*``.
2. :func:`expected_log_growth`: the Kelly objective ``g(f)``.
3. :func:`clamp`: shared bound helper used by the calculator.

Design decisions
----------------
* :func:`kelly_fraction` performs **no** validation.  It may return a
  negative value, which means the bet has negative edge.  Callers decide
  whether to clamp; the calculator reports both the raw and clamped values.
* :func:`expected_log_growth` returns ``None`` instead of raising when a
  growth factor is non-positive.  ``log(0)`` and ``log(<0)`` are domain
  errors, and an undefined growth is a normal, displayable outcome.

Run tests with::

    pytest tests/test_kelly.py -v
"""

from __future__ import annotations

import math
from typing import Final

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Upper bound on the applied bankroll fraction.  Staking the whole bankroll
#: (``f = 1``) makes the losing factor ``1 − f`` zero, i.e. certain ruin on
#: one loss and an undefined log growth.
MAX_APPLIED_FRACTION: Final[float] = 0.9999

#: Lower bound on the applied fraction.  Kelly never recommends shorting.
MIN_APPLIED_FRACTION: Final[float] = 0.0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp ``x`` to ``[lo, hi]``."""
    return min(hi, max(lo, x))


# ---------------------------------------------------------------------------
# Kelly
# ---------------------------------------------------------------------------


def kelly_fraction(p: float, b: float) -> float:
    """Full Kelly fraction for a binary bet.

    Maximising ``E[log(wealth)]`` for one win/loss bet gives the closed form
    (Kelly 1956)::

        f*  =  (b · p − q) / b        where q = 1 − p

    Args:
        p: Win probability.  Expected in ``(0, 1)``; not checked.
        b: Net odds.  Must be non-zero; upstream parsing guarantees ``b > 0``.

    Returns:
        Full Kelly fraction.  Negative when the bet has no positive edge.

    Examples::

        kelly_fraction(0.55, 1.10) →  0.1409
        kelly_fraction(0.40, 0.50) → -0.8000
    """
    q = 1.0 - p
    return (b * p - q) / b


def expected_log_growth(p: float, b: float, f: float) -> float | None:
    """Expected log growth per bet when staking fraction ``f``.

    ::

        g(f)  =  p · ln(1 + f·b)  +  q · ln(1 − f)

    Args:
        p: Win probability.
        b: Net odds.
        f: Fraction of bankroll staked.

    Returns:
        ``g(f)``, or ``None`` when either growth factor ``1 + f·b`` or
        ``1 − f`` is ``<= 0`` (log undefined).

    Examples::

        expected_log_growth(0.55, 1.10, 0.1409) → 0.01091
        expected_log_growth(0.55, 1.10, 1.0)    → None
    """
    q = 1.0 - p

    win_factor = 1.0 + f * b
    lose_factor = 1.0 - f

    if win_factor <= 0.0 or lose_factor <= 0.0:
        return None

    return p * math.log(win_factor) + q * math.log(lose_factor)
