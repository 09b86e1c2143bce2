"""
Pydantic request/response schemas for the Kelly Edge API.

Using explicit schemas instead of raw dicts keeps the JSON contract stable
and generates accurate OpenAPI docs.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from backend.core.calculator import KellyInputs, KellyResult, ValidationFailure
from backend.core.odds_math import OddsFormat, ProbabilityFormat


# ---------------------------------------------------------------------------
# Compute
# ---------------------------------------------------------------------------

class KellyComputeRequest(BaseModel):
    """
    Payload for POST /api/kelly/compute.

    Text fields are passed through to the calculator unparsed, so that a
    bad probability or bad odds come back as readable problems rather than
    a 422.  Only the format selectors and the multiplier are typed.
    """

    bankroll: str = Field("", description="Optional bankroll; blank = no stake")
    p: str = Field("", description='Win probability, e.g. "0.55" or "55"')
    p_format: ProbabilityFormat = Field("decimal")
    odds: str = Field("", description='Odds, e.g. "2.10" or "11/10"')
    odds_format: OddsFormat = Field("decimal")
    k: float = Field(
        1.0,
        allow_inf_nan=False,
        description="Fractional Kelly multiplier, nominally 0-1 (not range-checked)",
    )

    @field_validator("bankroll", "p", "odds", mode="before")
    @classmethod
    def coerce_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def to_inputs(self) -> KellyInputs:
        return KellyInputs(
            bankroll=self.bankroll,
            p=self.p,
            p_format=self.p_format,
            odds=self.odds,
            odds_format=self.odds_format,
            k=self.k,
        )

    @classmethod
    def from_inputs(cls, inputs: KellyInputs) -> "KellyComputeRequest":
        return cls(
            bankroll=inputs.bankroll,
            p=inputs.p,
            p_format=inputs.p_format,
            odds=inputs.odds,
            odds_format=inputs.odds_format,
            k=inputs.k,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "bankroll": "1000",
                "p": "0.55",
                "p_format": "decimal",
                "odds": "2.10",
                "odds_format": "decimal",
                "k": 0.5,
            }
        }
    }


class KellyComputeResponse(BaseModel):
    """
    Result of POST /api/kelly/compute.

    When ``valid`` is False only ``problems``, ``breakdown`` and ``summary``
    are populated; every numeric field is null.

    When ``valid`` is True a numeric field is null only if the value is
    absent (``stake``, ``growth``) or overflowed to a non-finite float, e.g.
    ``f_star_raw`` when ``b`` is near the smallest positive float.  The
    matching ``summary`` string then reads "—".
    """

    valid: bool
    problems: List[str] = Field(default_factory=list)

    p: Optional[float] = None
    b: Optional[float] = None
    q: Optional[float] = None
    f_star_raw: Optional[float] = None
    f_star_clamped: Optional[float] = None
    k: Optional[float] = None
    f_applied_raw: Optional[float] = None
    f_applied: Optional[float] = None
    stake: Optional[float] = Field(None, description="Null when no positive bankroll was given")
    growth: Optional[float] = Field(None, description="Null when log growth is undefined")

    advisory: Optional[str] = None
    breakdown: List[str] = Field(default_factory=list)
    summary: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_failure(
        cls,
        failure: ValidationFailure,
        breakdown: List[str],
        summary: Dict[str, str],
    ) -> "KellyComputeResponse":
        return cls(
            valid=False,
            problems=list(failure.problems),
            breakdown=breakdown,
            summary=summary,
        )

    @classmethod
    def from_result(
        cls,
        result: KellyResult,
        breakdown: List[str],
        summary: Dict[str, str],
    ) -> "KellyComputeResponse":
        return cls(
            valid=True,
            p=result.p,
            b=result.b,
            q=result.q,
            f_star_raw=result.f_star_raw,
            f_star_clamped=result.f_star_clamped,
            k=result.k,
            f_applied_raw=result.f_applied_raw,
            f_applied=result.f_applied,
            stake=result.stake,
            growth=result.growth,
            advisory=result.advisory,
            breakdown=breakdown,
            summary=summary,
        )
