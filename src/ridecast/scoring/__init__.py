"""Rule-based ride suitability scoring."""

from ridecast.scoring.suitability import (
    BucketChain,
    Penalty,
    Rung,
    SUITABILITY_RULES,
    SuitabilityBand,
    SuitabilityBreakdown,
    calc_suitability,
    daily_from_current,
    explain_suitability,
    score_current,
    suitability_band,
)

__all__ = [
    "BucketChain",
    "Penalty",
    "Rung",
    "SUITABILITY_RULES",
    "SuitabilityBand",
    "SuitabilityBreakdown",
    "calc_suitability",
    "daily_from_current",
    "explain_suitability",
    "score_current",
    "suitability_band",
]
