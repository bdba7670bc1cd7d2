"""
Tier Classification for the Riesgo Gateway classification engine.

Maps the bureau scoring onto the coarse ALTO / MEDIO / BAJO risk tier that
drives the rest of the pipeline.
"""

from typing import Any

from .models import RiskTier
from .normalizer import to_number
from .settings import ScoringSettings, scoring_settings


def classify_tier(
    scoring: Any,
    settings: ScoringSettings = scoring_settings,
) -> RiskTier:
    """
    Classify a bureau scoring into a risk tier.

    Both boundaries are inclusive: a scoring of exactly 2 is ALTO and a
    scoring of exactly 4 is MEDIO.

    A missing or unparseable scoring is MEDIO, which sends the subject to the
    internal evaluation instead of silently approving or rejecting it.

    Args:
        scoring: Bureau scoring, as a number or a numeric string
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        The risk tier
    """
    value = to_number(scoring)
    if value is None:
        return RiskTier.MEDIO

    if value <= settings.tier_alto_max_scoring:
        return RiskTier.ALTO
    elif value <= settings.tier_medio_max_scoring:
        return RiskTier.MEDIO
    else:
        return RiskTier.BAJO
