"""
Risk Classification Module for the Riesgo Gateway
"""

from .models import (
    RiskTier,
    MediumRiskStatus,
    TaxPeriod,
    NormalizedSignals,
    MediumRiskMetrics,
    MediumRiskVerdict,
    Situation5Debug,
    Situation5Offer,
    ReportAnalysis,
)
from .settings import ScoringSettings, scoring_settings
from .normalizer import (
    NSE_RANK,
    to_number,
    parse_nse_code,
    parse_strict_date,
    merge_intervals,
)
from .report import BureauReport
from .extractor import extract_signals, first_present, resolve_field
from .tier import classify_tier
from .medium_risk import evaluate_medium_risk
from .situation5 import calculate_situation5_offer, calculate_tenure_years
from .pipeline import analyze_report, explain_analysis

__all__ = [
    # Settings
    "ScoringSettings",
    "scoring_settings",
    # Models
    "RiskTier",
    "MediumRiskStatus",
    "TaxPeriod",
    "NormalizedSignals",
    "MediumRiskMetrics",
    "MediumRiskVerdict",
    "Situation5Debug",
    "Situation5Offer",
    "ReportAnalysis",
    # Normalizer
    "NSE_RANK",
    "to_number",
    "parse_nse_code",
    "parse_strict_date",
    "merge_intervals",
    # Extraction
    "BureauReport",
    "extract_signals",
    "first_present",
    "resolve_field",
    # Tier
    "classify_tier",
    # Medium Risk
    "evaluate_medium_risk",
    # Situación 5
    "calculate_situation5_offer",
    "calculate_tenure_years",
    # Pipeline
    "analyze_report",
    "explain_analysis",
]
