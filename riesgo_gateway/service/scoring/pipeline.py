"""
Classification Pipeline for the Riesgo Gateway classification engine.

This module orchestrates the complete analysis of one bureau report:
1. Extract the normalized signals (once)
2. Classify the risk tier (always)
3. Run the medium-risk evaluation (only for tier MEDIO)
4. Evaluate the Situación 5 offer (always; it has its own scoring gate)
5. Build and return the ReportAnalysis

This is the main entry point for the scoring module.
"""

from datetime import date
from typing import Any, Optional

from .extractor import extract_signals
from .medium_risk import evaluate_medium_risk
from .models import ReportAnalysis, RiskTier
from .settings import ScoringSettings, scoring_settings
from .situation5 import calculate_situation5_offer
from .tier import classify_tier


def analyze_report(
    payload: Any,
    today: Optional[date] = None,
    settings: ScoringSettings = scoring_settings,
    situation5_logger: Any = None,
) -> ReportAnalysis:
    """
    Analyze a bureau report.

    The whole pipeline is pure and synchronous: the same report and
    evaluation date always produce the same analysis.

    Args:
        payload: Bare `informe` object, full bureau envelope, or BureauReport
        today: Evaluation date for ongoing tax registrations
        settings: Scoring settings (uses defaults if not provided)
        situation5_logger: Optional structlog logger for the Situación 5 trace

    Returns:
        ReportAnalysis with tier, medium-risk verdict and Situación 5 offer
    """
    signals = extract_signals(payload)
    riesgo = classify_tier(signals.scoring_bureau, settings)

    riesgo_interno = None
    if riesgo == RiskTier.MEDIO:
        riesgo_interno = evaluate_medium_risk(signals, settings)

    situacion5 = calculate_situation5_offer(
        signals,
        today=today,
        settings=settings,
        logger=situation5_logger,
    )

    return ReportAnalysis(
        riesgo=riesgo,
        # Zero scoring is reported as null
        scoring_api=signals.scoring_bureau or None,
        signals=signals,
        riesgo_interno=riesgo_interno,
        situacion5=situacion5,
    )


def explain_analysis(analysis: ReportAnalysis) -> str:
    """
    Generate a human-readable explanation of an analysis.

    Used by support staff and in debug logs.

    Args:
        analysis: The analysis to explain

    Returns:
        Human-readable explanation string
    """
    lines = [
        f"Riesgo: {analysis.riesgo.value}",
        f"Scoring bureau: {analysis.scoring_api if analysis.scoring_api is not None else 'sin dato'}",
    ]

    verdict = analysis.riesgo_interno
    if verdict is not None:
        lines.append(f"Evaluación interna: {verdict.estado.value} ({verdict.score_interno}/100)")
        lines.extend(f"  - {motivo}" for motivo in verdict.motivos)

    offer = analysis.situacion5
    if offer is None:
        lines.append("Situación 5: no aplica")
    else:
        lines.append(
            f"Situación 5: ${offer.monto:,} en {offer.cuotas} cuotas "
            f"({offer.porcentaje_final:.0%} del crédito disponible)"
        )

    return "\n".join(lines)
