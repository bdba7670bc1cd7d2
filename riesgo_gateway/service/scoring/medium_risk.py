"""
Medium-Risk Scoring for the Riesgo Gateway classification engine.

Subjects in the MEDIO tier get an internal evaluation: a base score plus
five independent, additive adjustments, each one leaving a human-readable
motive. The clamped score then maps to APROBADO / REVISION / RECHAZADO.

Factors (in evaluation order, which is also the motive order):
- Worst BCRA debtor situation in the last 24 months
- Formal activity and its tenure
- Credit utilization (monthly commitment / total capacity)
- Debt-to-income (monthly commitment / estimated monthly income)
- Registered assets (vehicles, real estate)
"""

from typing import List, Optional, Tuple

from .models import (
    MediumRiskMetrics,
    MediumRiskStatus,
    MediumRiskVerdict,
    NormalizedSignals,
)
from .normalizer import clamp_finite
from .settings import ScoringSettings, scoring_settings

Adjustment = Tuple[int, Optional[str]]


def _percent(ratio: float) -> str:
    return f"{ratio * 100:.1f}%"


def safe_ratio(numerator: float, denominator: float) -> Optional[float]:
    """numerator / denominator, or None when the denominator is not positive.

    A tiny denominator can overflow the quotient; it saturates instead.
    """
    if denominator > 0:
        return clamp_finite(numerator / denominator)
    return None


def score_bcra_situation(situation: Optional[float]) -> Adjustment:
    """
    Adjustment for the worst BCRA situation.

    Situation 1 is a normal debtor, 2 a regularized delay, 3 and above are
    delinquent. Without data the factor is neutral.
    """
    if situation is None:
        return 0, "Sin información clara de situación BCRA (neutro)."
    if situation >= 3:
        return -30, "Registro de situación BCRA 3 o superior en los últimos 24 meses."
    if situation == 2:
        return 5, "Alguna situación 2 regularizada en BCRA."
    if situation == 1:
        return 15, "Historial BCRA en situación 1 (normal) últimos 24 meses."
    return 0, None


def score_formal_activity(
    has_activity: bool,
    tenure_months: float,
    settings: ScoringSettings = scoring_settings,
) -> Adjustment:
    """Adjustment for registered formal activity and its tenure in months."""
    if not has_activity:
        return -30, "No se detecta actividad formal registrable."
    if tenure_months >= settings.tenure_long_months:
        return 15, f"Actividad formal con antigüedad ≥ {settings.tenure_long_months:g} meses."
    if tenure_months >= settings.tenure_medium_months:
        return 5, (
            f"Actividad formal con antigüedad entre {settings.tenure_medium_months:g} "
            f"y {settings.tenure_long_months:g} meses."
        )
    return 0, f"Actividad formal con antigüedad < {settings.tenure_medium_months:g} meses."


def score_credit_usage(
    usage: Optional[float],
    compromiso_mensual: float,
    settings: ScoringSettings = scoring_settings,
) -> Adjustment:
    """
    Adjustment for credit utilization.

    A commitment without any informed capacity is penalized harder than
    critical utilization; no commitment and no capacity is neutral.
    """
    if usage is None:
        if compromiso_mensual > 0:
            return -25, "Compromiso mensual con capacidad crediticia total nula o no informada."
        return 0, "Sin deudas registradas y sin capacidad informada (neutro)."

    if usage <= settings.usage_low_threshold:
        return 15, f"Uso de capacidad crediticia bajo ({_percent(usage)})."
    elif usage <= settings.usage_moderate_threshold:
        return 5, f"Uso de capacidad crediticia moderado ({_percent(usage)})."
    elif usage <= settings.usage_high_threshold:
        return -10, f"Uso de capacidad crediticia alto ({_percent(usage)})."
    else:
        return -20, f"Uso de capacidad crediticia crítico ({_percent(usage)})."


def score_debt_to_income(
    dti: Optional[float],
    settings: ScoringSettings = scoring_settings,
) -> Adjustment:
    """Adjustment for the debt-to-income ratio; neutral without income data."""
    if dti is None:
        return 0, "Sin información de ingresos estimados (neutro)."

    if dti <= settings.dti_comfortable_threshold:
        return 15, f"Relación cuota/ingreso cómoda ({_percent(dti)} del ingreso)."
    elif dti <= settings.dti_moderate_threshold:
        return 5, f"Relación cuota/ingreso moderada ({_percent(dti)} del ingreso)."
    elif dti <= settings.dti_high_threshold:
        return -10, f"Relación cuota/ingreso elevada ({_percent(dti)} del ingreso)."
    else:
        return -20, f"Relación cuota/ingreso crítica ({_percent(dti)} del ingreso)."


def score_assets(has_vehicles: bool, has_real_estate: bool) -> List[Adjustment]:
    """Bonuses for registered vehicles and real estate."""
    adjustments = []
    if has_vehicles:
        adjustments.append((5, "Posee vehículos registrados a su nombre."))
    if has_real_estate:
        adjustments.append((10, "Posee inmuebles/domicilios registrados a su nombre."))
    return adjustments


def clamp_score(score: int) -> int:
    """Clamp a raw score into 0-100."""
    return max(0, min(100, score))


def status_for_score(
    score: int,
    settings: ScoringSettings = scoring_settings,
) -> MediumRiskStatus:
    """Map a clamped internal score to its verdict (lower bounds inclusive)."""
    if score >= settings.medium_approval_threshold:
        return MediumRiskStatus.APROBADO
    elif score >= settings.medium_review_threshold:
        return MediumRiskStatus.REVISION
    else:
        return MediumRiskStatus.RECHAZADO


def evaluate_medium_risk(
    signals: NormalizedSignals,
    settings: ScoringSettings = scoring_settings,
) -> MediumRiskVerdict:
    """
    Evaluate a MEDIO-tier subject.

    Args:
        signals: Normalized bureau signals
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        MediumRiskVerdict with the clamped score, verdict, motives and metrics
    """
    uso_capacidad = safe_ratio(signals.compromiso_mensual, signals.capacidad_total)
    dti = safe_ratio(signals.compromiso_mensual, signals.ingreso_mensual_estimado)

    adjustments = [
        score_bcra_situation(signals.situacion_bcra_peor_24m),
        score_formal_activity(
            signals.tiene_actividad_formal,
            signals.antiguedad_laboral_meses,
            settings,
        ),
        score_credit_usage(uso_capacidad, signals.compromiso_mensual, settings),
        score_debt_to_income(dti, settings),
        *score_assets(
            signals.tiene_vehiculos_registrados,
            signals.tiene_inmuebles_registrados,
        ),
    ]

    raw_score = settings.medium_base_score + sum(delta for delta, _ in adjustments)
    score = clamp_score(raw_score)

    return MediumRiskVerdict(
        estado=status_for_score(score, settings),
        score_interno=score,
        motivos=tuple(motivo for _, motivo in adjustments if motivo is not None),
        metricas=MediumRiskMetrics(
            capacidad_total=signals.capacidad_total,
            compromiso_mensual=signals.compromiso_mensual,
            ingreso_mensual_estimado=signals.ingreso_mensual_estimado,
            antiguedad_meses=signals.antiguedad_laboral_meses,
            situacion_bcra_peor_24m=signals.situacion_bcra_peor_24m,
            tiene_actividad_formal=signals.tiene_actividad_formal,
            tiene_vehiculos_registrados=signals.tiene_vehiculos_registrados,
            tiene_inmuebles_registrados=signals.tiene_inmuebles_registrados,
            uso_capacidad=uso_capacidad,
            dti=dti,
        ),
    )
