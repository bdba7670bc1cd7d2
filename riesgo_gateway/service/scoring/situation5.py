"""
Situación 5 Offer Calculation for the Riesgo Gateway classification engine.

Subjects whose bureau scoring is exactly 5 may qualify for a 6-installment
loan offer priced as a share of their available credit. This path is
independent of the tier classifier: a scoring of 5 is tier BAJO and is still
evaluated here.

Eligibility gates (first failure means "not applicable", returned as None):
1. Bureau scoring == 5
2. Socioeconomic level parses and ranks at or above C3
3. Both reported credit and debt are numeric

Pricing:
    rate  = 0.35
          + 0.10 if merged tax-registration tenure >= 5 years
          + 0.20 if any registered vehicle or real estate
          + socioeconomic adjustment (C3 -0.10 ... A +0.10)
    monto = floor(available credit * rate)
    monto < 300,000   -> not applicable
    monto > 2,000,000 -> capped at 2,000,000

Rates are summed as exact decimals so boundary amounts do not drift by one
peso through binary floating point.
"""

import math
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, Optional

import structlog

from .models import NormalizedSignals, Situation5Debug, Situation5Offer, TaxPeriod
from .normalizer import clamp_finite, days_between, merge_intervals, nse_rank
from .settings import ScoringSettings, scoring_settings

DAYS_PER_YEAR = 365.25


def _drop_event(logger: Any, method_name: str, event_dict: dict) -> dict:
    raise structlog.DropEvent


def null_logger() -> Any:
    """A structlog logger that discards every event."""
    return structlog.wrap_logger(structlog.ReturnLogger(), processors=[_drop_event])


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def calculate_tenure_years(
    periods: Iterable[TaxPeriod],
    today: Optional[date] = None,
) -> Optional[float]:
    """
    Employment tenure in years from tax-registration periods.

    Algorithm:
        1. Close ongoing periods at the evaluation date
        2. Discard periods that end before they start
        3. Merge overlapping or touching periods so no day counts twice
        4. Sum elapsed days and divide by 365.25

    Args:
        periods: Tax-registration periods
        today: Evaluation date (defaults to today, UTC)

    Returns:
        Tenure in years, or None if there is no valid period
    """
    today = today or utc_today()

    intervals = []
    for period in periods:
        end = period.end or today
        if end < period.start:
            continue
        intervals.append((period.start, end))

    if not intervals:
        return None

    total_days = sum(days_between(start, end) for start, end in merge_intervals(intervals))
    return total_days / DAYS_PER_YEAR


def available_credit(signals: NormalizedSignals) -> Optional[float]:
    """
    Reported credit minus reported debt, floored at zero; None if either is missing.

    A difference that overflows saturates at the largest finite float, so
    the offer is capped instead of failing.
    """
    if signals.credito_informado is None or signals.deuda_informada is None:
        return None
    return clamp_finite(max(0, signals.credito_informado - signals.deuda_informada))


def calculate_situation5_offer(
    signals: NormalizedSignals,
    today: Optional[date] = None,
    settings: ScoringSettings = scoring_settings,
    logger: Any = None,
) -> Optional[Situation5Offer]:
    """
    Evaluate eligibility and compute the Situación 5 offer.

    Args:
        signals: Normalized bureau signals
        today: Evaluation date for ongoing registrations (defaults to today, UTC)
        settings: Scoring settings (uses defaults if not provided)
        logger: structlog logger for the calculation trace (silent by default)

    Returns:
        The offer, or None when the subject is not eligible
    """
    log = logger if logger is not None else null_logger()
    log.debug(
        "situacion5_started",
        scoring=signals.scoring_bureau,
        nse=signals.nse_personal,
    )

    if signals.scoring_bureau != settings.situacion5_scoring:
        log.debug("situacion5_not_applicable", reason="scoring", scoring=signals.scoring_bureau)
        return None

    nse = signals.nse_personal
    rank = nse_rank(nse)
    if rank is None:
        log.debug("situacion5_not_applicable", reason="nse_unparseable")
        return None
    if rank < nse_rank(settings.situacion5_min_nse):
        log.debug("situacion5_not_applicable", reason="nse_below_minimum", nse=nse, rank=rank)
        return None

    disponible = available_credit(signals)
    if disponible is None:
        log.debug(
            "situacion5_not_applicable",
            reason="credit_unavailable",
            credito=signals.credito_informado,
            deuda=signals.deuda_informada,
        )
        return None

    rate = settings.situacion5_base_rate

    antiguedad_anios = calculate_tenure_years(signals.periodos_tributarios, today)
    tenure_bonus = (
        antiguedad_anios is not None
        and antiguedad_anios >= settings.situacion5_tenure_years
    )
    if tenure_bonus:
        rate += settings.situacion5_tenure_bonus

    if signals.tiene_bien_registrable:
        rate += settings.situacion5_asset_bonus

    nse_adjustment = settings.situacion5_nse_adjustments.get(nse, Decimal(0))
    rate += nse_adjustment

    monto = math.floor(Decimal(str(disponible)) * rate)

    log.debug(
        "situacion5_calculated",
        nse=nse,
        rank=rank,
        credito_disponible=disponible,
        rate=float(rate),
        nse_adjustment=float(nse_adjustment),
        antiguedad_anios=antiguedad_anios,
        tenure_bonus=tenure_bonus,
        tiene_bien_registrable=signals.tiene_bien_registrable,
        monto_before_limits=monto,
    )

    if monto < settings.situacion5_min_amount:
        log.debug("situacion5_not_applicable", reason="below_minimum", monto=monto)
        return None

    if monto > settings.situacion5_max_amount:
        log.debug("situacion5_capped", monto_before_cap=monto)
        monto = settings.situacion5_max_amount

    log.debug("situacion5_offer", monto=monto)

    return Situation5Offer(
        monto=monto,
        cuotas=settings.situacion5_installments,
        tasa_label=settings.situacion5_rate_label,
        porcentaje_final=float(rate),
        debug=Situation5Debug(
            nse=nse,
            credito_disponible=disponible,
            antiguedad_laboral_anios=antiguedad_anios,
            tiene_bien_registrable=signals.tiene_bien_registrable,
        ),
    )
