"""
Report Field Extraction for the Riesgo Gateway classification engine.

This module turns a BureauReport into NormalizedSignals, the flat record
every scorer consumes. Each signal is documented with:
- Where it comes from in the bureau report
- How it is coerced
- The neutral default used when the value is missing or malformed

Fields that can come from more than one place are resolved through an
explicit, ordered chain of named accessors (first non-empty value wins), so
the precedence can be inspected and tested on its own.
"""

from typing import Any, Callable, Optional, Sequence, Tuple, TypeVar

from .models import NormalizedSignals, TaxPeriod
from .normalizer import clamp_finite, parse_nse_code, parse_strict_date, to_number
from .report import BureauReport

T = TypeVar("T")

Accessor = Tuple[str, Callable[[BureauReport], Optional[T]]]

DEFAULT_NOMBRE = "Sin nombre"
FORMAL_ACTIVITY_FLAGS = ("empleado", "monotributista", "autonomo", "empleador")


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


NOMBRE_COMPLETO_ACCESSORS: Sequence[Accessor[str]] = (
    ("identidad.nombre_completo", lambda r: _text(r.identidad.nombre_completo)),
    ("soaAfipA4Online.nombreCompleto", lambda r: _text(r.soa_afip_a4_online.nombre_completo)),
    ("condicionTributaria.nombre", lambda r: _text(r.condicion_tributaria.nombre)),
)


def resolve_field(
    report: BureauReport,
    accessors: Sequence[Accessor[T]],
) -> Tuple[Optional[T], Optional[str]]:
    """
    Resolve a field through its fallback chain.

    Args:
        report: The bureau report
        accessors: Ordered (name, accessor) pairs

    Returns:
        (value, accessor name) for the first accessor returning a value,
        (None, None) if none does
    """
    for name, accessor in accessors:
        value = accessor(report)
        if value is not None:
            return value, name
    return None, None


def first_present(report: BureauReport, accessors: Sequence[Accessor[T]]) -> Optional[T]:
    """First non-None value of a fallback chain."""
    value, _ = resolve_field(report, accessors)
    return value


def _positive_or_zero(value: Optional[float]) -> float:
    return value if value is not None and value > 0 else 0


def worst_bcra_situation(report: BureauReport) -> Optional[float]:
    """
    Worst (highest) BCRA debtor situation across the historical summary.

    Periods whose situation is not numeric are ignored.

    Returns:
        The worst situation, or None if no period carries one
    """
    situations = [
        situation
        for situation in (
            to_number(period.peor_situacion)
            for period in report.bcra.resumen_historico.values()
        )
        if situation is not None
    ]
    return max(situations) if situations else None


def has_formal_activity(report: BureauReport) -> bool:
    """True if any registered activity flag is "SI"."""
    actividad = report.scoring_informe.actividad
    return any(getattr(actividad, flag) == "SI" for flag in FORMAL_ACTIVITY_FLAGS)


def tax_periods(report: BureauReport) -> Tuple[TaxPeriod, ...]:
    """
    Parse the tax-registration history into periods.

    Records without a parseable start date are skipped. A missing or
    malformed end date marks the period as ongoing.
    """
    periods = []
    for record in report.condicion_tributaria_historial:
        start = parse_strict_date(record.fecha_desde)
        if start is None:
            continue
        periods.append(TaxPeriod(start=start, end=parse_strict_date(record.fecha_hasta)))
    return tuple(periods)


def extract_signals(payload: Any) -> NormalizedSignals:
    """
    Extract the normalized signals from a bureau report.

    Args:
        payload: A BureauReport, the bare `informe` JSON object, or the full
            bureau response envelope

    Returns:
        NormalizedSignals with every field resolved or defaulted
    """
    report = BureauReport.from_payload(payload)
    scoring = report.scoring_informe

    credito = to_number(scoring.credito)
    deuda = to_number(scoring.deuda)
    deuda_positiva = _positive_or_zero(deuda)

    monto_anual = to_number(report.condicion_tributaria.monto_anual)
    anios_inscripcion = _positive_or_zero(to_number(report.identidad.anios_inscripcion))

    return NormalizedSignals(
        nombre_completo=first_present(report, NOMBRE_COMPLETO_ACCESSORS) or DEFAULT_NOMBRE,
        scoring_bureau=to_number(scoring.scoring),
        capacidad_total=_positive_or_zero(credito),
        compromiso_mensual=deuda_positiva / 12,
        ingreso_mensual_estimado=monto_anual / 12 if monto_anual is not None else 0,
        antiguedad_laboral_meses=clamp_finite(anios_inscripcion * 12),
        situacion_bcra_peor_24m=worst_bcra_situation(report),
        tiene_actividad_formal=has_formal_activity(report),
        tiene_vehiculos_registrados=len(report.rodados) > 0,
        tiene_inmuebles_registrados=len(report.inmuebles) > 0,
        nse_personal=parse_nse_code(report.nivel_socioeconomico.nse_personal),
        credito_informado=credito,
        deuda_informada=deuda,
        periodos_tributarios=tax_periods(report),
    )
