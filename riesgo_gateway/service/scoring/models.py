"""
Data models for risk classification.

These models represent the values flowing through the scoring pipeline,
from the normalized bureau signals to the tier, the medium-risk verdict and
the Situación 5 offer. All of them are immutable and request-scoped.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple


class RiskTier(str, Enum):
    """Coarse risk bucket derived from the bureau scoring."""
    ALTO = "ALTO"
    MEDIO = "MEDIO"
    BAJO = "BAJO"


class MediumRiskStatus(str, Enum):
    """Verdict of the medium-risk internal score."""
    APROBADO = "APROBADO"
    REVISION = "REVISION"
    RECHAZADO = "RECHAZADO"


@dataclass(frozen=True)
class TaxPeriod:
    """
    A historical tax-registration period.

    Attributes:
        start: Registration start date
        end: Registration end date, None while the registration is ongoing
    """
    start: date
    end: Optional[date] = None


@dataclass(frozen=True)
class NormalizedSignals:
    """
    Flat record of everything the scorers read from a bureau report.

    Created once per report by the extractor; the tier classifier, the
    medium-risk scorer and the Situación 5 calculator never look at the raw
    JSON.

    Attributes:
        nombre_completo: Subject name, first non-empty of the fallback chain
        scoring_bureau: Bureau scoring (None if absent or unparseable)
        capacidad_total: Bureau credit capacity (0 if absent/non-positive)
        compromiso_mensual: Bureau debt / 12 (0 if absent/non-positive)
        ingreso_mensual_estimado: Annual declared amount / 12 (0 if absent)
        antiguedad_laboral_meses: Years registered * 12 (0 if absent)
        situacion_bcra_peor_24m: Worst BCRA situation in the historical
            summary (None without history)
        tiene_actividad_formal: Registered as employee, monotributista,
            autonomo or employer
        tiene_vehiculos_registrados: At least one registered vehicle
        tiene_inmuebles_registrados: At least one registered property
        nse_personal: Parsed socioeconomic code (None if unrecognized)
        credito_informado: Bureau credit as reported (may be zero/negative)
        deuda_informada: Bureau debt as reported (may be zero/negative)
        periodos_tributarios: Parseable tax-registration periods
    """
    nombre_completo: str = "Sin nombre"
    scoring_bureau: Optional[float] = None
    capacidad_total: float = 0
    compromiso_mensual: float = 0
    ingreso_mensual_estimado: float = 0
    antiguedad_laboral_meses: float = 0
    situacion_bcra_peor_24m: Optional[float] = None
    tiene_actividad_formal: bool = False
    tiene_vehiculos_registrados: bool = False
    tiene_inmuebles_registrados: bool = False
    nse_personal: Optional[str] = None
    credito_informado: Optional[float] = None
    deuda_informada: Optional[float] = None
    periodos_tributarios: Tuple[TaxPeriod, ...] = ()

    @property
    def tiene_bien_registrable(self) -> bool:
        return self.tiene_vehiculos_registrados or self.tiene_inmuebles_registrados


@dataclass(frozen=True)
class MediumRiskMetrics:
    """Snapshot of the inputs and derived ratios behind a medium-risk verdict."""
    capacidad_total: float
    compromiso_mensual: float
    ingreso_mensual_estimado: float
    antiguedad_meses: float
    situacion_bcra_peor_24m: Optional[float]
    tiene_actividad_formal: bool
    tiene_vehiculos_registrados: bool
    tiene_inmuebles_registrados: bool
    uso_capacidad: Optional[float]
    dti: Optional[float]


@dataclass(frozen=True)
class MediumRiskVerdict:
    """
    Internal evaluation of a MEDIO-tier subject.

    Attributes:
        estado: Step function of the clamped score
        score_interno: Internal score, always within 0-100
        motivos: Human-readable reasons, in evaluation order
        metricas: Inputs and ratios used for the evaluation
    """
    estado: MediumRiskStatus
    score_interno: int
    motivos: Tuple[str, ...]
    metricas: MediumRiskMetrics


@dataclass(frozen=True)
class Situation5Debug:
    """Intermediate values of a Situación 5 computation."""
    nse: str
    credito_disponible: float
    antiguedad_laboral_anios: Optional[float]
    tiene_bien_registrable: bool


@dataclass(frozen=True)
class Situation5Offer:
    """
    Loan offer for subjects with bureau scoring 5.

    Attributes:
        monto: Offered amount in pesos, floored, within [min, cap]
        cuotas: Number of installments
        tasa_label: Pricing label shown with the offer
        porcentaje_final: Share of available credit that produced the amount
        debug: Intermediate values for auditing
    """
    monto: int
    cuotas: int
    tasa_label: str
    porcentaje_final: float
    debug: Situation5Debug


@dataclass(frozen=True)
class ReportAnalysis:
    """Everything the pipeline derives from one bureau report."""
    riesgo: RiskTier
    scoring_api: Optional[float]
    signals: NormalizedSignals
    riesgo_interno: Optional[MediumRiskVerdict] = None
    situacion5: Optional[Situation5Offer] = None
