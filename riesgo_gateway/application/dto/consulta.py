"""Data transfer objects for bureau report queries."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from riesgo_gateway.domain.entities import Document
from riesgo_gateway.service.scoring import (
    MediumRiskVerdict,
    ReportAnalysis,
    Situation5Offer,
)


@dataclass(frozen=True)
class MediumRiskMetricsDTO:
    """Inputs and ratios behind a medium-risk verdict."""

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
class MediumRiskDTO:
    """Internal evaluation included for MEDIO-tier subjects."""

    estado: str
    score_interno: int
    motivos: List[str]
    metricas: MediumRiskMetricsDTO

    @classmethod
    def from_verdict(cls, verdict: MediumRiskVerdict) -> "MediumRiskDTO":
        m = verdict.metricas
        return cls(
            estado=verdict.estado.value,
            score_interno=verdict.score_interno,
            motivos=list(verdict.motivos),
            metricas=MediumRiskMetricsDTO(
                capacidad_total=m.capacidad_total,
                compromiso_mensual=m.compromiso_mensual,
                ingreso_mensual_estimado=m.ingreso_mensual_estimado,
                antiguedad_meses=m.antiguedad_meses,
                situacion_bcra_peor_24m=m.situacion_bcra_peor_24m,
                tiene_actividad_formal=m.tiene_actividad_formal,
                tiene_vehiculos_registrados=m.tiene_vehiculos_registrados,
                tiene_inmuebles_registrados=m.tiene_inmuebles_registrados,
                uso_capacidad=m.uso_capacidad,
                dti=m.dti,
            ),
        )


@dataclass(frozen=True)
class Situation5DebugDTO:
    nse: str
    credito_disponible: float
    antiguedad_laboral_anios: Optional[float]
    tiene_bien_registrable: bool


@dataclass(frozen=True)
class Situation5DTO:
    """Situación 5 offer."""

    monto: int
    cuotas: int
    tasa_label: str
    porcentaje_final: float
    debug: Situation5DebugDTO

    @classmethod
    def from_offer(cls, offer: Situation5Offer) -> "Situation5DTO":
        return cls(
            monto=offer.monto,
            cuotas=offer.cuotas,
            tasa_label=offer.tasa_label,
            porcentaje_final=offer.porcentaje_final,
            debug=Situation5DebugDTO(
                nse=offer.debug.nse,
                credito_disponible=offer.debug.credito_disponible,
                antiguedad_laboral_anios=offer.debug.antiguedad_laboral_anios,
                tiene_bien_registrable=offer.debug.tiene_bien_registrable,
            ),
        )


@dataclass(frozen=True)
class ConsultaResponse:
    """Classification of one bureau report."""

    riesgo: str
    scoring_api: Optional[float]
    riesgo_interno: Optional[MediumRiskDTO]
    situacion5: Optional[Situation5DTO]
    nombre_completo: str
    numero: str
    tipo_documento: str
    fecha_informe: Optional[str]
    informe_original: Any

    @classmethod
    def from_analysis(
        cls,
        analysis: ReportAnalysis,
        document: Document,
        envelope: Dict[str, Any],
    ) -> "ConsultaResponse":
        data = envelope.get("data") or {}
        return cls(
            riesgo=analysis.riesgo.value,
            scoring_api=analysis.scoring_api,
            riesgo_interno=(
                MediumRiskDTO.from_verdict(analysis.riesgo_interno)
                if analysis.riesgo_interno
                else None
            ),
            situacion5=(
                Situation5DTO.from_offer(analysis.situacion5)
                if analysis.situacion5
                else None
            ),
            nombre_completo=analysis.signals.nombre_completo,
            numero=document.numero,
            tipo_documento=document.tipo.value,
            fecha_informe=str(data["fecha"]) if data.get("fecha") else None,
            informe_original=data.get("informe"),
        )


@dataclass(frozen=True)
class ConsultaItemResult:
    """Outcome of one document in a batch query."""

    ok: bool
    numero_original: Any
    consulta: Optional[ConsultaResponse] = None
    error: Optional[str] = None
    codigo: Optional[int] = None


@dataclass(frozen=True)
class ConsultaMultipleResponse:
    """Results of a batch query, in request order."""

    resultados: List[ConsultaItemResult]
