"""
Tolerant schema for InfoExperto bureau reports.

The bureau JSON has no fixed schema: sections go missing, arrays come back
as null and numbers arrive as locale-formatted strings. This module is the
single place that navigates that shape. Every field is optional, sections
that are not JSON objects collapse to empty sections, list fields that are
not lists collapse to empty lists, and leaf values are kept untouched for the
normalizer to coerce. Building a BureauReport never raises.
"""

from collections.abc import Mapping
from typing import Any, Dict, List

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = structlog.get_logger(__name__)


class ReportSection(BaseModel):
    """Base for every report section: unknown keys ignored, wrong shapes emptied."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def coerce_to_mapping(cls, data: Any) -> Any:
        if isinstance(data, (Mapping, cls)):
            return data
        return {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


class Identidad(ReportSection):
    nombre_completo: Any = None
    anios_inscripcion: Any = None


class Actividad(ReportSection):
    empleado: Any = None
    monotributista: Any = None
    autonomo: Any = None
    empleador: Any = None


class ScoringInforme(ReportSection):
    scoring: Any = None
    credito: Any = None
    deuda: Any = None
    actividad: Actividad = Field(default_factory=Actividad)


class CondicionTributaria(ReportSection):
    monto_anual: Any = None
    nombre: Any = None


class PeriodoTributario(ReportSection):
    fecha_desde: Any = None
    fecha_hasta: Any = None


class PeriodoBcra(ReportSection):
    peor_situacion: Any = None


class Bcra(ReportSection):
    resumen_historico: Dict[str, PeriodoBcra] = Field(default_factory=dict)

    @field_validator("resumen_historico", mode="before")
    @classmethod
    def coerce_periods(cls, value: Any) -> Dict[str, Any]:
        """Accept the usual period-keyed object, or a plain array of periods."""
        if isinstance(value, Mapping):
            return {str(key): entry for key, entry in value.items()}
        if isinstance(value, list):
            return {str(index): entry for index, entry in enumerate(value)}
        return {}


class NivelSocioeconomico(ReportSection):
    nse_personal: Any = None


class SoaAfipA4Online(ReportSection):
    nombre_completo: Any = Field(default=None, alias="nombreCompleto")


class BureauReport(ReportSection):
    """The `informe` object of an InfoExperto response."""

    identidad: Identidad = Field(default_factory=Identidad)
    scoring_informe: ScoringInforme = Field(
        default_factory=ScoringInforme, alias="scoringInforme"
    )
    condicion_tributaria: CondicionTributaria = Field(
        default_factory=CondicionTributaria, alias="condicionTributaria"
    )
    condicion_tributaria_historial: List[PeriodoTributario] = Field(
        default_factory=list, alias="condicionTributariaHistorial"
    )
    bcra: Bcra = Field(default_factory=Bcra)
    nivel_socioeconomico: NivelSocioeconomico = Field(
        default_factory=NivelSocioeconomico, alias="nivelSocioeconomico"
    )
    soa_afip_a4_online: SoaAfipA4Online = Field(
        default_factory=SoaAfipA4Online, alias="soaAfipA4Online"
    )
    rodados: List[Any] = Field(default_factory=list)
    inmuebles: List[Any] = Field(default_factory=list)

    @field_validator(
        "condicion_tributaria_historial", "rodados", "inmuebles", mode="before"
    )
    @classmethod
    def coerce_list(cls, value: Any) -> List[Any]:
        return _as_list(value)

    @classmethod
    def from_payload(cls, payload: Any) -> "BureauReport":
        """
        Build a report from whatever the bureau returned.

        Accepts the bare `informe` object or the full response envelope
        `{"data": {"informe": {...}}}`. Anything else yields an empty report.

        Args:
            payload: Decoded JSON value

        Returns:
            A BureauReport, empty when the payload carries no report
        """
        if isinstance(payload, cls):
            return payload
        informe = unwrap_informe(payload)
        try:
            return cls.model_validate(informe)
        except ValidationError as e:
            logger.warning("bureau_report_unreadable", error_count=e.error_count())
            return cls()


def unwrap_informe(payload: Any) -> Any:
    """Return the `informe` object from a response envelope, or the payload itself."""
    if isinstance(payload, Mapping):
        data = payload.get("data")
        if isinstance(data, Mapping) and "informe" in data:
            return data.get("informe")
    return payload
