"""Consulta-related Pydantic schemas (camelCase on the wire)."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from riesgo_gateway.application.dto import ConsultaItemResult, ConsultaResponse


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConsultaRequestSchema(CamelModel):
    """Schema for POST /api/infoexperto request body.

    Fields are validated by the document rules, so missing or malformed
    values produce bureau error codes instead of a 422.
    """

    tipo_documento: Any = Field(
        None,
        description="Document type: dni, cuit or cuil",
        examples=["cuit"],
    )
    numero: Any = Field(
        None,
        description="Document number; separators are ignored",
        examples=["20-12345678-9"],
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [{"tipoDocumento": "cuit", "numero": "20-12345678-9"}]
        },
    )


class ConsultaMultipleRequestSchema(CamelModel):
    """Schema for POST /api/infoexperto/multiple request body."""

    tipo_documento: Any = Field(
        None,
        description="Document type shared by every number",
        examples=["dni"],
    )
    numeros: Any = Field(
        None,
        description="Document numbers, queried in order",
        examples=[["12345678", "23456789"]],
    )


class MediumRiskMetricsSchema(CamelModel):
    capacidad_total: float
    compromiso_mensual: float
    ingreso_mensual_estimado: float
    antiguedad_meses: float
    situacion_bcra_peor_24m: Optional[float] = Field(None, alias="situacionBcraPeor24m")
    tiene_actividad_formal: bool
    tiene_vehiculos_registrados: bool
    tiene_inmuebles_registrados: bool
    uso_capacidad: Optional[float] = None
    dti: Optional[float] = None


class MediumRiskSchema(CamelModel):
    """Internal evaluation of a MEDIO-tier subject."""

    estado: str = Field(
        ...,
        description="APROBADO, REVISION or RECHAZADO",
        examples=["REVISION"],
    )
    score_interno: int = Field(
        ...,
        ge=0,
        le=100,
        description="Internal score (0-100, higher is better)",
        examples=[65],
    )
    motivos: List[str] = Field(
        ...,
        description="Reasons, in evaluation order",
    )
    metricas: MediumRiskMetricsSchema


class Situation5DebugSchema(CamelModel):
    nse: str
    credito_disponible: float
    antiguedad_laboral_anios: Optional[float] = None
    tiene_bien_registrable: bool


class Situation5Schema(CamelModel):
    """Loan offer for subjects with bureau scoring 5."""

    monto: int = Field(..., description="Offered amount in pesos", examples=[450000])
    cuotas: int = Field(..., description="Number of installments", examples=[6])
    tasa_label: str = Field(..., examples=["+75% en 6 cuotas"])
    porcentaje_final: float = Field(
        ...,
        description="Share of available credit that produced the amount",
        examples=[0.45],
    )
    debug: Situation5DebugSchema


class ConsultaResponseSchema(CamelModel):
    """Schema for POST /api/infoexperto response body."""

    riesgo: str = Field(..., description="ALTO, MEDIO or BAJO", examples=["MEDIO"])
    scoring_api: Optional[float] = Field(
        None,
        description="Bureau scoring (null when absent or zero)",
        examples=[3],
    )
    riesgo_interno: Optional[MediumRiskSchema] = Field(
        None,
        description="Internal evaluation, only for riesgo MEDIO",
    )
    situacion5: Optional[Situation5Schema] = Field(
        None,
        description="Situación 5 offer, when applicable",
    )
    nombre_completo: str = Field(..., examples=["PEREZ JUAN"])
    numero: str = Field(..., description="Document digits", examples=["20123456789"])
    tipo_documento: str = Field(..., examples=["cuit"])
    fecha_informe: Optional[str] = Field(None, description="Report date from the bureau")
    informe_original: Any = Field(
        None,
        description="Raw bureau report",
    )

    @classmethod
    def from_dto(cls, dto: ConsultaResponse) -> "ConsultaResponseSchema":
        return cls.model_validate(_consulta_fields(dto))


class ConsultaItemSchema(CamelModel):
    """One entry of a batch response; classification fields are null on failure."""

    ok: bool
    numero_original: Any = None
    error: Optional[str] = None
    codigo: Optional[int] = None
    riesgo: Optional[str] = None
    scoring_api: Optional[float] = None
    riesgo_interno: Optional[MediumRiskSchema] = None
    situacion5: Optional[Situation5Schema] = None
    nombre_completo: Optional[str] = None
    numero: Optional[str] = None
    tipo_documento: Optional[str] = None
    fecha_informe: Optional[str] = None
    informe_original: Any = None

    @classmethod
    def from_dto(cls, dto: ConsultaItemResult) -> "ConsultaItemSchema":
        fields = _consulta_fields(dto.consulta) if dto.consulta else {}
        return cls.model_validate(
            {
                "ok": dto.ok,
                "numero_original": dto.numero_original,
                "error": dto.error,
                "codigo": dto.codigo,
                **fields,
            }
        )


class ConsultaMultipleResponseSchema(BaseModel):
    """Schema for POST /api/infoexperto/multiple response body."""

    resultados: List[ConsultaItemSchema]


def _consulta_fields(dto: ConsultaResponse) -> Dict[str, Any]:
    """Flatten a ConsultaResponse DTO into schema input (snake_case keys)."""
    riesgo_interno = dto.riesgo_interno
    situacion5 = dto.situacion5
    return {
        "riesgo": dto.riesgo,
        "scoring_api": dto.scoring_api,
        "riesgo_interno": (
            {
                "estado": riesgo_interno.estado,
                "score_interno": riesgo_interno.score_interno,
                "motivos": riesgo_interno.motivos,
                "metricas": vars(riesgo_interno.metricas),
            }
            if riesgo_interno
            else None
        ),
        "situacion5": (
            {
                "monto": situacion5.monto,
                "cuotas": situacion5.cuotas,
                "tasa_label": situacion5.tasa_label,
                "porcentaje_final": situacion5.porcentaje_final,
                "debug": vars(situacion5.debug),
            }
            if situacion5
            else None
        ),
        "nombre_completo": dto.nombre_completo,
        "numero": dto.numero,
        "tipo_documento": dto.tipo_documento,
        "fecha_informe": dto.fecha_informe,
        "informe_original": dto.informe_original,
    }
