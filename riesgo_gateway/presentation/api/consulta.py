"""Bureau report query endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from riesgo_gateway.application.services import ConsultaService
from riesgo_gateway.core.dependencies import get_consulta_service
from riesgo_gateway.domain.entities import Document
from riesgo_gateway.presentation.schemas import (
    ConsultaRequestSchema,
    ConsultaResponseSchema,
    ConsultaMultipleRequestSchema,
    ConsultaMultipleResponseSchema,
    ConsultaItemSchema,
    ErrorResponseSchema,
)

consulta_router = APIRouter(
    prefix="/infoexperto",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid document or no report"},
        500: {"model": ErrorResponseSchema, "description": "Bureau not configured"},
        503: {"model": ErrorResponseSchema, "description": "Bureau API unavailable"},
    },
)


@consulta_router.post(
    "",
    response_model=ConsultaResponseSchema,
    status_code=200,
    summary="Query and Classify Report",
    description="""Fetch the InfoExperto report for a document and classify its risk""",
    responses={
        200: {"description": "Report classified successfully"},
    },
)
async def consultar(
    request: ConsultaRequestSchema,
    consulta_service: Annotated[ConsultaService, Depends(get_consulta_service)],
) -> ConsultaResponseSchema:
    """
    Query one document.

    Returns the risk tier, the internal evaluation for MEDIO subjects and the
    Situación 5 offer when applicable.
    """
    document = Document.parse(request.tipo_documento, request.numero)
    response = await consulta_service.consultar(document)
    return ConsultaResponseSchema.from_dto(response)


@consulta_router.post(
    "/multiple",
    response_model=ConsultaMultipleResponseSchema,
    status_code=200,
    summary="Query and Classify Several Reports",
    description="""
    Query several documents of the same type, sequentially.

    Each entry reports its own success or failure; one failing document
    never fails the batch.
    """,
    responses={
        200: {"description": "Batch processed"},
    },
)
async def consultar_multiple(
    request: ConsultaMultipleRequestSchema,
    consulta_service: Annotated[ConsultaService, Depends(get_consulta_service)],
) -> ConsultaMultipleResponseSchema:
    response = await consulta_service.consultar_multiple(
        request.tipo_documento,
        request.numeros,
    )
    return ConsultaMultipleResponseSchema(
        resultados=[ConsultaItemSchema.from_dto(r) for r in response.resultados],
    )
