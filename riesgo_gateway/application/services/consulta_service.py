"""Consulta service - orchestrates the bureau report query use case."""

from datetime import date
from typing import Any, Callable, Optional

import structlog

from riesgo_gateway.application.dto import (
    ConsultaItemResult,
    ConsultaMultipleResponse,
    ConsultaResponse,
)
from riesgo_gateway.core.metrics import record_analysis, track_consulta_latency
from riesgo_gateway.domain.entities import Document
from riesgo_gateway.domain.exceptions import (
    DomainException,
    InvalidConsultaRequestException,
)
from riesgo_gateway.domain.interfaces import BureauAPIClient
from riesgo_gateway.service.scoring import (
    ScoringSettings,
    analyze_report,
    explain_analysis,
    scoring_settings,
)

logger = structlog.get_logger(__name__)


class ConsultaService:
    """
    Application service for bureau report queries.
    """

    def __init__(
        self,
        bureau_client: BureauAPIClient,
        settings: ScoringSettings = scoring_settings,
        situation5_logger: Any = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self._bureau_client = bureau_client
        self._settings = settings
        self._situation5_logger = situation5_logger
        self._today = today

    async def consultar(self, document: Document) -> ConsultaResponse:
        """
        Fetch and classify the bureau report for one document.

        Args:
            document: The validated document to query

        Returns:
            ConsultaResponse with tier, internal evaluation and Situación 5 offer

        Raises:
            BureauConfigurationException: If the bureau API key is missing
            BureauAPIException: If the bureau API fails
            ReportUnavailableException: If the bureau returns no report
        """
        log = logger.bind(tipo_documento=document.tipo.value)
        log.info("consulta_requested")

        with track_consulta_latency():
            envelope = await self._bureau_client.fetch_report(document)

            analysis = analyze_report(
                envelope,
                today=self._today() if self._today else None,
                settings=self._settings,
                situation5_logger=self._situation5_logger,
            )

        record_analysis(
            tier=analysis.riesgo.value,
            medium_status=(
                analysis.riesgo_interno.estado.value if analysis.riesgo_interno else None
            ),
            situacion5_monto=analysis.situacion5.monto if analysis.situacion5 else None,
        )

        log.info(
            "consulta_classified",
            riesgo=analysis.riesgo.value,
            scoring_api=analysis.scoring_api,
            situacion5=analysis.situacion5 is not None,
        )
        if analysis.riesgo_interno is not None:
            log.debug(
                "consulta_medium_risk",
                score_interno=analysis.riesgo_interno.score_interno,
                estado=analysis.riesgo_interno.estado.value,
                motivos=analysis.riesgo_interno.motivos,
            )
        if self._situation5_logger is not None:
            self._situation5_logger.debug(
                "consulta_explained",
                explanation=explain_analysis(analysis),
            )

        return ConsultaResponse.from_analysis(analysis, document, envelope)

    async def consultar_multiple(
        self,
        tipo_documento: Any,
        numeros: Any,
    ) -> ConsultaMultipleResponse:
        """
        Query several documents of the same type, one after another.

        Each number is validated and queried independently; a failure is
        reported in its own result and never aborts the batch.

        Raises:
            InvalidConsultaRequestException: If the type or the list is missing
        """
        if not tipo_documento or not isinstance(numeros, (list, tuple)) or not numeros:
            raise InvalidConsultaRequestException(
                "Debes enviar tipoDocumento y un array 'numeros' con al menos un elemento."
            )

        log = logger.bind(batch_size=len(numeros))
        log.info("consulta_multiple_requested")

        resultados = []
        for raw in numeros:
            resultados.append(await self._consultar_item(tipo_documento, raw))

        log.info(
            "consulta_multiple_completed",
            ok=sum(1 for r in resultados if r.ok),
            failed=sum(1 for r in resultados if not r.ok),
        )
        return ConsultaMultipleResponse(resultados=resultados)

    async def _consultar_item(self, tipo_documento: Any, raw: Any) -> ConsultaItemResult:
        """Validate and query one batch entry, capturing its failure."""
        try:
            document = Document.parse(tipo_documento, raw)
            consulta = await self.consultar(document)
        except DomainException as e:
            logger.warning(
                "consulta_item_failed",
                code=e.code,
                codigo=e.codigo,
            )
            return ConsultaItemResult(
                ok=False,
                numero_original=raw,
                error=e.message,
                codigo=e.codigo,
            )
        except Exception as e:
            logger.exception(
                "consulta_item_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            return ConsultaItemResult(
                ok=False,
                numero_original=raw,
                error="Error interno del servidor",
            )

        return ConsultaItemResult(ok=True, numero_original=raw, consulta=consulta)
