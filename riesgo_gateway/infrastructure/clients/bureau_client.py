"""HTTP implementation of BureauAPIClient."""

import asyncio
import math
from typing import Any, Dict, Optional, Tuple

import httpx
import structlog

from riesgo_gateway.core.config import settings
from riesgo_gateway.core.metrics import (
    track_bureau_fetch_latency,
    record_bureau_fetch_success,
    record_bureau_fetch_failure,
)
from riesgo_gateway.domain.entities import Document
from riesgo_gateway.domain.exceptions import (
    BureauAPIException,
    BureauAPITimeoutException,
    BureauConfigurationException,
    ReportUnavailableException,
    describe_bureau_error,
)
from riesgo_gateway.domain.interfaces import BureauAPIClient

logger = structlog.get_logger(__name__)


def parse_error_code(value: Any) -> Optional[int]:
    """Coerce a bureau error code to int; zero and non-numeric values are None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    if value != int(value):
        return None
    return int(value) or None


def extract_error_info(payload: Any) -> Tuple[Optional[int], Optional[str]]:
    """
    Read the error code and message from a bureau response body.

    The code is looked up in `metadata.codigo`, `metadata.code` and then
    the top-level `codigo` (with `meta` accepted in place of `metadata`).
    The message comes from `metadata.message` or the top-level `message`.
    """
    if not isinstance(payload, dict):
        return None, None

    metadata = payload.get("metadata") or payload.get("meta") or {}
    if not isinstance(metadata, dict):
        metadata = {}

    raw_code = None
    for candidate in (metadata.get("codigo"), metadata.get("code"), payload.get("codigo")):
        if candidate is not None:
            raw_code = candidate
            break

    message = metadata.get("message") or payload.get("message") or None
    return parse_error_code(raw_code), message


class HttpBureauAPIClient(BureauAPIClient):
    """
    HTTP client for the InfoExperto bureau API.

    Posts the document as a multipart form and returns the decoded
    response envelope. Timeouts and transport errors are retried with
    exponential backoff; API errors are not.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float = 0.1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.bureau_api_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.infoexperto_api_key
        self._timeout = timeout or settings.bureau_api_timeout
        self._max_retries = max(1, max_retries or settings.bureau_max_retries)
        self._backoff_seconds = backoff_seconds
        self._transport = transport

    def _build_request(self, document: Document) -> Tuple[str, Dict[str, Tuple[None, str]]]:
        """Return the endpoint URL and multipart fields for a document."""
        fields = {
            "apiKey": (None, self._api_key or ""),
            "tipo": (None, "normal"),
        }
        if document.tipo.is_tax_id:
            fields["cuit"] = (None, document.numero)
            return f"{self._base_url}/obtenerInforme", fields

        fields["dni"] = (None, document.numero)
        return f"{self._base_url}/obtenerInformeDni", fields

    async def fetch_report(self, document: Document) -> Dict[str, Any]:
        """
        Fetch the bureau report for a document.

        Implements retry logic with exponential backoff.
        """
        if not self._api_key:
            record_bureau_fetch_failure("not_configured")
            raise BureauConfigurationException()

        url, fields = self._build_request(document)
        log = logger.bind(tipo_documento=document.tipo.value)

        last_exception: Exception | None = None

        for attempt in range(self._max_retries):
            try:
                with track_bureau_fetch_latency():
                    async with httpx.AsyncClient(
                        timeout=self._timeout,
                        transport=self._transport,
                        follow_redirects=True,
                    ) as client:
                        response = await client.post(url, files=fields)

                return self._handle_response(response, log)

            except httpx.TimeoutException:
                record_bureau_fetch_failure("timeout")
                last_exception = BureauAPITimeoutException()
                log.warning(
                    "bureau_api_timeout",
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except httpx.HTTPError as e:
                record_bureau_fetch_failure("error")
                last_exception = BureauAPIException(
                    message=f"Error de conexión con InfoExperto: {e}",
                )
                log.error(
                    "bureau_api_error",
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * self._backoff_seconds)

        raise last_exception or BureauAPIException("No se pudo consultar InfoExperto")

    def _handle_response(self, response: httpx.Response, log: Any) -> Dict[str, Any]:
        """Validate a bureau response and return its envelope."""
        try:
            payload = response.json()
        except ValueError:
            payload = None

        codigo, mensaje_api = extract_error_info(payload)

        if not response.is_success:
            record_bureau_fetch_failure("error")
            log.warning(
                "bureau_api_http_error",
                status_code=response.status_code,
                codigo=codigo,
            )
            raise BureauAPIException(
                message=(
                    describe_bureau_error(codigo, mensaje_api)
                    or mensaje_api
                    or f"Error desde API InfoExperto (HTTP {response.status_code})"
                ),
                status_code=response.status_code,
                codigo=codigo,
            )

        data = payload.get("data") if isinstance(payload, dict) else None
        informe = data.get("informe") if isinstance(data, dict) else None
        if not informe:
            record_bureau_fetch_failure("no_report")
            log.warning("bureau_report_missing", codigo=codigo)
            raise ReportUnavailableException(
                message=(
                    describe_bureau_error(codigo, mensaje_api)
                    or mensaje_api
                    or "No se pudo obtener el informe"
                ),
                codigo=codigo,
            )

        record_bureau_fetch_success()
        log.info("bureau_report_fetched", fecha=data.get("fecha"))
        return payload
