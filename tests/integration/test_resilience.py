"""
Integration tests for resilience and error handling.

These tests verify:
1. The HTTP bureau client request format and response handling
2. Retry with backoff on timeouts, no retry on API errors
3. Bureau failures map to 503/500 responses
4. A failing bureau never fails a batch
"""

import httpx
import pytest

from riesgo_gateway.domain.entities import Document
from riesgo_gateway.domain.exceptions import (
    BureauAPIException,
    BureauAPITimeoutException,
    BureauConfigurationException,
    ReportUnavailableException,
    describe_bureau_error,
)
from riesgo_gateway.infrastructure.clients import HttpBureauAPIClient, extract_error_info
from tests.integration.conftest import (
    CUIT_MEDIO,
    MockBureauAPIClient,
    app_client,
    make_envelope,
    make_informe,
)

BASE_URL = "https://bureau.test/api/informeApi"


# =============================================================================
# Test Helpers
# =============================================================================

def make_client(handler, **kwargs) -> HttpBureauAPIClient:
    """HTTP bureau client wired to an in-memory transport."""
    return HttpBureauAPIClient(
        base_url=BASE_URL,
        api_key="test-key",
        timeout=1.0,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class CountingHandler:
    """Transport handler that replays scripted responses and counts calls."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        outcome = self.outcomes[min(len(self.calls), len(self.outcomes)) - 1]
        if outcome == "timeout":
            raise httpx.ReadTimeout("timed out", request=request)
        return outcome


CUIT = Document.parse("cuit", CUIT_MEDIO)
DNI = Document.parse("dni", "12345678")


# =============================================================================
# HTTP Bureau Client Tests
# =============================================================================

class TestHttpBureauClient:
    """Tests for HttpBureauAPIClient against a mock transport."""

    @pytest.mark.asyncio
    async def test_cuit_request_format(self):
        envelope = make_envelope(make_informe("3"))
        handler = CountingHandler(httpx.Response(200, json=envelope))

        result = await make_client(handler).fetch_report(CUIT)

        assert result == envelope
        request = handler.calls[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/obtenerInforme"
        assert b'name="apiKey"' in request.content
        assert b"test-key" in request.content
        assert b'name="tipo"' in request.content
        assert b'name="cuit"' in request.content
        assert CUIT_MEDIO.encode() in request.content

    @pytest.mark.asyncio
    async def test_dni_uses_dni_endpoint(self):
        handler = CountingHandler(httpx.Response(200, json=make_envelope(make_informe("3"))))

        await make_client(handler).fetch_report(DNI)

        request = handler.calls[0]
        assert str(request.url) == f"{BASE_URL}/obtenerInformeDni"
        assert b'name="dni"' in request.content
        assert b"12345678" in request.content

    @pytest.mark.asyncio
    async def test_http_error_maps_bureau_code(self):
        handler = CountingHandler(
            httpx.Response(401, json={"metadata": {"codigo": 11, "message": "bad key"}})
        )

        with pytest.raises(BureauAPIException) as exc_info:
            await make_client(handler).fetch_report(CUIT)

        assert exc_info.value.codigo == 11
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == describe_bureau_error(11)
        assert len(handler.calls) == 1

    @pytest.mark.asyncio
    async def test_service_outage_includes_reason(self):
        handler = CountingHandler(
            httpx.Response(503, json={"meta": {"code": "14", "message": "mantenimiento"}})
        )

        with pytest.raises(BureauAPIException) as exc_info:
            await make_client(handler).fetch_report(CUIT)

        assert exc_info.value.codigo == 14
        assert "motivo: mantenimiento" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_http_error_without_json(self):
        handler = CountingHandler(httpx.Response(500, text="<html>error</html>"))

        with pytest.raises(BureauAPIException) as exc_info:
            await make_client(handler).fetch_report(CUIT)

        assert exc_info.value.codigo is None
        assert exc_info.value.message == "Error desde API InfoExperto (HTTP 500)"

    @pytest.mark.asyncio
    async def test_success_without_report(self):
        handler = CountingHandler(httpx.Response(200, json={"codigo": "16", "data": {}}))

        with pytest.raises(ReportUnavailableException) as exc_info:
            await make_client(handler).fetch_report(CUIT)

        assert exc_info.value.codigo == 16
        assert exc_info.value.message == describe_bureau_error(16)

    @pytest.mark.asyncio
    async def test_success_without_report_or_code(self):
        handler = CountingHandler(httpx.Response(200, json={"message": "Sin datos"}))

        with pytest.raises(ReportUnavailableException) as exc_info:
            await make_client(handler).fetch_report(CUIT)

        assert exc_info.value.codigo is None
        assert exc_info.value.message == "Sin datos"

    @pytest.mark.asyncio
    async def test_timeouts_are_retried_then_raised(self):
        handler = CountingHandler("timeout")

        with pytest.raises(BureauAPITimeoutException):
            await make_client(handler, max_retries=3).fetch_report(CUIT)

        assert len(handler.calls) == 3

    @pytest.mark.asyncio
    async def test_timeout_then_success(self):
        envelope = make_envelope(make_informe("3"))
        handler = CountingHandler("timeout", httpx.Response(200, json=envelope))

        result = await make_client(handler, max_retries=3).fetch_report(CUIT)

        assert result == envelope
        assert len(handler.calls) == 2

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        handler = CountingHandler(httpx.Response(200, json={}))
        client = HttpBureauAPIClient(
            base_url=BASE_URL,
            api_key="",
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(BureauConfigurationException):
            await client.fetch_report(CUIT)

        assert handler.calls == []


class TestExtractErrorInfo:
    """Tests for extract_error_info."""

    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"metadata": {"codigo": 13, "message": "m"}}, (13, "m")),
            ({"meta": {"code": "18"}}, (18, None)),
            ({"codigo": 20, "message": "top"}, (20, "top")),
            ({"metadata": {"codigo": "abc"}}, (None, None)),
            ({"metadata": {"codigo": True}}, (None, None)),
            ({"codigo": 0}, (None, None)),
            (None, (None, None)),
            ([1, 2], (None, None)),
        ],
    )
    def test_variants(self, payload, expected):
        assert extract_error_info(payload) == expected


# =============================================================================
# HTTP Error Mapping Tests
# =============================================================================

class TestBureauFailureResponses:
    """Tests for mapping bureau failures to HTTP responses."""

    @pytest.mark.asyncio
    async def test_bureau_api_error_returns_503(self):
        failing = MockBureauAPIClient(
            fail_with=BureauAPIException(
                message=describe_bureau_error(15),
                status_code=500,
                codigo=15,
            )
        )

        async with app_client(failing) as client:
            response = await client.post("/api/infoexperto", json={
                "tipoDocumento": "cuit",
                "numero": CUIT_MEDIO,
            })

        assert response.status_code == 503
        data = response.json()
        assert data["error"] == "BUREAU_API_ERROR"
        assert data["codigo"] == 15

    @pytest.mark.asyncio
    async def test_bureau_timeout_returns_503(self):
        failing = MockBureauAPIClient(fail_with=BureauAPITimeoutException())

        async with app_client(failing) as client:
            response = await client.post("/api/infoexperto", json={
                "tipoDocumento": "cuit",
                "numero": CUIT_MEDIO,
            })

        assert response.status_code == 503
        assert response.json()["error"] == "BUREAU_API_TIMEOUT"
        assert "codigo" not in response.json()

    @pytest.mark.asyncio
    async def test_missing_configuration_returns_500(self):
        failing = MockBureauAPIClient(fail_with=BureauConfigurationException())

        async with app_client(failing) as client:
            response = await client.post("/api/infoexperto", json={
                "tipoDocumento": "cuit",
                "numero": CUIT_MEDIO,
            })

        assert response.status_code == 500
        assert response.json()["error"] == "BUREAU_NOT_CONFIGURED"
        assert "INFOEXPERTO_API_KEY" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_failing_bureau_does_not_fail_batch(self):
        failing = MockBureauAPIClient(fail_with=BureauAPITimeoutException())

        async with app_client(failing) as client:
            response = await client.post("/api/infoexperto/multiple", json={
                "tipoDocumento": "cuit",
                "numeros": [CUIT_MEDIO, CUIT_MEDIO],
            })

        assert response.status_code == 200
        resultados = response.json()["resultados"]
        assert [r["ok"] for r in resultados] == [False, False]
        assert all(r["error"] for r in resultados)

    @pytest.mark.asyncio
    async def test_unexpected_error_in_batch_is_reported(self):
        failing = MockBureauAPIClient(fail_with=RuntimeError("boom"))

        async with app_client(failing) as client:
            response = await client.post("/api/infoexperto/multiple", json={
                "tipoDocumento": "cuit",
                "numeros": [CUIT_MEDIO],
            })

        assert response.status_code == 200
        resultado = response.json()["resultados"][0]
        assert resultado["ok"] is False
        assert resultado["error"] == "Error interno del servidor"
        assert resultado["codigo"] is None
        assert resultado["numeroOriginal"] == CUIT_MEDIO
