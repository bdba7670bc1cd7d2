"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Mock bureau client serving canned InfoExperto responses
- Sample bureau reports for each risk tier
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator, Dict, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from riesgo_gateway.main import app
from riesgo_gateway.core.dependencies import get_bureau_client
from riesgo_gateway.domain.entities import Document
from riesgo_gateway.domain.exceptions import ReportUnavailableException, describe_bureau_error
from riesgo_gateway.domain.interfaces import BureauAPIClient


# =============================================================================
# Test Data
# =============================================================================

CUIT_MEDIO = "20123456789"
CUIT_SITUACION5 = "27111111113"
CUIT_ALTO = "20222222224"
CUIT_SIN_INFORME = "20333333334"


def make_informe(scoring: Any, **overrides) -> Dict[str, Any]:
    """A well-formed InfoExperto informe with the given scoring."""
    informe = {
        "identidad": {"nombre_completo": "PEREZ JUAN", "anios_inscripcion": "2"},
        "scoringInforme": {
            "scoring": scoring,
            "credito": "1.000.000",
            "deuda": "600.000",
            "actividad": {"empleado": "SI", "monotributista": "NO"},
        },
        "condicionTributaria": {"monto_anual": "2.400.000,00"},
        "bcra": {"resumen_historico": {"202401": {"peor_situacion": "1"}}},
        "nivelSocioeconomico": {"nse_personal": "B"},
        "rodados": [],
        "inmuebles": [],
    }
    informe.update(overrides)
    return informe


def make_envelope(informe: Dict[str, Any], fecha: Optional[str] = "01/06/2024") -> Dict[str, Any]:
    """Wrap an informe in the bureau response envelope."""
    return {"data": {"fecha": fecha, "informe": informe}}


DEFAULT_REPORTS = {
    CUIT_MEDIO: make_envelope(make_informe("3")),
    CUIT_SITUACION5: make_envelope(
        make_informe(
            "5",
            scoringInforme={"scoring": "5", "credito": "1.000.000", "deuda": "0"},
        )
    ),
    CUIT_ALTO: make_envelope(make_informe(1)),
}


# =============================================================================
# Mock Clients
# =============================================================================

class MockBureauAPIClient(BureauAPIClient):
    """Mock bureau client that serves canned reports by document number."""

    def __init__(
        self,
        reports: Optional[Dict[str, Dict[str, Any]]] = None,
        errors: Optional[Dict[str, Exception]] = None,
        fail_with: Optional[Exception] = None,
    ):
        self.reports = DEFAULT_REPORTS if reports is None else reports
        self.errors = errors or {}
        self.fail_with = fail_with
        self.requested = []

    async def fetch_report(self, document: Document) -> Dict[str, Any]:
        """Return the canned envelope or raise the configured error."""
        self.requested.append(document)

        if self.fail_with is not None:
            raise self.fail_with
        if document.numero in self.errors:
            raise self.errors[document.numero]
        if document.numero not in self.reports:
            raise ReportUnavailableException(
                message=describe_bureau_error(16),
                codigo=16,
            )
        return self.reports[document.numero]


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def mock_bureau_client() -> MockBureauAPIClient:
    """Create a mock bureau client."""
    return MockBureauAPIClient()


# =============================================================================
# App Client Fixtures
# =============================================================================

@asynccontextmanager
async def app_client(bureau_client: BureauAPIClient) -> AsyncIterator[AsyncClient]:
    """Test client whose bureau dependency is overridden with bureau_client."""
    app.dependency_overrides[get_bureau_client] = lambda: bureau_client

    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    mock_bureau_client: MockBureauAPIClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    The bureau client serves the reports in DEFAULT_REPORTS and answers
    code 16 (no information) for any other number.
    """
    async with app_client(mock_bureau_client) as ac:
        yield ac
