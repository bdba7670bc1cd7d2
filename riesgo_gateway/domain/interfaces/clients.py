"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from riesgo_gateway.domain.entities import Document


class BureauAPIClient(ABC):
    """
    Abstract client for the credit bureau (InfoExperto).

    Fetches the credit report used for risk classification.
    """

    @abstractmethod
    async def fetch_report(self, document: Document) -> Dict[str, Any]:
        """
        Fetch the bureau report for a document.

        Args:
            document: The validated identity document

        Returns:
            The decoded response envelope; the report lives under
            `data.informe` and the report date under `data.fecha`

        Raises:
            BureauConfigurationException: If the client has no API key
            BureauAPIException: If the API returns an error
            BureauAPITimeoutException: If the request times out
            ReportUnavailableException: If the response carries no report
        """
        ...
