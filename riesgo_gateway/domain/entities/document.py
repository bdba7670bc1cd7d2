"""Document entity identifying the subject of a bureau query."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from riesgo_gateway.domain.exceptions import InvalidDocumentException

CODIGO_FALTAN_DATOS = 12
CODIGO_DOCUMENTO_INVALIDO = 13


class DocumentType(str, Enum):
    """Argentine identity document types accepted by the bureau."""

    DNI = "dni"
    CUIT = "cuit"
    CUIL = "cuil"

    @property
    def is_tax_id(self) -> bool:
        return self in (DocumentType.CUIT, DocumentType.CUIL)


@dataclass(frozen=True)
class Document:
    """
    A validated identity document.

    Attributes:
        tipo: Document type
        numero: Digits only ("20-12345678-9" becomes "20123456789")
    """

    tipo: DocumentType
    numero: str

    @classmethod
    def parse(cls, tipo_documento: Any, numero: Any) -> "Document":
        """
        Validate and normalize a document type and number.

        Rules:
            - Both fields are required
            - DNI: 7 or 8 digits
            - CUIT/CUIL: exactly 11 digits
            - Separators and other non-digits are stripped before counting

        Raises:
            InvalidDocumentException: code 12 for missing fields or an unknown
                type, code 13 for a number of the wrong length
        """
        tipo = str(tipo_documento or "").strip().lower()
        numero_str = "" if numero is None else str(numero)
        limpio = re.sub(r"\D", "", numero_str, flags=re.ASCII)

        if not tipo or not numero_str:
            raise InvalidDocumentException(
                "Campos requeridos: tipoDocumento y numero",
                codigo=CODIGO_FALTAN_DATOS,
            )

        try:
            document_type = DocumentType(tipo)
        except ValueError:
            raise InvalidDocumentException(
                "tipoDocumento debe ser 'dni', 'cuit' o 'cuil'",
                codigo=CODIGO_FALTAN_DATOS,
            )

        if document_type.is_tax_id:
            if len(limpio) != 11:
                raise InvalidDocumentException(
                    "Formato de CUIT/CUIL inválido. Debe tener 11 dígitos.",
                    codigo=CODIGO_DOCUMENTO_INVALIDO,
                )
        elif not 7 <= len(limpio) <= 8:
            raise InvalidDocumentException(
                "Formato de DNI inválido. Debe tener 7 u 8 dígitos.",
                codigo=CODIGO_DOCUMENTO_INVALIDO,
            )

        return cls(tipo=document_type, numero=limpio)
