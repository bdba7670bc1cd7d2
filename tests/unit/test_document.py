"""Unit tests for document validation and bureau error messages."""

import pytest

from riesgo_gateway.domain.entities import Document, DocumentType
from riesgo_gateway.domain.exceptions import (
    InvalidDocumentException,
    describe_bureau_error,
)


# =============================================================================
# Document.parse
# =============================================================================

class TestDocumentParse:
    """Tests for Document.parse."""

    def test_cuit_with_separators(self):
        document = Document.parse("CUIT", "20-12345678-9")

        assert document == Document(tipo=DocumentType.CUIT, numero="20123456789")

    def test_cuil(self):
        assert Document.parse("cuil", "27123456780").tipo == DocumentType.CUIL

    @pytest.mark.parametrize("numero", ["12.345.678", "1234567", 12345678])
    def test_valid_dni(self, numero):
        document = Document.parse("dni", numero)

        assert document.tipo == DocumentType.DNI
        assert 7 <= len(document.numero) <= 8

    @pytest.mark.parametrize(
        "tipo, numero",
        [("dni", "123456"), ("dni", "123456789"), ("cuit", "2012345678"), ("cuil", "201234567890")],
    )
    def test_wrong_length_is_code_13(self, tipo, numero):
        with pytest.raises(InvalidDocumentException) as exc_info:
            Document.parse(tipo, numero)

        assert exc_info.value.codigo == 13
        assert exc_info.value.code == "INVALID_DOCUMENT"
        assert exc_info.value.message == describe_bureau_error(13)

    @pytest.mark.parametrize("tipo, numero", [(None, "12345678"), ("dni", None), ("", ""), ("dni", "")])
    def test_missing_fields_are_code_12(self, tipo, numero):
        with pytest.raises(InvalidDocumentException) as exc_info:
            Document.parse(tipo, numero)

        assert exc_info.value.codigo == 12
        assert exc_info.value.detail == "Campos requeridos: tipoDocumento y numero"

    def test_unknown_type_is_code_12(self):
        with pytest.raises(InvalidDocumentException) as exc_info:
            Document.parse("pasaporte", "AB123456")

        assert exc_info.value.codigo == 12
        assert "tipoDocumento" in exc_info.value.detail

    def test_tax_id_flag(self):
        assert DocumentType.CUIT.is_tax_id
        assert DocumentType.CUIL.is_tax_id
        assert not DocumentType.DNI.is_tax_id


# =============================================================================
# Bureau Error Messages
# =============================================================================

class TestDescribeBureauError:
    """Tests for describe_bureau_error."""

    def test_known_code(self):
        assert describe_bureau_error(16) == (
            "Error interno, código 16 (No se encontró información). Consulte a un administrador."
        )

    def test_service_outage_includes_reason(self):
        assert describe_bureau_error(14, "mantenimiento") == (
            "Error interno, código 14 (Corte del servicio, motivo: mantenimiento). "
            "Consulte a un administrador."
        )

    def test_reason_ignored_for_other_codes(self):
        assert "motivo" not in describe_bureau_error(15, "algo")

    def test_unknown_code(self):
        assert describe_bureau_error(99) == "Error interno, código 99. Consulte a un administrador."

    @pytest.mark.parametrize("codigo", [None, 0])
    def test_no_code(self, codigo):
        assert describe_bureau_error(codigo) is None
