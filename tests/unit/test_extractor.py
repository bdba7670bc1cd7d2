"""
Unit Tests for bureau report parsing and signal extraction.

These tests verify:
1. The tolerant report schema never raises on malformed sections
2. Each signal's source, coercion and neutral default
3. The name fallback chain order
"""

from datetime import date

from riesgo_gateway.service.scoring import BureauReport, NormalizedSignals, TaxPeriod
from riesgo_gateway.service.scoring.extractor import (
    NOMBRE_COMPLETO_ACCESSORS,
    extract_signals,
    resolve_field,
    tax_periods,
    worst_bcra_situation,
)


# =============================================================================
# Test Fixtures
# =============================================================================

def make_informe(**overrides) -> dict:
    """A complete, well-formed informe; keyword arguments replace sections."""
    informe = {
        "identidad": {"nombre_completo": "PEREZ JUAN", "anios_inscripcion": "4"},
        "scoringInforme": {
            "scoring": "3",
            "credito": "1.200.000",
            "deuda": "240000",
            "actividad": {
                "empleado": "SI",
                "monotributista": "NO",
                "autonomo": "NO",
                "empleador": "NO",
            },
        },
        "condicionTributaria": {"monto_anual": "3.600.000,00", "nombre": "PEREZ JUAN CARLOS"},
        "condicionTributariaHistorial": [
            {"fecha_desde": "01/01/2015", "fecha_hasta": "31/12/2018"},
            {"fecha_desde": "01/01/2019", "fecha_hasta": ""},
        ],
        "bcra": {
            "resumen_historico": {
                "202401": {"peor_situacion": "1"},
                "202312": {"peor_situacion": "2"},
            }
        },
        "nivelSocioeconomico": {"nse_personal": "C2"},
        "soaAfipA4Online": {"nombreCompleto": "PEREZ, JUAN"},
        "rodados": [{"dominio": "AB123CD"}],
        "inmuebles": [],
    }
    informe.update(overrides)
    return informe


# =============================================================================
# Report Schema
# =============================================================================

class TestBureauReport:
    """Tests for the tolerant report schema."""

    def test_unwraps_response_envelope(self):
        envelope = {"data": {"fecha": "27/01/2024", "informe": make_informe()}}

        report = BureauReport.from_payload(envelope)

        assert report.identidad.nombre_completo == "PEREZ JUAN"

    def test_non_object_payloads_give_empty_report(self):
        for payload in (None, "informe", 42, [1, 2]):
            report = BureauReport.from_payload(payload)
            assert report.scoring_informe.scoring is None
            assert report.rodados == []

    def test_wrong_section_shapes_are_emptied(self):
        report = BureauReport.from_payload(
            make_informe(
                identidad="n/a",
                scoringInforme=[1, 2, 3],
                bcra={"resumen_historico": "sin datos"},
                rodados=None,
                condicionTributariaHistorial={"fecha_desde": "01/01/2015"},
            )
        )

        assert report.identidad.nombre_completo is None
        assert report.scoring_informe.actividad.empleado is None
        assert report.bcra.resumen_historico == {}
        assert report.rodados == []
        assert report.condicion_tributaria_historial == []

    def test_bcra_summary_accepts_a_list(self):
        report = BureauReport.from_payload(
            make_informe(bcra={"resumen_historico": [{"peor_situacion": 3}, "x"]})
        )

        assert worst_bcra_situation(report) == 3


# =============================================================================
# Signal Extraction
# =============================================================================

class TestExtractSignals:
    """Tests for extract_signals."""

    def test_complete_report(self):
        signals = extract_signals(make_informe())

        assert signals.nombre_completo == "PEREZ JUAN"
        assert signals.scoring_bureau == 3
        assert signals.capacidad_total == 1_200_000
        assert signals.compromiso_mensual == 20_000
        assert signals.ingreso_mensual_estimado == 300_000
        assert signals.antiguedad_laboral_meses == 48
        assert signals.situacion_bcra_peor_24m == 2
        assert signals.tiene_actividad_formal is True
        assert signals.tiene_vehiculos_registrados is True
        assert signals.tiene_inmuebles_registrados is False
        assert signals.nse_personal == "C2"
        assert signals.credito_informado == 1_200_000
        assert signals.deuda_informada == 240_000
        assert signals.periodos_tributarios == (
            TaxPeriod(start=date(2015, 1, 1), end=date(2018, 12, 31)),
            TaxPeriod(start=date(2019, 1, 1), end=None),
        )

    def test_empty_report_gives_neutral_defaults(self):
        assert extract_signals({}) == NormalizedSignals()

    def test_non_positive_credit_and_debt_default_to_zero(self):
        signals = extract_signals(
            make_informe(scoringInforme={"scoring": 3, "credito": "-5", "deuda": "0"})
        )

        assert signals.capacidad_total == 0
        assert signals.compromiso_mensual == 0
        assert signals.credito_informado == -5
        assert signals.deuda_informada == 0

    def test_malformed_numbers_default(self):
        signals = extract_signals(
            make_informe(
                scoringInforme={"scoring": "n/d", "credito": "mucho"},
                condicionTributaria={"monto_anual": "???"},
                identidad={"anios_inscripcion": "-3"},
            )
        )

        assert signals.scoring_bureau is None
        assert signals.capacidad_total == 0
        assert signals.credito_informado is None
        assert signals.ingreso_mensual_estimado == 0
        assert signals.antiguedad_laboral_meses == 0

    def test_activity_requires_exact_si(self):
        signals = extract_signals(
            make_informe(
                scoringInforme={"actividad": {"empleado": "si", "autonomo": True}}
            )
        )

        assert signals.tiene_actividad_formal is False

    def test_bcra_ignores_non_numeric_situations(self):
        signals = extract_signals(
            make_informe(
                bcra={"resumen_historico": {"a": {"peor_situacion": "x"}, "b": {}}}
            )
        )

        assert signals.situacion_bcra_peor_24m is None

    def test_unknown_nse_is_none(self):
        signals = extract_signals(make_informe(nivelSocioeconomico={"nse_personal": "Z9"}))

        assert signals.nse_personal is None


# =============================================================================
# Name Fallback Chain
# =============================================================================

class TestNombreCompleto:
    """Tests for the name fallback order."""

    def test_identity_name_wins(self):
        report = BureauReport.from_payload(make_informe())

        assert resolve_field(report, NOMBRE_COMPLETO_ACCESSORS) == (
            "PEREZ JUAN",
            "identidad.nombre_completo",
        )

    def test_afip_name_before_tax_name(self):
        report = BureauReport.from_payload(make_informe(identidad={"nombre_completo": "  "}))

        assert resolve_field(report, NOMBRE_COMPLETO_ACCESSORS) == (
            "PEREZ, JUAN",
            "soaAfipA4Online.nombreCompleto",
        )

    def test_tax_name_is_last_resort(self):
        signals = extract_signals(make_informe(identidad={}, soaAfipA4Online=None))

        assert signals.nombre_completo == "PEREZ JUAN CARLOS"

    def test_default_name(self):
        signals = extract_signals(
            make_informe(identidad={}, soaAfipA4Online={}, condicionTributaria={})
        )

        assert signals.nombre_completo == "Sin nombre"


# =============================================================================
# Tax Periods
# =============================================================================

class TestTaxPeriods:
    """Tests for tax_periods."""

    def test_records_without_start_are_skipped(self):
        report = BureauReport.from_payload(
            make_informe(
                condicionTributariaHistorial=[
                    {"fecha_desde": "", "fecha_hasta": "01/01/2020"},
                    {"fecha_desde": "31/02/2020"},
                    {"fecha_desde": "01/03/2020", "fecha_hasta": "no"},
                    "basura",
                ]
            )
        )

        assert tax_periods(report) == (TaxPeriod(start=date(2020, 3, 1), end=None),)
