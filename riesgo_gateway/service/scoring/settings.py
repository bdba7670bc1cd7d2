"""
Scoring Settings for the Riesgo Gateway classification engine.

This module contains all configurable parameters for tier classification,
the medium-risk internal score and the Situación 5 offer calculator.
They can be adjusted via environment variables when the credit policy is
tuned, without touching the scoring code.

Environment variables use the SCORING_ prefix:
    SCORING_MEDIUM_APPROVAL_THRESHOLD=70
    SCORING_SITUACION5_BASE_RATE=0.35
    SCORING_SITUACION5_MAX_AMOUNT=2000000

Usage:
    from riesgo_gateway.service.scoring.settings import scoring_settings

    # Use default settings (loaded from env)
    cap = scoring_settings.situacion5_max_amount

    # Or create custom settings for testing
    custom = ScoringSettings(medium_base_score=-200)
"""

import json
from decimal import Decimal
from functools import lru_cache
from typing import Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NSE_CODES = ("A", "B", "C1", "C2", "C3", "D1", "D2")


class ScoringSettings(BaseSettings):
    """
    Configurable parameters for the risk classification pipeline.

    All settings can be overridden via environment variables with SCORING_ prefix.
    Monetary values are in pesos. Medium-risk scores are 0-100.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Tier Classification ===
    tier_alto_max_scoring: float = Field(
        default=2.0,
        description="Bureau scoring at or below this value is tier ALTO",
    )
    tier_medio_max_scoring: float = Field(
        default=4.0,
        description="Bureau scoring at or below this value (and above ALTO) is tier MEDIO",
    )

    # === Medium-Risk Score ===
    medium_base_score: int = Field(
        default=50,
        description="Starting point of the internal score before adjustments",
    )
    medium_approval_threshold: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Internal score at or above this value is APROBADO",
    )
    medium_review_threshold: int = Field(
        default=55,
        ge=0,
        le=100,
        description="Internal score at or above this value (below approval) is REVISION",
    )
    tenure_long_months: float = Field(
        default=36,
        ge=0,
        description="Formal activity tenure (months) that earns the full bonus",
    )
    tenure_medium_months: float = Field(
        default=12,
        ge=0,
        description="Formal activity tenure (months) that earns the partial bonus",
    )

    # === Credit Utilization Bands (compromiso / capacidad) ===
    usage_low_threshold: float = Field(default=0.3, gt=0.0)
    usage_moderate_threshold: float = Field(default=0.5, gt=0.0)
    usage_high_threshold: float = Field(default=0.8, gt=0.0)

    # === Debt-to-Income Bands (compromiso / ingreso) ===
    dti_comfortable_threshold: float = Field(default=0.3, gt=0.0)
    dti_moderate_threshold: float = Field(default=0.4, gt=0.0)
    dti_high_threshold: float = Field(default=0.5, gt=0.0)

    # === Situación 5 Offer ===
    situacion5_scoring: float = Field(
        default=5,
        description="Bureau scoring value that opens the Situación 5 offer path",
    )
    situacion5_min_nse: str = Field(
        default="C3",
        description="Weakest socioeconomic level still eligible for the offer",
    )
    situacion5_base_rate: Decimal = Field(
        default=Decimal("0.35"),
        description="Share of available credit offered before adjustments",
    )
    situacion5_tenure_years: float = Field(
        default=5.0,
        gt=0.0,
        description="Merged tax-registration tenure (years) that earns the seniority bonus",
    )
    situacion5_tenure_bonus: Decimal = Field(default=Decimal("0.10"))
    situacion5_asset_bonus: Decimal = Field(default=Decimal("0.20"))
    situacion5_min_amount: int = Field(
        default=300_000,
        ge=0,
        description="Offers below this amount (after flooring) are not made",
    )
    situacion5_max_amount: int = Field(
        default=2_000_000,
        gt=0,
        description="Offers are capped at this amount",
    )
    situacion5_installments: int = Field(default=6, gt=0)
    situacion5_rate_label: str = Field(default="+75% en 6 cuotas")
    situacion5_nse_adjustments_json: str = Field(
        default='{"C3": -0.10, "C2": 0.00, "C1": 0.05, "B": 0.10, "A": 0.10}',
        description="Rate adjustment per socioeconomic level as a JSON object",
    )

    @field_validator("situacion5_min_nse")
    @classmethod
    def validate_min_nse(cls, v: str) -> str:
        """Ensure the minimum level is one of the known NSE codes."""
        code = v.strip().upper()
        if code not in NSE_CODES:
            raise ValueError(f"Unknown NSE code: {v}")
        return code

    @field_validator("situacion5_nse_adjustments_json")
    @classmethod
    def validate_nse_adjustments_json(cls, v: str) -> str:
        """Validate that the adjustments JSON is parseable and well-formed."""
        try:
            adjustments = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(adjustments, dict):
            raise ValueError("Adjustments must be a JSON object")
        for code, value in adjustments.items():
            if code not in NSE_CODES:
                raise ValueError(f"Unknown NSE code: {code}")
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Adjustment for {code} must be a number")
        return v

    @property
    def situacion5_nse_adjustments(self) -> Dict[str, Decimal]:
        """Rate adjustment per NSE code, as exact decimals."""
        return json.loads(
            self.situacion5_nse_adjustments_json,
            parse_float=Decimal,
            parse_int=Decimal,
        )


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


scoring_settings = get_scoring_settings()
