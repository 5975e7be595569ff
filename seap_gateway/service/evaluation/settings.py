"""
Evaluation Settings for the SEAP loan eligibility pipeline.

This module contains every policy threshold and cap used by the rule
stages and the amount calculator, so policy can be tuned without touching
logic.

Environment variables use the EVALUATION_ prefix:
    EVALUATION_MINIMUM_INCOME=500000
    EVALUATION_DISQUALIFIED_POLICY=cap
    EVALUATION_ACCOUNT_BLOCKED_PROBABILITY=0.05

Usage:
    from seap_gateway.service.evaluation.settings import evaluation_settings

    # Use default settings (loaded from env)
    threshold = evaluation_settings.minimum_income

    # Or create custom settings for testing
    custom = EvaluationSettings(delinquency_delay_seconds=0, bank_delay_seconds=0)
"""

import json
from functools import lru_cache
from typing import List, Literal, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EvaluationSettings(BaseSettings):
    """
    Configurable parameters for the evaluation pipeline.

    All settings can be overridden via environment variables with EVALUATION_ prefix.
    All monetary values are in currency units (pesos).
    """

    model_config = SettingsConfigDict(
        env_prefix="EVALUATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Income Stage ===
    minimum_income: float = Field(
        default=500_000,
        ge=0,
        description="Net monthly income below this is rejected",
    )

    # === Bureau Stage ===
    problematic_reject_pct: float = Field(
        default=40.0,
        ge=0.0,
        le=100.0,
        description="Share of tier 3-5 entities at or above which the bureau stage fails",
    )
    disqualified_policy: Literal["reject", "cap"] = Field(
        default="reject",
        description="Tier-5 handling: outright rejection, or pass with a capped amount",
    )

    # === Bank Stage ===
    restricted_bank_min_income: float = Field(
        default=650_000,
        ge=0,
        description="Restricted banks require income strictly above this",
    )
    bank_reject_risk_tier: int = Field(
        default=4,
        ge=1,
        le=5,
        description="Payer banks at or above this risk tier are rejected",
    )
    account_blocked_probability: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Chance of the simulated account-blocked check failing",
    )

    # === Amount: income brackets ===
    income_brackets_json: str = Field(
        default="[[1000000,200000],[800000,150000],[500000,100000]]",
        description="Income brackets as JSON array: [[min_income, base_amount], ...]",
    )

    # === Amount: cap rules ===
    public_sector_cap: int = Field(default=200_000, ge=0)
    retiree_cap: int = Field(default=200_000, ge=0)
    private_sector_cap: int = Field(default=150_000, ge=0)
    unset_employment_cap: int = Field(
        default=0,
        ge=0,
        description="Applicants without an employment category do not qualify",
    )
    capped_bank_risk_tier: int = Field(default=3, ge=1, le=5)
    bank_risk_tier_cap: int = Field(default=150_000, ge=0)
    problematic_cap_pct: float = Field(
        default=20.0,
        ge=0.0,
        le=100.0,
        description="Share of tier 3-5 entities above which the amount is capped",
    )
    problematic_cap: int = Field(default=100_000, ge=0)
    outstanding_amount_threshold: float = Field(
        default=100_000,
        ge=0,
        description="Bureau outstanding amount above which the amount is capped",
    )
    outstanding_amount_cap: int = Field(default=100_000, ge=0)
    disqualified_cap: int = Field(
        default=100_000,
        ge=0,
        description="Cap for tier-5 applicants under the 'cap' policy",
    )

    # === Simulated external latency ===
    delinquency_delay_seconds: float = Field(
        default=1.5,
        ge=0.0,
        description="Artificial latency before the delinquency registry lookup",
    )
    bank_delay_seconds: float = Field(
        default=0.8,
        ge=0.0,
        description="Artificial latency before the payer bank checks",
    )

    @field_validator("income_brackets_json")
    @classmethod
    def validate_brackets_json(cls, v: str) -> str:
        """Validate that brackets JSON is parseable and well-formed."""
        try:
            brackets = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(brackets, list):
            raise ValueError("Brackets must be a list")
        for bracket in brackets:
            if not isinstance(bracket, list) or len(bracket) != 2:
                raise ValueError("Each bracket must be [min_income, base_amount]")
            if not all(isinstance(x, int) for x in bracket):
                raise ValueError("All bracket values must be integers")
            if min(bracket) < 0:
                raise ValueError(f"Bracket values cannot be negative: {bracket}")
        return v

    @property
    def income_brackets(self) -> List[Tuple[int, int]]:
        """Income brackets sorted from the highest threshold down."""
        brackets = [tuple(b) for b in json.loads(self.income_brackets_json)]
        return sorted(brackets, key=lambda b: b[0], reverse=True)


@lru_cache
def get_evaluation_settings() -> EvaluationSettings:
    """Get cached evaluation settings instance."""
    return EvaluationSettings()


evaluation_settings = get_evaluation_settings()
