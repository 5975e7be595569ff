"""
Evaluation Pipeline for SEAP short-term loan eligibility
"""

from .settings import EvaluationSettings, evaluation_settings
from .identifiers import (
    compute_check_digit,
    is_valid_tax_id,
    person_id_to_tax_id,
    resolve_tax_id,
)
from .stages import check_bank, check_bureau, check_delinquency, check_income
from .amount import (
    CAP_RULES,
    CapRule,
    base_amount_for_income,
    calculate_amount,
    compute_max_amount,
)
from .pipeline import EvaluationPipeline, seeded_rng

__all__ = [
    # Settings
    "EvaluationSettings",
    "evaluation_settings",
    # Identifiers
    "compute_check_digit",
    "is_valid_tax_id",
    "person_id_to_tax_id",
    "resolve_tax_id",
    # Stages
    "check_income",
    "check_delinquency",
    "check_bureau",
    "check_bank",
    # Amount
    "CAP_RULES",
    "CapRule",
    "base_amount_for_income",
    "calculate_amount",
    "compute_max_amount",
    # Orchestrator
    "EvaluationPipeline",
    "seeded_rng",
]
