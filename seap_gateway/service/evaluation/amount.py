"""
Amount Calculator for the SEAP loan eligibility pipeline.

The maximum approvable amount starts from an income-bracket base and is
reduced by an ordered list of named cap rules. Every rule is recorded in
the breakdown, triggered or not, so the final amount can be explained.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from seap_gateway.domain.entities import (
    AmountBreakdown,
    ApplicantProfile,
    CapApplication,
    EmploymentCategory,
    StageResult,
)

from .settings import EvaluationSettings, evaluation_settings


@dataclass(frozen=True)
class CapContext:
    """Inputs every cap rule may look at."""

    profile: ApplicantProfile
    bank_risk_tier: Optional[int]
    problematic_pct: float
    total_amount: float
    disqualified: bool


@dataclass(frozen=True)
class CapRule:
    """
    A named cap.

    `limit` returns the cap for the context, or None when the rule does not
    trigger.
    """

    name: str
    limit: Callable[[CapContext, EvaluationSettings], Optional[int]]


def _employment_cap(ctx: CapContext, settings: EvaluationSettings) -> Optional[int]:
    caps = {
        EmploymentCategory.PUBLIC: settings.public_sector_cap,
        EmploymentCategory.RETIREE: settings.retiree_cap,
        EmploymentCategory.PRIVATE: settings.private_sector_cap,
        EmploymentCategory.UNSET: settings.unset_employment_cap,
    }
    return caps[ctx.profile.employment]


def _bank_risk_tier_cap(ctx: CapContext, settings: EvaluationSettings) -> Optional[int]:
    if ctx.bank_risk_tier == settings.capped_bank_risk_tier:
        return settings.bank_risk_tier_cap
    return None


def _problematic_share_cap(ctx: CapContext, settings: EvaluationSettings) -> Optional[int]:
    if ctx.problematic_pct > settings.problematic_cap_pct:
        return settings.problematic_cap
    return None


def _outstanding_amount_cap(ctx: CapContext, settings: EvaluationSettings) -> Optional[int]:
    if ctx.total_amount > settings.outstanding_amount_threshold:
        return settings.outstanding_amount_cap
    return None


def _disqualified_cap(ctx: CapContext, settings: EvaluationSettings) -> Optional[int]:
    if ctx.disqualified:
        return settings.disqualified_cap
    return None


# Applied left to right.
CAP_RULES: Tuple[CapRule, ...] = (
    CapRule("employment_category", _employment_cap),
    CapRule("payer_bank_risk_tier", _bank_risk_tier_cap),
    CapRule("bureau_problematic_share", _problematic_share_cap),
    CapRule("bureau_outstanding_amount", _outstanding_amount_cap),
    CapRule("bureau_disqualified", _disqualified_cap),
)


def base_amount_for_income(
    net_income: float,
    settings: EvaluationSettings = evaluation_settings,
) -> int:
    """
    Map net income to the base amount of its bracket.

    Args:
        net_income: Net monthly income
        settings: Evaluation settings (uses defaults if not provided)

    Returns:
        Base amount (0 = below every bracket)
    """
    for min_income, amount in settings.income_brackets:
        if net_income >= min_income:
            return amount
    return 0


def calculate_amount(
    profile: ApplicantProfile,
    bureau_result: StageResult,
    bank_result: StageResult,
    settings: EvaluationSettings = evaluation_settings,
    rules: Tuple[CapRule, ...] = CAP_RULES,
) -> AmountBreakdown:
    """
    Derive the maximum approvable amount with a full breakdown.

    Args:
        profile: The applicant
        bureau_result: Passing bureau stage result (reads its metrics)
        bank_result: Passing bank stage result (reads the bank risk tier)
        settings: Evaluation settings (uses defaults if not provided)
        rules: Ordered cap rules

    Returns:
        AmountBreakdown whose `amount` is the minimum of the base amount and
        every triggered cap, never negative
    """
    bank = bank_result.detail.get("bank") or {}
    ctx = CapContext(
        profile=profile,
        bank_risk_tier=bank.get("risk_tier"),
        problematic_pct=bureau_result.detail.get("problematic_pct", 0.0),
        total_amount=bureau_result.detail.get("total_amount", 0.0),
        disqualified=bool(bureau_result.detail.get("disqualified", False)),
    )

    base = base_amount_for_income(profile.net_income, settings)
    amount = base
    applied: List[CapApplication] = []

    for rule in rules:
        limit = rule.limit(ctx, settings)
        if limit is None:
            applied.append(CapApplication(rule=rule.name, limit=0, triggered=False))
            continue
        applied.append(CapApplication(rule=rule.name, limit=limit, triggered=True))
        amount = min(amount, limit)

    return AmountBreakdown(
        base_amount=base,
        caps=tuple(applied),
        amount=max(0, amount),
    )


def compute_max_amount(
    profile: ApplicantProfile,
    bureau_result: StageResult,
    bank_result: StageResult,
    settings: EvaluationSettings = evaluation_settings,
) -> int:
    """Maximum approvable amount; 0 means the applicant does not qualify."""
    return calculate_amount(profile, bureau_result, bank_result, settings).amount
