"""
Rule Stages for the SEAP loan eligibility pipeline.

Each stage is a function of the applicant (plus injected read-only
collaborators) returning a StageResult. No stage mutates shared state.
The bureau stage is the only asynchronous one, since it waits on the
credit bureau client.
"""

import asyncio
import random
from typing import Optional

import structlog

from seap_gateway.domain.entities import (
    ApplicantProfile,
    EmploymentCategory,
    StageName,
    StageResult,
)
from seap_gateway.domain.exceptions import (
    BankNotFoundException,
    BureauException,
    InvalidIdentifierException,
)
from seap_gateway.domain.interfaces import (
    BankDirectory,
    CreditBureauClient,
    DelinquencyRegistry,
)

from .identifiers import resolve_tax_id
from .settings import EvaluationSettings, evaluation_settings

logger = structlog.get_logger(__name__)


def check_income(
    profile: ApplicantProfile,
    settings: EvaluationSettings = evaluation_settings,
) -> StageResult:
    """
    Reject applicants whose net income is below the configured minimum.

    Args:
        profile: The applicant
        settings: Evaluation settings (uses defaults if not provided)

    Returns:
        Passing result when income >= minimum_income
    """
    minimum = settings.minimum_income

    if profile.net_income < minimum:
        return StageResult(
            stage=StageName.INCOME,
            passed=False,
            message=f"Insufficient income. Minimum required: ${minimum:,.0f}",
            detail={"minimum_income": minimum, "net_income": profile.net_income},
        )

    return StageResult(
        stage=StageName.INCOME,
        passed=True,
        message="Income meets the minimum requirement",
        detail={"minimum_income": minimum, "net_income": profile.net_income},
    )


def check_delinquency(
    profile: ApplicantProfile,
    registry: DelinquencyRegistry,
) -> StageResult:
    """
    Reject applicants with an active credit in the delinquency registry.

    Any active debt fails the stage regardless of its amount; the amount
    is carried in the detail for the audit trail.
    """
    record = registry.find_by_national_id(profile.national_id)

    if record is not None and record.has_active_debt:
        return StageResult(
            stage=StageName.DELINQUENCY,
            passed=False,
            message="Applicant has an active credit in the delinquency registry",
            detail={"outstanding_amount": record.amount},
        )

    return StageResult(
        stage=StageName.DELINQUENCY,
        passed=True,
        message="No active credits in the delinquency registry",
        detail={"outstanding_amount": 0},
    )


async def check_bureau(
    profile: ApplicantProfile,
    client: CreditBureauClient,
    settings: EvaluationSettings = evaluation_settings,
    cancel: Optional[asyncio.Event] = None,
) -> StageResult:
    """
    Classify the applicant's credit bureau situation.

    Decision Logic:
        - Malformed identifier: rejected (not a review case)
        - Technical failure of the client: failed with manual review
        - Tier-5 entity present: rejected outright under the default
          "reject" policy; passes (and caps the amount) under "cap"
        - 40% or more of reporting entities in tiers 3-5: rejected
        - Otherwise: passed

    Args:
        profile: The applicant
        client: Credit bureau client
        settings: Evaluation settings (uses defaults if not provided)
        cancel: Optional cancellation event forwarded to the client
    """
    try:
        tax_id = resolve_tax_id(profile.national_id)
    except InvalidIdentifierException as e:
        return StageResult(
            stage=StageName.BUREAU,
            passed=False,
            message=f"Invalid identifier: {e.message}",
            detail={"error": e.code, "national_id": profile.national_id},
        )

    log = logger.bind(tax_id=tax_id)

    try:
        summary = await client.query(tax_id, cancel=cancel)
    except BureauException as e:
        log.warning("bureau_stage_technical_failure", error=e.code, message=e.message)
        detail = {"error": e.code, "tax_id": tax_id}
        last_error = getattr(e, "last_error", None)
        if last_error is not None:
            detail["last_error"] = last_error.code
        return StageResult(
            stage=StageName.BUREAU,
            passed=False,
            message="Technical error querying the credit bureau - pending manual review",
            detail=detail,
            requires_manual_review=True,
        )

    problematic_pct = summary.problematic_pct
    detail = {
        "tax_id": tax_id,
        "summary": summary.to_dict(),
        "problematic_pct": problematic_pct,
        "problematic_count": summary.problematic_count,
        "total_entities": summary.total_entities,
        "total_amount": summary.total_amount,
        "disqualified": summary.disqualified,
    }

    if summary.disqualified and settings.disqualified_policy == "reject":
        return StageResult(
            stage=StageName.BUREAU,
            passed=False,
            message="Applicant reported in tier 5 (unrecoverable) by the credit bureau",
            detail={**detail, "max_amount_cap": settings.disqualified_cap},
        )

    if problematic_pct >= settings.problematic_reject_pct:
        return StageResult(
            stage=StageName.BUREAU,
            passed=False,
            message=f"High share of problematic bureau tiers: {problematic_pct:.1f}%",
            detail=detail,
        )

    return StageResult(
        stage=StageName.BUREAU,
        passed=True,
        message=f"Favorable bureau situation: {problematic_pct:.1f}% problematic tiers",
        detail=detail,
    )


def check_bank(
    profile: ApplicantProfile,
    directory: BankDirectory,
    rng: random.Random,
    settings: EvaluationSettings = evaluation_settings,
) -> StageResult:
    """
    Validate the applicant's payer bank.

    Fails for an unsupported bank, an account-requiring bank paired with
    private-sector employment, a restricted bank with income at or below
    the restricted threshold, a bank at or above the rejected risk tier, or
    an account-requiring bank without an account number.

    The final account-blocked draw is a placeholder for a real account
    status lookup; it only applies to banks that require an account.
    """
    try:
        bank = directory.require(profile.payer_bank_id)
    except BankNotFoundException as e:
        return StageResult(
            stage=StageName.BANK,
            passed=False,
            message="Payer bank not supported",
            detail={"bank_id": profile.payer_bank_id, "error": e.code},
        )

    detail = {"bank": bank.to_dict()}

    if bank.requires_account and profile.employment == EmploymentCategory.PRIVATE:
        return StageResult(
            stage=StageName.BANK,
            passed=False,
            message=f"{bank.name} does not accept private-sector employees",
            detail=detail,
        )

    threshold = settings.restricted_bank_min_income
    if bank.has_restrictions and profile.net_income <= threshold:
        return StageResult(
            stage=StageName.BANK,
            passed=False,
            message=f"{bank.name} requires income above ${threshold:,.0f}",
            detail={**detail, "required_income": threshold},
        )

    if bank.risk_tier >= settings.bank_reject_risk_tier:
        return StageResult(
            stage=StageName.BANK,
            passed=False,
            message=f"{bank.name} is in risk tier {bank.risk_tier} - not eligible",
            detail=detail,
        )

    if bank.requires_account and not profile.has_account_number:
        return StageResult(
            stage=StageName.BANK,
            passed=False,
            message=f"{bank.name} requires an account number",
            detail=detail,
        )

    if bank.requires_account and rng.random() < settings.account_blocked_probability:
        return StageResult(
            stage=StageName.BANK,
            passed=False,
            message="Bank account blocked",
            detail={**detail, "account_blocked": True},
        )

    return StageResult(
        stage=StageName.BANK,
        passed=True,
        message=f"{bank.name} eligible",
        detail=detail,
    )
