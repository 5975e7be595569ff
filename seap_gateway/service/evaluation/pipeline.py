"""
Evaluation Orchestrator for the SEAP loan eligibility pipeline.

This module sequences the complete evaluation:
1. Income stage
2. Delinquency registry stage
3. Credit bureau stage (via the identifier service)
4. Payer bank stage
5. Amount calculation
6. Mapping to approved / rejected / pending

Any stage failure short-circuits the chain; the stages never reached are
recorded with the "not evaluated" sentinel. `evaluate` never raises.
"""

import asyncio
import random
from typing import Awaitable, Callable, List, Optional

import structlog

from seap_gateway.domain.entities import (
    AmountBreakdown,
    ApplicantProfile,
    EvaluationOutcome,
    EvaluationResult,
    StageName,
    StageResult,
)
from seap_gateway.domain.interfaces import (
    BankDirectory,
    CreditBureauClient,
    DelinquencyRegistry,
)

from .amount import calculate_amount
from .settings import EvaluationSettings, evaluation_settings
from .stages import check_bank, check_bureau, check_delinquency, check_income

logger = structlog.get_logger(__name__)

STAGE_ORDER = (
    StageName.INCOME,
    StageName.DELINQUENCY,
    StageName.BUREAU,
    StageName.BANK,
)

MIN_AMOUNT_MESSAGE = "Applicant does not qualify for the minimum amount"
STAGE_ERROR_MESSAGE = "Internal error during {stage} validation"
BUREAU_ERROR_MESSAGE = "Technical error in credit bureau validation - pending manual review"
TECHNICAL_ERROR_MESSAGE = "Technical error during evaluation - pending manual review"


def seeded_rng(profile: ApplicantProfile) -> random.Random:
    """Random source seeded from the applicant's identifier."""
    return random.Random(profile.national_id)


class EvaluationPipeline:
    """
    Runs one applicant through every stage.

    Reference tables are injected read-only and shared between concurrent
    evaluations; everything else is local to a single `evaluate` call.
    """

    def __init__(
        self,
        bureau_client: CreditBureauClient,
        delinquency_registry: DelinquencyRegistry,
        bank_directory: BankDirectory,
        settings: EvaluationSettings = evaluation_settings,
        rng_factory: Callable[[ApplicantProfile], random.Random] = seeded_rng,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._bureau_client = bureau_client
        self._delinquency_registry = delinquency_registry
        self._bank_directory = bank_directory
        self._settings = settings
        self._rng_factory = rng_factory
        self._sleep = sleep

    async def evaluate(
        self,
        profile: ApplicantProfile,
        deadline: Optional[float] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> EvaluationOutcome:
        """
        Evaluate an applicant.

        Args:
            profile: The applicant
            deadline: Optional budget in seconds; when it elapses the bureau
                query is cancelled and the evaluation ends pending
            cancel: Optional caller-owned cancellation event

        Returns:
            Exactly one of approved, rejected or pending, with the audit
            trail of all four stages
        """
        log = logger.bind(national_id=profile.national_id, bank_id=profile.payer_bank_id)
        log.info("evaluation_started")

        trail: List[StageResult] = []
        timer = None
        if deadline is not None:
            cancel = cancel or asyncio.Event()
            timer = asyncio.get_running_loop().call_later(deadline, cancel.set)

        try:
            outcome = await self._run(profile, trail, cancel)
        except Exception as e:
            log.exception("evaluation_unexpected_error", error=str(e))
            outcome = self._finish(
                EvaluationResult.PENDING,
                trail,
                reason=TECHNICAL_ERROR_MESSAGE,
            )
        finally:
            if timer is not None:
                timer.cancel()

        log.info(
            "evaluation_completed",
            result=outcome.result.value,
            max_amount=outcome.max_amount,
            reason=outcome.reason,
        )
        return outcome

    async def _run(
        self,
        profile: ApplicantProfile,
        trail: List[StageResult],
        cancel: Optional[asyncio.Event],
    ) -> EvaluationOutcome:
        settings = self._settings

        income = self._run_stage(StageName.INCOME, check_income, profile, settings)
        trail.append(income)
        if not income.passed:
            return self._finish(EvaluationResult.REJECTED, trail, reason=income.message)

        await self._delay(settings.delinquency_delay_seconds)
        delinquency = self._run_stage(
            StageName.DELINQUENCY,
            check_delinquency,
            profile,
            self._delinquency_registry,
        )
        trail.append(delinquency)
        if not delinquency.passed:
            return self._finish(EvaluationResult.REJECTED, trail, reason=delinquency.message)

        bureau = await self._run_bureau_stage(profile, cancel)
        trail.append(bureau)
        if not bureau.passed:
            result = (
                EvaluationResult.PENDING
                if bureau.requires_manual_review
                else EvaluationResult.REJECTED
            )
            return self._finish(result, trail, reason=bureau.message)

        await self._delay(settings.bank_delay_seconds)
        bank = self._run_stage(
            StageName.BANK,
            check_bank,
            profile,
            self._bank_directory,
            self._rng_factory(profile),
            settings,
        )
        trail.append(bank)
        if not bank.passed:
            return self._finish(EvaluationResult.REJECTED, trail, reason=bank.message)

        breakdown = calculate_amount(profile, bureau, bank, settings)
        if breakdown.amount <= 0:
            return self._finish(
                EvaluationResult.REJECTED,
                trail,
                reason=MIN_AMOUNT_MESSAGE,
                amount_breakdown=breakdown,
            )

        return self._finish(
            EvaluationResult.APPROVED,
            trail,
            max_amount=breakdown.amount,
            amount_breakdown=breakdown,
        )

    def _run_stage(self, stage: StageName, check: Callable[..., StageResult], *args) -> StageResult:
        """Run a synchronous stage; an internal fault rejects, never pends."""
        try:
            return check(*args)
        except Exception as e:
            logger.exception("stage_unexpected_error", stage=stage.value, error=str(e))
            return StageResult(
                stage=stage,
                passed=False,
                message=STAGE_ERROR_MESSAGE.format(stage=stage.value),
                detail={"error": type(e).__name__},
            )

    async def _run_bureau_stage(
        self,
        profile: ApplicantProfile,
        cancel: Optional[asyncio.Event],
    ) -> StageResult:
        """Run the bureau stage; an internal fault is a technical failure."""
        try:
            return await check_bureau(profile, self._bureau_client, self._settings, cancel)
        except Exception as e:
            logger.exception("stage_unexpected_error", stage=StageName.BUREAU.value, error=str(e))
            return StageResult(
                stage=StageName.BUREAU,
                passed=False,
                message=BUREAU_ERROR_MESSAGE,
                detail={"error": "unexpected_error"},
                requires_manual_review=True,
            )

    async def _delay(self, seconds: float) -> None:
        """Artificial latency modelling the external lookups."""
        if seconds > 0:
            await self._sleep(seconds)

    @staticmethod
    def _finish(
        result: EvaluationResult,
        trail: List[StageResult],
        max_amount: Optional[int] = None,
        reason: Optional[str] = None,
        amount_breakdown: Optional[AmountBreakdown] = None,
    ) -> EvaluationOutcome:
        """Build the outcome, padding unreached stages with the sentinel."""
        reached = {stage.stage: stage for stage in trail}
        stages = tuple(
            reached.get(name) or StageResult.not_evaluated(name)
            for name in STAGE_ORDER
        )
        return EvaluationOutcome(
            result=result,
            stages=stages,
            max_amount=max_amount if result == EvaluationResult.APPROVED else None,
            reason=reason,
            amount_breakdown=amount_breakdown,
        )
