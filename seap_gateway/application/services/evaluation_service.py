"""Evaluation service - orchestrates the loan evaluation use case."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

import structlog

from seap_gateway.application.dto import (
    EvaluationHistoryResponse,
    EvaluationRequest,
    EvaluationResponse,
)
from seap_gateway.domain.entities import (
    EvaluationRecord,
    EvaluationResult,
    HistoryStats,
)
from seap_gateway.domain.exceptions import (
    EvaluationNotFoundException,
    InvalidEvaluationRequestException,
)
from seap_gateway.domain.interfaces import EvaluationHistoryRepository
from seap_gateway.service.evaluation import EvaluationPipeline

logger = structlog.get_logger(__name__)


class EvaluationService:
    """
    Application service for loan evaluation use cases.
    """

    EXPORT_VERSION = "1.0"

    def __init__(
        self,
        pipeline: EvaluationPipeline,
        history_repository: EvaluationHistoryRepository,
    ):
        self._pipeline = pipeline
        self._history = history_repository

    async def evaluate(self, request: EvaluationRequest) -> EvaluationResponse:
        """
        Evaluate an applicant and record the outcome in the history.

        Args:
            request: Applicant data plus the requesting operator

        Returns:
            EvaluationResponse with the result and full audit trail

        Raises:
            InvalidEvaluationRequestException: If request validation fails
        """
        errors = request.validate()
        if errors:
            raise InvalidEvaluationRequestException("; ".join(errors))

        profile = request.to_profile()
        log = logger.bind(
            operator_id=request.operator.id,
            national_id=profile.national_id,
        )
        log.info("evaluation_requested")

        outcome = await self._pipeline.evaluate(
            profile,
            deadline=request.deadline_seconds,
        )

        record = EvaluationRecord(
            applicant=profile,
            operator=request.operator,
            outcome=outcome,
        )
        await self._history.save(record)

        log.info(
            "evaluation_recorded",
            evaluation_id=str(record.id),
            result=outcome.result.value,
            max_amount=outcome.max_amount,
        )

        return EvaluationResponse.from_record(record)

    async def get_evaluation(self, evaluation_id: UUID) -> EvaluationResponse:
        """
        Get a specific evaluation by ID.

        Raises:
            EvaluationNotFoundException: If the evaluation is not in the history
        """
        record = await self._history.get_by_id(evaluation_id)
        if record is None:
            raise EvaluationNotFoundException(str(evaluation_id))
        return EvaluationResponse.from_record(record)

    async def get_history(
        self,
        result: Optional[EvaluationResult] = None,
        operator_id: Optional[int] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> EvaluationHistoryResponse:
        """Get the filtered evaluation history, newest first."""
        records = await self._history.list(
            result=result,
            operator_id=operator_id,
            date_from=date_from,
            date_to=date_to,
            search=search,
            limit=limit,
        )
        return EvaluationHistoryResponse.from_records(records)

    async def get_recent(self, limit: int = 5) -> EvaluationHistoryResponse:
        """Get the most recent evaluations."""
        records = await self._history.list(limit=limit)
        return EvaluationHistoryResponse.from_records(records)

    async def get_stats(self, operator_id: Optional[int] = None) -> HistoryStats:
        """Get aggregate statistics over the history."""
        return await self._history.stats(operator_id=operator_id)

    async def export_history(self) -> Dict[str, Any]:
        """Export every stored evaluation."""
        records = await self._history.list()
        return {
            "evaluations": [record.to_dict() for record in records],
            "export_date": datetime.now(timezone.utc).isoformat(),
            "version": self.EXPORT_VERSION,
        }

    async def clear_history(self) -> int:
        """Delete every stored evaluation."""
        removed = await self._history.clear()
        logger.info("history_cleared", removed=removed)
        return removed
